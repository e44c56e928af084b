"""
Pennant token classification.

    "--name"  -> (LONG, "name")
    "-abc"    -> (SHORT, "abc")      several characters form a cluster
    "-"       -> (POSITIONAL, "-")   conventionally stdin/stdout
    "value"   -> (POSITIONAL, "value")

"--" alone classifies as LONG with an empty name and never matches a flag.
"""
from enum import Enum


class TokenKind(Enum):
    SHORT = "short"
    LONG = "long"
    POSITIONAL = "positional"


def classify(token, /):
    """
    return (kind, name) for a raw token; name has its dash prefix stripped.
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")
    if token.startswith("--"):
        return TokenKind.LONG, token[2:]
    if token.startswith("-") and len(token) > 1:
        return TokenKind.SHORT, token[1:]
    return TokenKind.POSITIONAL, token


def positional(token, /):
    """
    True when the token would be consumed as a value rather than a flag.
    """
    return classify(token)[0] is TokenKind.POSITIONAL


__all__ = (
    "TokenKind",
    "classify",
    "positional",
)
