"""
Pennant value kinds and text coercion.

Scope
- Kind: the closed set of value kinds a flag can carry (text, integer, decimal,
  boolean). Every flag record is tagged with exactly one kind.
- coerce(kind, text): convert one raw token into the kind's Python value using
  a converter table indexed by kind. Failures raise CoercionError carrying a
  FailureReason, never a bare ValueError, so the parser can report them.
- check(kind, value, validator): run a caller-supplied validator after a
  successful coercion (text/integer/decimal only; booleans have no validator).
- render(kind, value): canonical text form, the inverse of coerce().

Accepted spellings
- integer: optional sign and ASCII digits, within the signed 64-bit range.
- decimal: optional sign, digits with optional fraction and exponent, or the
  literals inf/infinity/nan (case-insensitive).
- boolean: 1/t/true/y/yes/on and 0/f/false/n/no/off (case-insensitive).

No surrounding whitespace or digit separators are accepted, even where Python's
int()/float() would allow them.
"""
import math
import re
from enum import StrEnum


class Kind(StrEnum):
    """
    value kind of a flag; the string value is what help output prints as "type".
    """
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"

    @property
    def pytype(self):
        """
        the Python type stored in slots of this kind.
        """
        return _PYTYPES[self]


_PYTYPES = {
    Kind.TEXT: str,
    Kind.INTEGER: int,
    Kind.DECIMAL: float,
    Kind.BOOLEAN: bool,
}


class FailureReason(StrEnum):
    """
    why a raw token could not become a flag value.

    The string value is the fragment used in diagnostics ("... is not an integer number").
    """
    NOT_AN_INTEGER = "not an integer number"
    NOT_A_DECIMAL = "not a decimal number"
    NOT_A_BOOLEAN = "not a boolean"
    REJECTED = "not valid"


class CoercionError(ValueError):
    """
    raised by coerce()/check() when a token cannot be used as a flag value.

    Attributes
    - reason: FailureReason
    - text: the offending token (or the rendered value for validator rejections)
    - detail: optional validator message
    """

    def __init__(self, reason, text, /, detail=None):
        super().__init__(reason, text, detail)
        self.reason = reason
        self.text = text
        self.detail = detail

    def __str__(self):
        message = "%r is %s" % (self.text, self.reason)
        if self.detail:
            message += " (%s)" % self.detail
        return message


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_TRUTHS = frozenset({"1", "t", "true", "y", "yes", "on"})
_FALSEHOODS = frozenset({"0", "f", "false", "n", "no", "off"})


def _to_text(text):
    return text


def _to_integer(text):
    if not _INTEGER.fullmatch(text):
        raise CoercionError(FailureReason.NOT_AN_INTEGER, text)
    value = int(text, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        raise CoercionError(FailureReason.NOT_AN_INTEGER, text, "out of the 64-bit range")
    return value


def _to_decimal(text):
    if not _DECIMAL.fullmatch(text):
        raise CoercionError(FailureReason.NOT_A_DECIMAL, text)
    value = float(text)
    # finite literals such as 1e400 overflow silently in float()
    if math.isinf(value) and "inf" not in text.lower():
        raise CoercionError(FailureReason.NOT_A_DECIMAL, text, "out of range")
    return value


def _to_boolean(text):
    lowered = text.lower()
    if lowered in _TRUTHS:
        return True
    if lowered in _FALSEHOODS:
        return False
    raise CoercionError(FailureReason.NOT_A_BOOLEAN, text)


_CONVERTERS = {
    Kind.TEXT: _to_text,
    Kind.INTEGER: _to_integer,
    Kind.DECIMAL: _to_decimal,
    Kind.BOOLEAN: _to_boolean,
}


def coerce(kind, text, /):
    """
    convert a raw token into a value of the given kind.

    raises
    - TypeError: kind is not a Kind or text is not a string (programmer error).
    - CoercionError: the token is not a valid spelling for the kind.
    """
    if not isinstance(kind, Kind):
        raise TypeError("coerce() first argument must be a kind")
    if not isinstance(text, str):
        raise TypeError("coerce() second argument must be a string")
    return _CONVERTERS[kind](text)


def check(kind, value, validator=None, /):
    """
    run a validator over an already-coerced value and return the value.

    A validator accepts by returning anything other than False or an exception
    instance. It rejects by returning False, returning an exception, or raising
    ValueError/TypeError; the exception text becomes the CoercionError detail.
    Boolean values are never validated.
    """
    if validator is None or kind is Kind.BOOLEAN:
        return value
    try:
        verdict = validator(value)
    except (ValueError, TypeError) as exception:
        raise CoercionError(FailureReason.REJECTED, render(kind, value), str(exception) or None) from exception
    if verdict is False:
        raise CoercionError(FailureReason.REJECTED, render(kind, value))
    if isinstance(verdict, BaseException):
        raise CoercionError(FailureReason.REJECTED, render(kind, value), str(verdict) or None)
    return value


def convert(kind, text, validator=None, /):
    """
    coerce() then check(); the single entry point the parser uses for values.
    """
    return check(kind, coerce(kind, text), validator)


def render(kind, value, /):
    """
    canonical text form of a value; coerce(kind, render(kind, value)) == value.
    """
    match kind:
        case Kind.BOOLEAN:
            return "true" if value else "false"
        case Kind.DECIMAL:
            return repr(float(value))
        case Kind.INTEGER:
            return str(int(value))
        case Kind.TEXT:
            return value
    raise TypeError("render() first argument must be a kind")


def conform(kind, value, /):
    """
    check that a default value fits a kind and return it in the slot's type.

    integers are widened to float for decimal flags; booleans are refused for
    integer and decimal flags even though bool subclasses int.
    """
    if isinstance(value, bool) and kind is not Kind.BOOLEAN:
        raise TypeError(f"{kind} flag default cannot be a boolean")
    if kind is Kind.DECIMAL and isinstance(value, int):
        return float(value)
    if not isinstance(value, kind.pytype):
        raise TypeError(f"{kind} flag default must be {kind.pytype.__name__!r}, not {type(value).__name__!r}")
    return value


__all__ = (
    "Kind",
    "FailureReason",
    "CoercionError",
    "coerce",
    "check",
    "convert",
    "render",
    "conform",
)
