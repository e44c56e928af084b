"""
Pennant default command: module-level functions over one implicit root.

For scripts that need a single flat (or lightly nested) command line:

    import pennant.default as cli

    cli.set_version("1.0.0")
    verbose = cli.boolean("v", "verbose", "talk more")
    target = cli.wild_text("target", "where to go")
    cli.parse()

    if verbose.value:
        print("going to", target.value, "leftovers:", cli.remaining())

The root is named after sys.argv[0] until set_name() renames it; it is built on
first use and lives until reset().
"""
import re

from .commands import Command
from .utils import *

_root = None
_result = None


def root():
    """
    the implicit root command, created on first use.
    """
    global _root
    if _root is None:
        _root = Command()
    return _root


def reset():
    """
    drop the implicit root and the last result (a fresh root is built on next use).
    """
    global _root, _result
    _root = _result = None


def _delegate(name):
    @rename(name)
    def delegate(*args, **kwargs):
        return getattr(root(), name)(*args, **kwargs)
    delegate.__doc__ = getattr(Command, name).__doc__
    return delegate


named = _delegate("named")
wild = _delegate("wild")
text = _delegate("text")
integer = _delegate("integer")
decimal = _delegate("decimal")
boolean = _delegate("boolean")
wild_text = _delegate("wild_text")
wild_integer = _delegate("wild_integer")
wild_decimal = _delegate("wild_decimal")
command = _delegate("command")
no_help = _delegate("no_help")
on_bare = _delegate("on_bare")
on_error = _delegate("on_error")
on_help = _delegate("on_help")
on_diagnostic = _delegate("on_diagnostic")
usage = _delegate("usage")
print_usage = _delegate("print_usage")


def parse(prompt=Unset, /):
    """
    parse the prompt (sys.argv[1:] when omitted) against the implicit root.
    """
    global _result
    _result = root().parse(prompt)
    return _result


def current():
    """
    the command the last parse ended in (the root before any parse).
    """
    return _result.command if _result is not None else root()


def remaining():
    """
    positional tokens of the last parse that no wild flag took.
    """
    return _result.remaining if _result is not None else ()


def _sanitize(name, object):
    if not isinstance(object, str):
        raise TypeError(f"{name}() argument must be a string")
    elif not (object := object.strip()):
        raise ValueError(f"{name}() argument cannot be empty")
    return object


def set_name(name, /):
    """
    rename the implicit root (shown in help and in fault headers).
    """
    name = _sanitize("set_name", name)
    if re.search(r"\s", name) or name.startswith("-"):
        raise ValueError("set_name() argument must be a word not starting with '-'")
    root()._name = name


def set_version(version, /):
    """
    set the version shown next to the name in the help header.
    """
    root()._version = _sanitize("set_version", version)


def name():
    """
    "name version" of the implicit root (just the name without a version).
    """
    return " ".join(filter(None, (root().name, root().version)))


__all__ = (
    "root",
    "reset",
    "named",
    "wild",
    "text",
    "integer",
    "decimal",
    "boolean",
    "wild_text",
    "wild_integer",
    "wild_decimal",
    "command",
    "no_help",
    "on_bare",
    "on_error",
    "on_help",
    "on_diagnostic",
    "usage",
    "print_usage",
    "parse",
    "current",
    "remaining",
    "set_name",
    "set_version",
    "name",
)
