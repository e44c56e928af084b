"""
Pennant faults (parse errors and diagnostics) and rendering.

Scope
- FaultCode: stable numeric identifiers for every condition the parser reports.
- Severity: how a fault affects the run (error, warning, info).
- CommandException / CommandWarning: base types carrying a message plus options,
  able to render themselves through rich and to surface themselves (trigger).
- trigger(): central entry point to surface a fault with runtime options.
- getdoc(): optional long description for a code, looked up in the host app.

Taxonomy
- errors (fatal, the scan stops and the command's on_error hook runs)
  • UnknownFlagError, GroupedNonBooleanError
- warnings (recoverable, the flag keeps its default and the scan continues)
  • MissingValueWarning, InvalidValueWarning
- info
  • NotReferredWarning: a declared flag the user never mentioned.

Every fault exposes the triple the diagnostics sink consumes:
severity, flag (the flag id, e.g. "-v --verbose" or "[0] path") and message.

Integration
- The parser builds faults and hands them to Command.report(); errors also go
  to the command's on_error hook.
- Outside shell mode errors are raised and warnings go through warnings.warn;
  in shell mode both are printed on stderr via rich.
- Host overrides are read from __main__: __prog__, __styles__, __codes__, __docs__.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum, StrEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - resolution errors (21xxx): UNKNOWN_FLAG, GROUPED_NON_BOOLEAN
    - value warnings (22xxx): MISSING_VALUE, INVALID_VALUE
    - informational (23xxx): NOT_REFERRED

    normalize() lets the host remap codes to labels through __codes__ in __main__.
    """
    # --- resolution errors (21xxx) ---
    UNKNOWN_FLAG        = 21101
    GROUPED_NON_BOOLEAN = 21102

    # --- value warnings (22xxx) ---
    MISSING_VALUE       = 22101
    INVALID_VALUE       = 22102

    # --- informational (23xxx) ---
    NOT_REFERRED        = 23101

    def normalize(self):
        """
        host-normalized label for this code (the numeric value when unmapped).
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


def _render(fault, palette, /):
    """
    build the rich renderable shared by errors and warnings.

    layout: "[ prog — code | title ]", then the message, then " → hint".
    With fancy=True the body goes inside a Panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    tool = options.get("tool")
    prog = getattr(main, "__prog__", tool.root.name if tool is not None else "pennant")
    code = options.get("code", fault.code)

    header = Text.assemble(
        "[ ",
        text(prog, styler("prog-name")),
        " — ",
        text(code.normalize(), styler("code")),
        " | ",
        text(options.get("title", fault.title).title(), styler("title")),
        " ]"
    )
    message = text(fault.message, styler("message"))
    hint = Text("")
    if options.get("hint"):
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(options["hint"], styler("hint")))

    if fancy:
        return Panel(Group(message, hint), title=header, title_align="left", width=getattr(tool, "width", None))

    return Group(header, message, hint)


class CommandException(Exception):
    """
    fatal parse fault; the scan stops at the token that caused it.
    """
    severity = Severity.ERROR
    code = Unset
    title = "error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def flag(self):
        return self.options.get("flag")

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownFlagError(CommandException):
    code = FaultCode.UNKNOWN_FLAG
    title = "unknown flag"


class GroupedNonBooleanError(CommandException):
    code = FaultCode.GROUPED_NON_BOOLEAN
    title = "non-boolean flag inside a group"


class CommandWarning(ABC, Warning):
    """
    recoverable or informational fault; the affected flag keeps its default.
    """
    severity = Severity.WARNING
    code = Unset
    title = "warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def flag(self):
        return self.options.get("flag")

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingValueWarning(CommandWarning):
    code = FaultCode.MISSING_VALUE
    title = "missing value"


class InvalidValueWarning(CommandWarning):
    code = FaultCode.INVALID_VALUE
    title = "invalid value"

    @property
    def reason(self):
        return self.options.get("reason")


class NotReferredWarning(CommandWarning):
    severity = Severity.INFO
    code = FaultCode.NOT_REFERRED
    title = "flag not referred"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ (see the base classes).
    - options are merged into a copy of the fault before triggering.
    - typical options: tool, shell, fancy, colorful, title, code, hint, flag, index.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    documentation for a fault code from the host's __docs__ mapping, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "Severity",
    "CommandException",
    "UnknownFlagError",
    "GroupedNonBooleanError",
    "CommandWarning",
    "MissingValueWarning",
    "InvalidValueWarning",
    "NotReferredWarning",
    "trigger",
    "getdoc",
)
