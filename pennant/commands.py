"""
Pennant command layer: declare flags, nest subcommands, parse prompts.

What this module provides
- Command: one node of the subcommand tree.
  • Owns a flag registry (named + wild) and a mapping of child commands.
  • Declares typed flags and hands back the flag record, whose .value is the
    slot the parser writes into.
  • Dispatches to a child when the first token is the child's name.
  • Runs the bare/help/error hooks and reports diagnostics.
- Outcome / Result: how a parse pass completed and what it left behind.

Quick start
    from pennant import Command

    tool = Command("tool", version="1.0.0", shell=True)
    count = tool.integer("c", "count", "how many times", 1)
    loud = tool.boolean("l", "loud", "shout")
    source = tool.wild_text("source", "file to read")

    build = tool.command("build", descr="compile things")
    jobs = build.integer("j", "jobs", "parallel jobs", 4)

    result = tool.parse("-lc 3 notes.txt")
    assert (count.value, loud.value, source.value) == (3, True, "notes.txt")

Runtime options (inherited from the parent when unset)
- shell: default hooks may print and terminate the process; faults are
  printed instead of raised/warned.
- fancy: panel chrome around help and faults.
- colorful: styled output.
- verbose: surface warnings as they happen (they are always collected).
- width: help wrap width (80).

Hooks
- on_bare(): the command was reached with no tokens.
- on_help(): the help flag ended up true.
- on_error(fault): a fatal fault stopped the scan.
- on_diagnostic(fault): receives every fault instead of the default surfacing.
"""
import copy
import enum
import functools
import operator
import os.path
import re
import shlex
import sys
from collections import namedtuple
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .faults import *
from .flags import NamedFlag, WildFlag
from .kinds import Kind
from .parser import Parser
from .registry import Registry
from .usage import render
from .utils import *


class CommandType(type):
    """
    Metaclass exposing command metadata as read-only properties.

    Conventions
    - __typename__ is derived from the class name ("Command" -> "command").
    - __displayable__ (if set) narrows which properties __rich_repr__ yields.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Outcome(enum.Enum):
    """
    how a parse pass completed.
    """
    OK = "ok"
    BARE = "bare"
    HELP = "help"
    FATAL = "fatal"


Result = namedtuple("Result", (
    "outcome",
    "command",
    "remaining",
    "fault",
    "diagnostics",
))
Result.__doc__ = """
Completion of Command.parse().

- outcome: Outcome member.
- command: the node that actually scanned the tokens (a child after dispatch).
- remaining: positional tokens no wild flag took, in order.
- fault: the fatal fault when outcome is FATAL, otherwise None.
- diagnostics: every fault reported during the pass, in order.
"""


def _process_strings(cls, metadata):
    """
    Validate and trim name/version/descr; empty strings are rejected.
    """
    for name in ("name", "version", "descr"):
        if not isinstance(object := metadata[name], str | Text | Unset):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        elif isinstance(object, str) and not (object := object.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
        metadata[name] = coalesce(object)

    if re.search(r"\s", name := str(metadata["name"])) or name.startswith("-"):
        raise ValueError(f"{cls.__typename__} 'name' must be a word not starting with '-'")


def _program():
    """
    Name of the running program, reshaped into a valid command name.
    """
    name = os.path.basename(sys.argv[0] if sys.argv else "").strip()
    if not name or name.startswith("-"):
        return "pennant"
    return re.sub(r"\s+", "-", name)


def _process_options(cls, metadata):
    for name in ("shell", "fancy", "colorful", "verbose"):
        metadata[name] = bool(metadata[name])

    if not isinstance(width := metadata["width"], int) or isinstance(width, bool):
        raise TypeError(f"{cls.__typename__} 'width' must be an integer")
    elif width <= 20:
        raise ValueError(f"{cls.__typename__} 'width' must be greater than 20")


def _attach_to_parent(self, parent):
    """
    Register this command under its parent, enforcing unique names.
    """
    if getattr(parent, "_children", {}).setdefault(name := str(self.name), self) is self:
        return

    typeof = "subcommand" if parent.parent else "command"
    raise ValueError(f"{type(self).__typename__} {typeof} name {name!r} is already in use")


def _tokenize(prompt):
    """
    Normalize a prompt into a list of tokens.

    - Unset: sys.argv[1:].
    - str: shell-like string split with shlex.split.
    - Iterable[str]: used as-is (empty strings are valid values).
    """
    if prompt is Unset:
        return sys.argv[1:]
    elif isinstance(prompt, str):
        return shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class Command(metaclass=CommandType):
    """
    Node of the subcommand tree with its own flag namespace.

    Lifecycle
    - construct (a help flag -h/--help is registered automatically),
    - declare flags and children,
    - parse() once or more; read the flag records' .value afterwards.

    Notes
    - Re-parsing resets the cursors, the overflow list and the diagnostics;
      flag slots and referred states carry over from earlier passes.
    - The parser never terminates the process; only the default hooks do, and
      only in shell mode.
    """

    __introspectable__ = (
        "name",
        "version",
        "descr",
        "parent",
        "children",
        "registry",
        "shell",
        "fancy",
        "colorful",
        "verbose",
        "width",
    )

    __displayable__ = (
        "name",
        "version",
        "descr",
        "parent",
        "children",
        "shell",
        "fancy",
        "colorful",
        "verbose",
    )

    def __init__(
            self,
            name=Unset,
            /,
            parent=Unset,
            *,
            version=Unset,
            descr=Unset,
            shell=Unset,
            fancy=Unset,
            colorful=Unset,
            verbose=Unset,
            width=Unset,
    ):
        """
        Parameters
        - name: str | Unset
          Command name; the root defaults to the basename of sys.argv[0]
          ("pennant" when it is empty or starts with '-', whitespace runs
          become '-').
        - parent: Command | Unset
          Parent under which to attach this command (unique names per parent).
        - version, descr: str | Text | Unset
          Shown in the help header and in the parent's commands section.
        - shell, fancy, colorful, verbose: bool | Unset
          Runtime options; Unset inherits from the parent (or False).
        - width: int | Unset
          Help wrap width; Unset inherits from the parent (or 80).

        Raises
        - TypeError/ValueError on invalid metadata or a child name already in use.
        """
        if not isinstance(parent, Command | Unset):
            raise TypeError(f"{type(self).__typename__} 'parent' must be a command")

        metadata = {
            "name": coalesce(name, _program()),
            "version": version,
            "descr": descr,
            "parent": parent,
            "children": {},
            "registry": Registry(),
            "shell": coalesce(shell, getattr(parent, "shell", False)),
            "fancy": coalesce(fancy, getattr(parent, "fancy", False)),
            "colorful": coalesce(colorful, getattr(parent, "colorful", False)),
            "verbose": coalesce(verbose, getattr(parent, "verbose", False)),
            "width": coalesce(width, getattr(parent, "width", 80)),
        }
        _process_strings(type(self), metadata)
        _process_options(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, coalesce(object))
        self._on_bare = None
        self._on_error = None
        self._on_help = None
        self._on_diagnostic = None
        self._remaining = []
        self._diagnostics = []

        _attach_to_parent(self, self.parent)
        self.boolean("h", "help", "show the help")

    @property
    def root(self):
        """
        Return the topmost command of the tree.
        """
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the commands from the root down to this one.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(reversed(path))

    @property
    def remaining(self):
        """
        positional tokens of the last pass that no wild flag took.
        """
        return tuple(self._remaining)

    @property
    def diagnostics(self):
        return tuple(self._diagnostics)

    def command(self, name, /, **options):
        """
        Create a child command with parent=self injected.
        """
        return type(self)(name, self, **options)

    # ── declarations ──────────────────────────────────────────────────────

    def named(self, kind, /, short=Unset, long=Unset, help="", default=Unset, validator=Unset):
        """
        Declare a named flag and return its record.
        """
        return self._registry.add_named(NamedFlag(kind, short, long, help, default, validator))

    def wild(self, kind, placeholder, /, help="", default=Unset, validator=Unset):
        """
        Declare the next positional flag and return its record.
        """
        index = len(self._registry.wild)
        return self._registry.add_wild(WildFlag(kind, index, placeholder, help, default, validator))

    def text(self, short=Unset, long=Unset, help="", default=Unset, validator=Unset):
        return self.named(Kind.TEXT, short, long, help, default, validator)

    def integer(self, short=Unset, long=Unset, help="", default=Unset, validator=Unset):
        return self.named(Kind.INTEGER, short, long, help, default, validator)

    def decimal(self, short=Unset, long=Unset, help="", default=Unset, validator=Unset):
        return self.named(Kind.DECIMAL, short, long, help, default, validator)

    def boolean(self, short=Unset, long=Unset, help="", default=Unset):
        return self.named(Kind.BOOLEAN, short, long, help, default)

    def wild_text(self, placeholder, help="", default=Unset, validator=Unset):
        return self.wild(Kind.TEXT, placeholder, help, default, validator)

    def wild_integer(self, placeholder, help="", default=Unset, validator=Unset):
        return self.wild(Kind.INTEGER, placeholder, help, default, validator)

    def wild_decimal(self, placeholder, help="", default=Unset, validator=Unset):
        return self.wild(Kind.DECIMAL, placeholder, help, default, validator)

    def no_help(self):
        """
        Remove the automatic -h/--help flag (no-op when already removed).
        """
        if (index := self._registry.help_index()) is not None:
            self._registry.remove_named(index)

    # ── hooks ─────────────────────────────────────────────────────────────

    def _hook(self, name, callback):
        if not callable(callback):
            raise TypeError(f"{type(self).__typename__} {name} hook must be callable")
        setattr(self, "_" + name, callback)
        return callback

    def on_bare(self, callback, /):
        """
        Set the callable run when the command is reached with no tokens.
        Returns the callable, so it works as a decorator.
        """
        return self._hook("on_bare", callback)

    def on_error(self, callback, /):
        """
        Set the callable run with the fatal fault that stopped a scan.
        """
        return self._hook("on_error", callback)

    def on_help(self, callback, /):
        return self._hook("on_help", callback)

    def on_diagnostic(self, callback, /):
        """
        Set the sink receiving every fault (severity, flag and message are
        available on the fault) in place of the default surfacing.
        """
        return self._hook("on_diagnostic", callback)

    def _bare(self):
        Console().print("%s ran without any arguments" % " ".join(step.name for step in self.path))
        self.print_usage()
        if self.shell:
            sys.exit(0)

    def _help(self):
        self.print_usage()
        if self.shell:
            sys.exit(0)

    def _error(self, fault):
        if self.shell:
            self.print_usage(stderr=True)
        trigger(fault)

    # ── diagnostics ───────────────────────────────────────────────────────

    def report(self, fault, /):
        """
        Record a fault raised while parsing this command and surface it.

        The fault is stamped with this command and its runtime options, kept
        in the diagnostics of the pass, then handed to on_diagnostic when set.
        Otherwise warnings are surfaced through trigger() when verbose is on;
        errors are left to the on_error hook.

        Returns the stamped fault.
        """
        if not isinstance(fault, CommandException | CommandWarning):
            raise TypeError("report() argument must be a command fault")
        fault = copy.replace(
            fault,
            tool=self,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
        )
        self._diagnostics.append(fault)
        if self._on_diagnostic is not None:
            self._on_diagnostic(fault)
        elif isinstance(fault, CommandWarning) and self.verbose:
            trigger(fault)
        return fault

    # ── parsing ───────────────────────────────────────────────────────────

    def _parse(self, tokens, offset):
        if tokens and (child := self._children.get(tokens[0])) is not None:
            return child._parse(tokens[1:], offset + 1)

        self._remaining = []
        self._diagnostics = []

        if not tokens:
            (self._on_bare or self._bare)()
            return Result(Outcome.BARE, self, (), None, ())

        # help is per pass; other slots keep their values
        if (index := self._registry.help_index()) is not None:
            self._registry.named[index].reset()

        parser = Parser(self, tokens, offset)
        fault = parser.run()
        self._remaining = parser.remaining

        if fault is not None:
            fault = self.report(fault)
            (self._on_error or self._error)(fault)
            return Result(Outcome.FATAL, self, self.remaining, fault, self.diagnostics)

        if index is not None and self._registry.named[index].value is True:
            (self._on_help or self._help)()
            return Result(Outcome.HELP, self, self.remaining, None, self.diagnostics)

        return Result(Outcome.OK, self, self.remaining, None, self.diagnostics)

    def parse(self, prompt=Unset, /):
        """
        Parse a prompt against this command (or the child it names first).

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence.

        Returns
        - Result describing the pass.

        Raises
        - TypeError on an invalid prompt.
        - The fatal fault itself, when the default on_error hook runs outside
          shell mode.
        """
        return self._parse(_tokenize(prompt), 0)

    # ── help ──────────────────────────────────────────────────────────────

    def usage(self):
        """
        Return the rich renderable of this command's help.
        """
        return render(self)

    def print_usage(self, *, stderr=False):
        console = Console(stderr=stderr)
        console.print(render(self, console))


__all__ = (
    "Command",
    "Outcome",
    "Result",
)

del CommandType
