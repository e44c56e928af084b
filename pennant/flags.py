r"""
Pennant flag records.

Overview
- Flag: the shared record every flag is made of.
  • kind: Kind tag (text, integer, decimal, boolean).
  • value: the slot, owned by the record, always holding a value of the kind's
    Python type (initialised to the default).
  • default: the declared default, kept for help output.
  • validator: optional callable applied after coercion (never for booleans).
  • referred: True once the flag was matched by a token in a parse pass, even
    when the supplied value was rejected.
- NamedFlag: reached through a short ("-v") and/or long ("--verbose") name.
- WildFlag: reached by position among the non-flag tokens; never boolean.

Introspection & representation
- FlagType metaclass exposes the names listed in __introspectable__ as
  read-only properties and provides stable __repr__/__rich_repr__.

Metadata (sanitized on construction)
- help: str, trimmed ("" when omitted).
- default: must fit the kind (ints widen to float for decimals; booleans are
  refused for integer/decimal). Omitted defaults use the kind's zero value.
- validator: None or a callable; boolean flags cannot have one.
- short: one printable, non-space character other than '-'.
- long: a word without spaces, '=' or a leading '-'.
- placeholder: non-empty, no whitespace.

Quick example:
    >>> count = NamedFlag(Kind.INTEGER, "c", "count", default=1)
    >>> count.parse("3")
    3
    >>> count.id
    '-c --count'
"""
import functools
import operator
import re

from .kinds import Kind, conform, convert, render
from .utils import *

_ZEROS = {
    Kind.TEXT: "",
    Kind.INTEGER: 0,
    Kind.DECIMAL: 0.0,
    Kind.BOOLEAN: False,
}


class FlagType(type):
    """
    Metaclass giving flag records read-only properties and readable reprs.

    Conventions
    - __typename__ is the class name split on capitals and hyphenated
      ("NamedFlag" -> "named-flag"); setup errors are prefixed with it.
    - __displayable__ (if set) narrows which properties __rich_repr__ yields;
      otherwise __introspectable__ is used.
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


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate kind/help/default/validator shared by every flag record.

    Mutates metadata in place: help is trimmed, default is conformed to the
    kind (or replaced by the kind's zero value when Unset), validator Unset
    becomes None.
    """
    if not isinstance(kind := metadata["kind"], Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a kind")

    if not isinstance(help := metadata["help"], str):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    metadata["help"] = help.strip("\n\r\t ")

    if (default := metadata["default"]) is Unset:
        metadata["default"] = _ZEROS[kind]
    else:
        metadata["default"] = conform(kind, default)

    validator = coalesce(metadata["validator"])
    if validator is not None and not callable(validator):
        raise TypeError(f"{cls.__typename__} 'validator' must be callable")
    if validator is not None and kind is Kind.BOOLEAN:
        raise TypeError(f"boolean {cls.__typename__} cannot have a 'validator'")
    metadata["validator"] = validator


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate the short/long names of a named flag.

    At least one of them must be present; Unset becomes None.
    """
    short = coalesce(metadata["short"])
    long = coalesce(metadata["long"])

    if short is not None:
        if not isinstance(short, str):
            raise TypeError(f"{cls.__typename__} 'short' must be a string")
        elif len(short) != 1 or short == "-" or not short.isprintable() or short.isspace():
            raise ValueError(f"{cls.__typename__} 'short' must be a single character other than '-'")

    if long is not None:
        if not isinstance(long, str):
            raise TypeError(f"{cls.__typename__} 'long' must be a string")
        elif not re.fullmatch(r"[^\s=\-][^\s=]*", long):
            raise ValueError(f"{cls.__typename__} 'long' must be a word without spaces, '=' or a leading '-'")

    if short is None and long is None:
        raise TypeError(f"{cls.__typename__} must specify a short name, a long name, or both")

    metadata["short"] = short
    metadata["long"] = long


def _sanitize_wild_metadata(cls, metadata, /):
    """
    Internal: validate index and placeholder of a positional flag.
    """
    if metadata["kind"] is Kind.BOOLEAN:
        raise TypeError(f"{cls.__typename__} cannot be boolean")

    if not isinstance(index := metadata["index"], int) or isinstance(index, bool):
        raise TypeError(f"{cls.__typename__} 'index' must be an integer")
    elif index < 0:
        raise ValueError(f"{cls.__typename__} 'index' cannot be negative")

    if not isinstance(placeholder := metadata["placeholder"], str):
        raise TypeError(f"{cls.__typename__} 'placeholder' must be a string")
    elif not re.fullmatch(r"\S+", placeholder):
        raise ValueError(f"{cls.__typename__} 'placeholder' must be a non-empty word")


class Flag(metaclass=FlagType):
    """
    Shared record of a configurable value.

    The record owns its slot: callers keep the record returned by the
    declaration and read .value after parsing.
    """

    __introspectable__ = (
        "kind",
        "help",
        "default",
        "validator",
    )

    __displayable__ = (
        "id",
        "kind",
        "value",
        "default",
        "referred",
    )

    def __init__(self, metadata, /):
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._value = self._default
        self._referred = False

    @property
    def id(self):
        """
        unique, human-readable identity of the flag inside its command.
        """
        raise NotImplementedError

    @property
    def value(self):
        """
        current slot value (the default until a token sets it).
        """
        return self._value

    @property
    def referred(self):
        return self._referred

    @property
    def boolean(self):
        return self._kind is Kind.BOOLEAN

    def parse(self, text, /):
        """
        coerce and validate text, then store it in the slot.

        The slot is left untouched when CoercionError is raised.
        """
        self._value = convert(self._kind, text, self._validator)
        return self._value

    def present(self):
        """
        set a boolean flag by presence alone.
        """
        if not self.boolean:
            raise TypeError(f"{type(self).__typename__} {self.id!r} is not boolean")
        self._value = True

    def refer(self):
        self._referred = True

    def reset(self):
        """
        restore the default and clear the referred mark.
        """
        self._value = self._default
        self._referred = False

    def name(self, width=0, /):
        """
        id padded to the given width, for column-aligned help.
        """
        return self.id.ljust(width)

    def __rich__(self):
        return "%s = %s" % (self.id, render(self._kind, self._value))


class NamedFlag(Flag):
    """
    Flag reached by a short name (-x), a long name (--name), or either.
    """

    __introspectable__ = (
        "short",
        "long",
    )

    def __init__(
            self,
            kind,
            /,
            short=Unset,
            long=Unset,
            help="",
            default=Unset,
            validator=Unset,
    ):
        metadata = {
            "kind": kind,
            "short": short,
            "long": long,
            "help": help,
            "default": default,
            "validator": validator,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_named_metadata(type(self), metadata)
        super().__init__(metadata)

    @property
    def id(self):
        """
        "-s --long", "-s" or "--long".
        """
        return " ".join(part for part in (
            self._short and "-" + self._short,
            self._long and "--" + self._long,
        ) if part)

    def matches(self, short=None, long=None, /):
        return self._short == short and self._long == long


class WildFlag(Flag):
    """
    Positional flag: the index-th non-flag token of its command.
    """

    __introspectable__ = (
        "index",
        "placeholder",
    )

    def __init__(
            self,
            kind,
            /,
            index,
            placeholder,
            help="",
            default=Unset,
            validator=Unset,
    ):
        metadata = {
            "kind": kind,
            "index": index,
            "placeholder": placeholder,
            "help": help,
            "default": default,
            "validator": validator,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_wild_metadata(type(self), metadata)
        super().__init__(metadata)

    @property
    def id(self):
        """
        "[index] placeholder".
        """
        return "[%d] %s" % (self._index, self._placeholder)


__all__ = (
    "Flag",
    "NamedFlag",
    "WildFlag",
)

del FlagType
