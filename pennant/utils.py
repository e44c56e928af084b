"""
Pennant utilities (internal helpers shared by the flag and command layers).

Overview
- UnsetType / Unset
  • Singleton sentinel for "not provided", kept apart from None because None,
    0, "" and False are all legitimate flag defaults.

- coalesce(value, default=None)
  • Materialize Unset into a concrete default; every other value passes through.

- rename(callable, name) / @rename("name")
  • Give default hooks and generated callables readable names in tracebacks.

- mirror("attr")
  • Read-only property over a private backing field (self._attr); containers are
    handed out as fresh copies so callers cannot mutate registry state.

Usage guidance
- Use Unset as the default of optional keyword parameters (short/long names,
  validators, runtime options) and resolve it with coalesce() at the boundary.
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for a parameter the caller did not pass.

    Characteristics
    - Boolean-false, but distinct from None/0/"".
    - repr(Unset) -> "Unset".
    - Sealed and process-wide singleton.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return object unless it is Unset, in which case return default.

    Falsey values are preserved: coalesce(False, True) is False, which matters
    for boolean defaults and runtime options inherited from a parent command.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable, or build a decorator that does.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Copy containers recursively; scalars are returned as-is.

    Mappings keep their keys (values are processed), sequences become lists and
    sets become sets. Strings are scalars here.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Build a read-only property serving self._{name}.

    Container values are copied on every access (see _immortalize), so the
    registries and child tables of a command can be inspected but not edited
    from outside.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()
"""
The "not provided" sentinel. Resolve with coalesce(value, default).
"""


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
