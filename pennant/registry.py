"""
Pennant flag registry: the named and wild collections owned by one command.

Rules
- Named flags are unique on short and on long names, checked independently.
- Wild flags are unique on placeholder; their index is assigned here, in
  registration order.
- Duplicates are programmer errors and raise ValueError at registration.
- Lookups return None when nothing matches.
"""
from .flags import NamedFlag, WildFlag


class Registry:
    """
    Ordered collections of the flags declared on a command.
    """

    def __init__(self):
        self._named = []
        self._wild = []

    @property
    def named(self):
        """
        named flags in registration order (read-only view).
        """
        return tuple(self._named)

    @property
    def wild(self):
        """
        wild flags in index order (read-only view).
        """
        return tuple(self._wild)

    def add_named(self, flag, /):
        if not isinstance(flag, NamedFlag):
            raise TypeError("add_named() argument must be a named-flag")
        if flag.short is not None and self.find_by_short(flag.short) is not None:
            raise ValueError(f"{type(flag).__typename__} short name {'-' + flag.short!r} is already in use")
        if flag.long is not None and self.find_by_long(flag.long) is not None:
            raise ValueError(f"{type(flag).__typename__} long name {'--' + flag.long!r} is already in use")
        self._named.append(flag)
        return flag

    def add_wild(self, flag, /):
        if not isinstance(flag, WildFlag):
            raise TypeError("add_wild() argument must be a wild-flag")
        if self.find_by_placeholder(flag.placeholder) is not None:
            raise ValueError(f"{type(flag).__typename__} placeholder {flag.placeholder!r} is already in use")
        if flag.index != len(self._wild):
            raise ValueError(f"{type(flag).__typename__} index must be {len(self._wild)}, not {flag.index}")
        self._wild.append(flag)
        return flag

    def find_by_short(self, short, /):
        return next((flag for flag in self._named if flag.short == short), None)

    def find_by_long(self, long, /):
        return next((flag for flag in self._named if flag.long == long), None)

    def find_by_short_and_long(self, short, long, /):
        return next((flag for flag in self._named if flag.matches(short, long)), None)

    def find_by_index(self, index, /):
        try:
            return self._wild[index] if index >= 0 else None
        except IndexError:
            return None

    def find_by_placeholder(self, placeholder, /):
        return next((flag for flag in self._wild if flag.placeholder == placeholder), None)

    def help_index(self):
        """
        position of the -h/--help flag among the named flags, or None.
        """
        for index, flag in enumerate(self._named):
            if flag.matches("h", "help"):
                return index
        return None

    def remove_named(self, index, /):
        """
        remove and return the named flag at the given position.
        """
        return self._named.pop(index)

    def max_id_width(self):
        """
        (widest named id, widest wild id), 0 for an empty collection.
        """
        return (
            max((len(flag.id) for flag in self._named), default=0),
            max((len(flag.id) for flag in self._wild), default=0),
        )

    def __len__(self):
        return len(self._named) + len(self._wild)

    def __iter__(self):
        yield from self._named
        yield from self._wild


__all__ = (
    "Registry",
)
