"""
Parse results.

A ParseResult maps every declared canonical key (positional placeholder, or an
option's long name / short character for short-only options) to an Entry:

    Entry(used: bool, values: tuple[str, ...])

Short aliases resolve through an alias table to the one stored entry, so
result["f"] and result["foo"] are the same object. Iteration, len() and
equality only see canonical keys; membership and lookups accept aliases too.

Surplus tokens (plain values no consumer took) are kept in `remainder`, in
input order and with the escape prefix stripped like any other value; they are
not keys of the mapping.
"""
from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple


class Entry(NamedTuple):
    used: bool
    values: tuple[str, ...]


class ParseResult(Mapping):
    """
    Read-only mapping of parsed arguments.

    Built once by the matcher; holds no reference back to the specification.
    """
    __slots__ = ("_entries", "_aliases", "_remainder")

    def __init__(self, entries, aliases=(), remainder=()):
        self._entries = MappingProxyType(dict(entries))
        self._aliases = MappingProxyType(dict(aliases))
        self._remainder = tuple(remainder)
        for alias, key in self._aliases.items():
            if key not in self._entries:
                raise KeyError(f"alias {alias!r} points to an unknown key {key!r}")

    def __getitem__(self, key, /):
        try:
            return self._entries[key]
        except KeyError:
            pass
        return self._entries[self._aliases[key]]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"{type(self).__name__}({dict(self._entries)!r})"

    def __rich_repr__(self):
        yield dict(self._entries)
        if self._remainder:
            yield "remainder", self._remainder

    @property
    def aliases(self):
        """short alias → canonical key"""
        return self._aliases

    @property
    def remainder(self):
        return self._remainder

    def canonical(self, key, /):
        """the canonical key a key or alias resolves to"""
        if key in self._entries:
            return key
        return self._aliases[key]


__all__ = (
    "Entry",
    "ParseResult",
)
