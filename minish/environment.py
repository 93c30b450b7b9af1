"""Shell environment: an ordered list of ``NAME=value`` entries."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator

_SHELL_LEVEL = "SHLVL"
_DECLARE_PREFIX = "declare -x "
_BLANKS = " \t\n\r\v\f"


class IdentifierKind(enum.IntEnum):
    """How an ``export`` argument is classified."""

    INVALID_CHAR = -1
    STARTS_WITH_DIGIT = 0
    ASSIGNMENT = 1
    NAME_ONLY = 2


def entry_name(entry: str) -> str:
    """Return the part of an entry before the first ``=``."""
    return entry.partition("=")[0]


def entry_value(entry: str) -> str:
    """Return the part of an entry after the first ``=``, or "" if there is none."""
    return entry.partition("=")[2]


def classify_identifier(entry: str) -> IdentifierKind:
    """Classify an ``export`` argument by its name part."""
    if entry[:1].isdigit() and entry[:1].isascii():
        return IdentifierKind.STARTS_WITH_DIGIT
    name, sep, _ = entry.partition("=")
    if any(not (ch.isascii() and ch.isalnum()) for ch in name):
        return IdentifierKind.INVALID_CHAR
    if not sep:
        return IdentifierKind.NAME_ONLY
    return IdentifierKind.ASSIGNMENT


def shell_level_from(text: str) -> int:
    """Parse a ``SHLVL`` value; anything that is not an integer counts as 0."""
    body = text.lstrip(_BLANKS)
    sign = 1
    if body[:1] in ("-", "+"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if not body or not (body.isascii() and body.isdigit()):
        return 0
    return sign * int(body)


class Environment:
    """An ordered collection of environment entries."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: list[str] = list(entries)

    @classmethod
    def from_entries(cls, entries: Iterable[str]) -> Environment:
        """Build an environment from ``NAME=value`` strings, keeping their order."""
        return cls(entries)

    def entries(self) -> list[str]:
        """Return a copy of the entries in order."""
        return list(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and any(
            entry_name(entry) == name for entry in self._entries
        )

    def _index_of(self, name: str) -> int | None:
        return next(
            (i for i, entry in enumerate(self._entries) if entry_name(entry) == name),
            None,
        )

    def get(self, name: str) -> str:
        """Return the value of ``name``, or "" when it is not set."""
        index = self._index_of(name)
        return "" if index is None else entry_value(self._entries[index])

    def replace(self, entry: str) -> bool:
        """Replace the entry with the same name; return whether one was found."""
        index = self._index_of(entry_name(entry))
        if index is None:
            return False
        self._entries[index] = entry
        return True

    def add(self, entry: str) -> None:
        """Append a new entry."""
        self._entries.append(entry)

    def remove(self, name: str) -> bool:
        """Remove the first entry named like ``name``; return whether one was removed."""
        index = self._index_of(entry_name(name))
        if index is None:
            return False
        del self._entries[index]
        return True

    def declarations(self) -> list[str]:
        """Return the non-empty entries sorted, each as a ``declare -x`` line."""
        return [_DECLARE_PREFIX + entry for entry in sorted(e for e in self._entries if e)]

    def bump_shell_level(self) -> None:
        """Increase ``SHLVL`` by one when it is set to a non-empty value."""
        current = self.get(_SHELL_LEVEL)
        if current == "":
            return
        self.replace(f"{_SHELL_LEVEL}={shell_level_from(current) + 1}")