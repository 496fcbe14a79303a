"""Immutable index of the credentials allowed to use the bot."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from .errors import EmptyRosterError


@dataclass(frozen=True)
class RosterEntry:
    surname: str
    given_name: str
    secret: str

    @classmethod
    def normalized(cls, surname: str, given_name: str, secret: str) -> RosterEntry:
        return cls(surname.lower(), given_name.lower(), secret.lower())


class Roster:
    """Credential tuples grouped by lower-cased surname.

    Several people may share a surname; the given name and secret tell them
    apart.  Build instances with :meth:`load`.
    """

    def __init__(self, entries: Iterable[RosterEntry]) -> None:
        by_surname: dict[str, list[RosterEntry]] = {}
        for entry in entries:
            by_surname.setdefault(entry.surname, []).append(entry)
        self._by_surname = MappingProxyType(
            {surname: tuple(group) for surname, group in by_surname.items()}
        )

    @classmethod
    def load(cls, records: Sequence[Sequence[str]]) -> Roster:
        """Build a roster from ``(surname, given_name, secret)`` records.

        Raises :class:`EmptyRosterError` if ``records`` is empty.
        """
        if not records:
            raise EmptyRosterError("roster contains no records")
        return cls(RosterEntry.normalized(r[0], r[1], r[2]) for r in records)

    def match(self, surname: str, given_name: str, secret: str) -> bool:
        """Return ``True`` if all three fields equal a stored entry."""
        wanted = RosterEntry.normalized(surname, given_name, secret)
        return wanted in self._by_surname.get(wanted.surname, ())

    def __len__(self) -> int:
        return sum(len(group) for group in self._by_surname.values())
