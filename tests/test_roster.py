"""Tests for :class:`menu_bot.core.roster.Roster`."""

import pytest

from menu_bot.core.errors import EmptyRosterError
from menu_bot.core.roster import Roster


def test_match_is_case_insensitive() -> None:
    roster = Roster.load([("Smith", "John", "ABC")])
    assert roster.match("smith", "john", "abc")
    assert roster.match("SMITH", "John", "aBc")


def test_match_requires_all_three_fields() -> None:
    roster = Roster.load([("smith", "john", "abc")])
    assert not roster.match("smith", "john", "abd")
    assert not roster.match("smith", "jane", "abc")
    assert not roster.match("smyth", "john", "abc")
    assert not roster.match("smith", "john", "")


def test_shared_surname_entries_are_disambiguated() -> None:
    roster = Roster.load([("smith", "john", "abc"), ("smith", "jane", "xyz")])
    assert len(roster) == 2
    assert roster.match("smith", "jane", "xyz")
    assert roster.match("smith", "john", "abc")
    assert not roster.match("smith", "jane", "abc")


def test_empty_roster_is_rejected() -> None:
    with pytest.raises(EmptyRosterError):
        Roster.load([])
