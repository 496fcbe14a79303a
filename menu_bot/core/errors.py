"""Exception hierarchy shared by the menu bot core and its loaders."""

from __future__ import annotations


class MenuBotError(Exception):
    """Base class for all errors raised by :mod:`menu_bot`."""


class ConfigError(MenuBotError):
    """The configuration or roster file could not be read or validated."""


class EmptyRosterError(MenuBotError):
    """The roster contains no credential records.

    Raised once at startup; the bot must not serve events without a roster.
    """


class MalformedCredentialSubmission(MenuBotError):
    """A login message did not contain surname, given name and secret."""

    def __init__(self, token_count: int) -> None:
        super().__init__(f"expected 3 credential tokens, got {token_count}")
        self.token_count = token_count


class UnknownSelectionPayload(MenuBotError, LookupError):
    """A button payload names neither a page nor a keyboard."""

    def __init__(self, payload: str) -> None:
        super().__init__(payload)
        self.payload = payload


class TransportError(MenuBotError):
    """The chat platform rejected a request."""
