"""Core package for the menu bot.

The bot authenticates chat users against a roster and then lets them browse
a fixed content tree (teams, sprints, communities, events and artifacts)
through buttons.  This module exposes the pieces needed to wire it up
without a chat platform: the roster, the authorization gate, the menu
compiler and the session router.
"""

from .core.auth import AuthorizationGate
from .core.errors import (
    EmptyRosterError,
    MalformedCredentialSubmission,
    MenuBotError,
    UnknownSelectionPayload,
)
from .core.models import MenuConfig
from .core.roster import Roster
from .menu.compiler import Button, CompiledMenu, compile_menu
from .router import Messages, Response, SelectionEvent, SessionRouter, TextEvent

__all__ = [
    "AuthorizationGate",
    "Button",
    "CompiledMenu",
    "EmptyRosterError",
    "MalformedCredentialSubmission",
    "MenuBotError",
    "MenuConfig",
    "Messages",
    "Response",
    "Roster",
    "SelectionEvent",
    "SessionRouter",
    "TextEvent",
    "UnknownSelectionPayload",
    "compile_menu",
]
