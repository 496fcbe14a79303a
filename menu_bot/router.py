"""Per-event decision logic: authorization gate first, then menu lookup.

The router performs no I/O.  It turns an inbound :class:`TextEvent` or
:class:`SelectionEvent` into a :class:`Response` which the transport sends
(and, for selections, acknowledges) on its behalf.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .core.auth import AuthorizationGate
from .core.errors import MalformedCredentialSubmission, UnknownSelectionPayload
from .core.models import MenuConfig
from .core.roster import Roster
from .menu.compiler import ButtonGrid, CompiledMenu, Resolution

log = logging.getLogger("menu_bot.router")

START_COMMAND = "/start"


@dataclass(frozen=True)
class TextEvent:
    session_id: int
    chat_id: int
    text: str
    message_id: int | None = None


@dataclass(frozen=True)
class SelectionEvent:
    session_id: int
    chat_id: int
    payload: str
    selection_id: str


Event = TextEvent | SelectionEvent


@dataclass(frozen=True)
class Response:
    """What to send back to ``chat_id``.

    ``keyboard`` is ``None`` when no buttons should be attached.
    ``acknowledge_selection_id`` is set for every selection response and must
    be acknowledged after the text has been sent.
    """

    chat_id: int
    text: str
    keyboard: ButtonGrid | None = None
    acknowledge_selection_id: str | None = None
    reply_to_message_id: int | None = None
    resolution: Resolution | None = None


@dataclass(frozen=True)
class Messages:
    welcome: str
    not_authorized: str
    authorized: str

    @classmethod
    def from_config(cls, config: MenuConfig) -> Messages:
        return cls(
            welcome=config.welcome,
            not_authorized=config.auth_msg,
            authorized=config.authorized,
        )


def parse_credentials(text: str) -> tuple[str, str, str]:
    """Split a login message into ``(surname, given_name, secret)``.

    Tokens after the third are ignored.
    """
    tokens = text.split()
    if len(tokens) < 3:
        raise MalformedCredentialSubmission(len(tokens))
    return tokens[0], tokens[1], tokens[2]


class SessionRouter:
    """Entry point for every inbound event.

    Safe to call from several worker threads at once: the only shared mutable
    state is the :class:`AuthorizationGate`.
    """

    def __init__(
        self,
        menu: CompiledMenu,
        roster: Roster,
        messages: Messages,
        gate: AuthorizationGate | None = None,
    ) -> None:
        self.menu = menu
        self.roster = roster
        self.messages = messages
        self.gate = gate if gate is not None else AuthorizationGate()

    def handle(self, event: Event) -> Response:
        if isinstance(event, SelectionEvent):
            return self.handle_selection(event)
        return self.handle_text(event)

    # ------------------------------------------------------------------
    def handle_text(self, event: TextEvent) -> Response:
        if not self.gate.is_authorized(event.session_id):
            return self._authenticate(event)

        log.info("[%s] %s", event.session_id, event.text)
        text = self.messages.welcome if event.text == START_COMMAND else event.text
        keyboard = self.menu.home if text == self.messages.authorized else None
        return Response(
            chat_id=event.chat_id,
            text=text,
            keyboard=keyboard,
            reply_to_message_id=event.message_id,
        )

    def _authenticate(self, event: TextEvent) -> Response:
        try:
            surname, given_name, secret = parse_credentials(event.text)
        except MalformedCredentialSubmission as exc:
            log.debug("Rejected login from %s: %s", event.session_id, exc)
            return Response(chat_id=event.chat_id, text=self.messages.not_authorized)

        if not self.roster.match(surname, given_name, secret):
            log.info("Failed login attempt from session %s", event.session_id)
            return Response(chat_id=event.chat_id, text=self.messages.not_authorized)

        self.gate.grant(event.session_id)
        log.info("Session %s authorized", event.session_id)
        return Response(
            chat_id=event.chat_id,
            text=self.messages.authorized,
            keyboard=self.menu.home,
        )

    # ------------------------------------------------------------------
    def handle_selection(self, event: SelectionEvent) -> Response:
        try:
            text, keyboard, resolution = self.menu.resolve(event.payload)
        except UnknownSelectionPayload:
            log.debug("No menu entry for payload %r", event.payload)
            return Response(
                chat_id=event.chat_id,
                text=event.payload,
                acknowledge_selection_id=event.selection_id,
                resolution=Resolution.NOT_FOUND,
            )
        return Response(
            chat_id=event.chat_id,
            text=text,
            keyboard=keyboard,
            acknowledge_selection_id=event.selection_id,
            resolution=resolution,
        )
