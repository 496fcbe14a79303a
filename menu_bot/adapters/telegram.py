"""Telegram adapter implementing the :class:`~menu_bot.adapters.base.Adapter`.

The adapter talks to the Telegram Bot API directly with :mod:`httpx`, which
keeps the transport fully asynchronous without a dedicated bot framework.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import TransportError
from ..menu.compiler import ButtonGrid
from ..router import Event, Response, SelectionEvent, TextEvent
from .base import Adapter

log = logging.getLogger("menu_bot.telegram")

MAX_TEXT_LENGTH = 4096
MAX_CALLBACK_DATA_BYTES = 64


def inline_keyboard(grid: ButtonGrid) -> dict[str, Any]:
    """Render ``grid`` as a Telegram ``InlineKeyboardMarkup``.

    Buttons whose payload exceeds the ``callback_data`` limit are left out
    and logged; rows left empty are dropped.
    """
    rows: list[list[dict[str, str]]] = []
    for row in grid:
        buttons = []
        for b in row:
            if len(b.payload.encode("utf-8")) > MAX_CALLBACK_DATA_BYTES:
                log.warning("Payload too long for a Telegram button: %r", b.payload)
                continue
            buttons.append({"text": b.label, "callback_data": b.payload})
        if buttons:
            rows.append(buttons)
    return {"inline_keyboard": rows}


def parse_update(update: dict[str, Any]) -> Event | None:
    """Convert a raw update into a router event.

    Updates that are neither text messages nor callback queries yield
    ``None``.
    """
    query = update.get("callback_query")
    if query is not None:
        message = query.get("message") or {}
        return SelectionEvent(
            session_id=int(query["from"]["id"]),
            chat_id=int(message.get("chat", {}).get("id", query["from"]["id"])),
            payload=query.get("data", ""),
            selection_id=str(query["id"]),
        )
    message = update.get("message")
    if message is None or "text" not in message or "from" not in message:
        return None
    return TextEvent(
        session_id=int(message["from"]["id"]),
        chat_id=int(message["chat"]["id"]),
        text=message["text"],
        message_id=message.get("message_id"),
    )


class TelegramAdapter(Adapter):
    """Adapter that sends requests directly to the Telegram Bot API."""

    api_base = "https://api.telegram.org"

    def __init__(self, token: str, client: httpx.AsyncClient | None = None) -> None:
        """Store authentication ``token`` and optional HTTP ``client``."""
        self.token = token
        self.client = client or httpx.AsyncClient()

    # ------------------------------------------------------------------
    async def _call(self, method: str, payload: dict[str, Any]) -> Any:
        url = f"{self.api_base}/bot{self.token}/{method}"
        response = await self.client.post(url, json=payload)
        response.raise_for_status()
        data: dict[str, Any] = response.json()
        if not data.get("ok"):
            raise TransportError(
                f"{method} failed: {data.get('description', 'unknown error')}"
            )
        return data.get("result")

    async def send_response(self, response: Response) -> None:
        """Send a message, with an inline keyboard when one is attached.

        Texts longer than Telegram allows are truncated.
        """
        text = response.text
        if len(text) > MAX_TEXT_LENGTH:
            text = text[: MAX_TEXT_LENGTH - 1] + "…"
        payload: dict[str, Any] = {"chat_id": response.chat_id, "text": text}
        if response.keyboard:
            markup = inline_keyboard(response.keyboard)
            if markup["inline_keyboard"]:
                payload["reply_markup"] = markup
        if response.reply_to_message_id is not None:
            payload["reply_to_message_id"] = response.reply_to_message_id
        await self._call("sendMessage", payload)

    async def acknowledge(self, selection_id: str) -> None:
        await self._call("answerCallbackQuery", {"callback_query_id": selection_id})

    async def get_updates(self, offset: int, timeout: int) -> list[dict[str, Any]]:
        """Long-poll for updates with ids of at least ``offset``."""
        payload = {
            "offset": offset,
            "timeout": timeout,
            "allowed_updates": ["message", "callback_query"],
        }
        return list(await self._call("getUpdates", payload) or [])

    async def close(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()
