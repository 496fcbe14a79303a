"""Discord adapter implementing the :class:`~menu_bot.adapters.base.Adapter`.

Responses are posted to the originating channel through the connected
:mod:`discord` client; keyboards become :class:`~menu_bot.ui.views.MenuView`
buttons.  A button press is acknowledged by deferring its interaction, so the
adapter keeps the pending interactions keyed by their id until then.
"""

from __future__ import annotations

import logging

import discord

from ..router import Response
from ..ui.views import MenuView, SelectHandler
from .base import Adapter

log = logging.getLogger("menu_bot.discord")

MAX_TEXT_LENGTH = 2000


class DiscordAdapter(Adapter):
    """Adapter that sends responses through a connected Discord client."""

    def __init__(self, client: discord.Client, on_select: SelectHandler) -> None:
        self.client = client
        self.on_select = on_select
        self._pending: dict[str, discord.Interaction] = {}

    def track(self, interaction: discord.Interaction) -> str:
        """Remember ``interaction`` until it is acknowledged; return its id."""
        selection_id = str(interaction.id)
        self._pending[selection_id] = interaction
        return selection_id

    async def send_response(self, response: Response) -> None:
        channel = self.client.get_channel(response.chat_id)
        if channel is None:
            channel = await self.client.fetch_channel(response.chat_id)
        text = response.text
        if len(text) > MAX_TEXT_LENGTH:
            text = text[: MAX_TEXT_LENGTH - 1] + "…"
        kwargs: dict[str, object] = {}
        if response.keyboard:
            kwargs["view"] = MenuView(response.keyboard, self.on_select)
        if response.reply_to_message_id is not None:
            kwargs["reference"] = discord.MessageReference(
                message_id=response.reply_to_message_id,
                channel_id=response.chat_id,
                fail_if_not_exists=False,
            )
        await channel.send(text, **kwargs)

    async def acknowledge(self, selection_id: str) -> None:
        interaction = self._pending.pop(selection_id, None)
        if interaction is None:
            log.warning("No pending interaction %s to acknowledge", selection_id)
            return
        if not interaction.response.is_done():
            await interaction.response.defer()
