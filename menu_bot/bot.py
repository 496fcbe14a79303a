"""Discord front-end for the menu bot.

Plain channel messages become :class:`~menu_bot.router.TextEvent` objects and
menu button presses become :class:`~menu_bot.router.SelectionEvent` objects.
Both go through the shared :class:`~menu_bot.router.SessionRouter`, and the
decided response is delivered by :class:`~menu_bot.adapters.discord.DiscordAdapter`.
"""

from __future__ import annotations

from typing import Any

import discord
from discord.ext import commands

from .adapters.discord import DiscordAdapter
from .logging_config import setup_logging
from .router import SelectionEvent, SessionRouter, TextEvent


class MenuBot(commands.Bot):
    """Small ``discord.py`` based bot serving the compiled menu."""

    def __init__(self, router: SessionRouter, **kwargs: Any) -> None:  # pragma: no cover - trivial
        """Initialize the bot with the intents needed to read login messages."""
        intents = kwargs.pop("intents", None) or discord.Intents.default()
        # Credentials and ``/start`` arrive as ordinary message text.
        intents.message_content = True
        super().__init__(
            command_prefix=kwargs.pop("command_prefix", "!"),
            intents=intents,
        )
        self.log = setup_logging()
        self.router = router
        self.adapter = DiscordAdapter(self, self.on_menu_select)

    async def on_ready(self) -> None:  # pragma: no cover - requires discord
        """Log a short confirmation once the bot connected successfully."""
        self.log.info(
            "Logged in as %s (%s)",
            self.user,
            self.user.id if self.user else "?",
        )

    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return
        event = TextEvent(
            session_id=message.author.id,
            chat_id=message.channel.id,
            text=message.content,
            message_id=message.id,
        )
        await self.adapter.deliver(self.router.handle(event))

    async def on_menu_select(
        self, interaction: discord.Interaction, payload: str
    ) -> None:
        # Menu messages are visible to everyone in a guild channel.
        if not self.router.gate.is_authorized(interaction.user.id):
            self.log.info("Rejected menu click from session %s", interaction.user.id)
            await interaction.response.send_message(
                self.router.messages.not_authorized, ephemeral=True
            )
            return
        event = SelectionEvent(
            session_id=interaction.user.id,
            chat_id=interaction.channel_id,
            payload=payload,
            selection_id=self.adapter.track(interaction),
        )
        await self.adapter.deliver(self.router.handle(event))


__all__ = ["MenuBot"]
