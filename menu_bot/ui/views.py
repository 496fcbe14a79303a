from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

import discord

from ..menu.compiler import Button, ButtonGrid

log = logging.getLogger("menu_bot.discord")

# Discord message component limits
MAX_ROWS = 5
MAX_ROW_WIDTH = 5
MAX_LABEL_LENGTH = 80
MAX_CUSTOM_ID_LENGTH = 100

# Seconds a menu stays clickable; expired views leave the client's view store
VIEW_TIMEOUT = 15 * 60.0

SelectHandler = Callable[[discord.Interaction, str], Awaitable[None]]


def grid_layout(grid: ButtonGrid) -> list[tuple[int, Button]]:
    """Return ``(row, button)`` pairs for the part of ``grid`` Discord can show.

    Rows past the fifth and buttons whose payload is too long for a
    ``custom_id`` are left out and logged.
    """
    if len(grid) > MAX_ROWS:
        log.warning("Keyboard has %d rows; showing the first %d", len(grid), MAX_ROWS)
    placed: list[tuple[int, Button]] = []
    for row_index, row in enumerate(grid[:MAX_ROWS]):
        for button in row[:MAX_ROW_WIDTH]:
            if len(button.payload) > MAX_CUSTOM_ID_LENGTH:
                log.warning("Payload too long for a Discord button: %r", button.payload)
                continue
            placed.append((row_index, button))
    return placed


class MenuView(discord.ui.View):
    """Buttons for one compiled keyboard; each press reports its payload."""

    def __init__(self, grid: ButtonGrid, on_select: SelectHandler) -> None:
        super().__init__(timeout=VIEW_TIMEOUT)
        self.on_select = on_select
        for row, button in grid_layout(grid):
            b = discord.ui.Button(
                label=button.label[:MAX_LABEL_LENGTH],
                custom_id=button.payload,
                row=row,
                style=discord.ButtonStyle.secondary,
            )

            async def handler(
                inter: discord.Interaction, payload: str = button.payload
            ) -> None:
                await self.on_select(inter, payload)

            b.callback = handler
            self.add_item(b)
