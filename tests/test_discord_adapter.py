"""Tests for the :mod:`menu_bot.adapters.discord` module and its views."""

import asyncio
from types import SimpleNamespace
from typing import Any

import discord

from menu_bot.adapters.discord import DiscordAdapter
from menu_bot.menu.compiler import Button, pack
from menu_bot.router import Response
from menu_bot.ui.views import MAX_ROWS, VIEW_TIMEOUT, MenuView, grid_layout


def run(coro: Any) -> Any:
    """Run an async coroutine synchronously for tests."""
    return asyncio.run(coro)


class Channel:
    def __init__(self, cid: int) -> None:
        self.id = cid
        self.sent: list[tuple[str, dict]] = []

    async def send(self, content: str, **kwargs: Any) -> None:
        self.sent.append((content, kwargs))


class Client:
    def __init__(self, channel: Channel) -> None:
        self.channel = channel
        self.fetched: list[int] = []

    def get_channel(self, cid: int) -> Channel | None:
        return self.channel if cid == self.channel.id else None

    async def fetch_channel(self, cid: int) -> Channel:
        self.fetched.append(cid)
        return self.channel


class InteractionResponse:
    def __init__(self) -> None:
        self.deferred = 0

    def is_done(self) -> bool:
        return self.deferred > 0

    async def defer(self) -> None:
        self.deferred += 1


async def _ignore(interaction: Any, payload: str) -> None:
    pass


def test_grid_layout_respects_discord_limits() -> None:
    buttons = [Button.for_key(f"b{i}") for i in range(14)]
    grid = pack(buttons, 2)
    placed = grid_layout(grid)
    assert len({row for row, _ in placed}) == MAX_ROWS
    assert [b.label for _, b in placed] == [f"b{i}" for i in range(10)]

    long_payload = ((Button("x", "p" * 101), Button("y", "ok")),)
    assert [b.payload for _, b in grid_layout(long_payload)] == ["ok"]


def test_send_plain_text_with_reply() -> None:
    channel = Channel(5)
    adapter = DiscordAdapter(Client(channel), _ignore)

    run(adapter.send_response(Response(chat_id=5, text="hello", reply_to_message_id=77)))

    content, kwargs = channel.sent[0]
    assert content == "hello"
    assert "view" not in kwargs
    assert isinstance(kwargs["reference"], discord.MessageReference)
    assert kwargs["reference"].message_id == 77


def test_send_fetches_unknown_channel_and_truncates() -> None:
    channel = Channel(5)
    client = Client(channel)
    adapter = DiscordAdapter(client, _ignore)

    run(adapter.send_response(Response(chat_id=6, text="x" * 2500)))

    assert client.fetched == [6]
    content, _ = channel.sent[0]
    assert len(content) == 2000


def test_keyboard_becomes_menu_view() -> None:
    selected: list[str] = []

    async def on_select(interaction: Any, payload: str) -> None:
        selected.append(payload)

    async def scenario() -> MenuView:
        channel = Channel(5)
        adapter = DiscordAdapter(Client(channel), on_select)
        grid = pack([Button.for_key("Teams"), Button.for_key("Events"), Button.for_key("Sprints")], 2)
        await adapter.send_response(Response(chat_id=5, text="menu", keyboard=grid))
        view = channel.sent[0][1]["view"]
        await view.children[2].callback(SimpleNamespace())
        return view

    view = run(scenario())
    assert isinstance(view, MenuView)
    assert [(b.label, b.custom_id, b.row) for b in view.children] == [
        ("Teams", "Teams", 0),
        ("Events", "Events", 0),
        ("Sprints", "Sprints", 1),
    ]
    assert selected == ["Sprints"]
    # expiring views are dropped from the client view store
    assert view.timeout == VIEW_TIMEOUT


def test_acknowledge_defers_tracked_interaction() -> None:
    adapter = DiscordAdapter(Client(Channel(5)), _ignore)
    interaction = SimpleNamespace(id=123, response=InteractionResponse())

    selection_id = adapter.track(interaction)
    assert selection_id == "123"
    run(adapter.deliver(Response(chat_id=5, text="page", acknowledge_selection_id=selection_id)))
    assert interaction.response.deferred == 1

    # acknowledging again (or an unknown id) is harmless
    run(adapter.acknowledge(selection_id))
    assert interaction.response.deferred == 1
