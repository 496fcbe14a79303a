"""Compile the configuration tree into flat keyboard and page lookups.

Every node key (a title, a sprint date, or ``"<event title> <date>"``) is
used both as the payload of the button that opens the node and as the key of
the node's entries in :attr:`CompiledMenu.keyboards` and
:attr:`CompiledMenu.pages`.  All categories share one namespace: a key
written twice keeps the last value and is recorded in
:attr:`CompiledMenu.collisions`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple

from ..core.errors import UnknownSelectionPayload
from ..core.models import MenuConfig
from . import pages

log = logging.getLogger("menu_bot.menu")

HOME_WIDTH = 2
TEAMS_WIDTH = 3
SPRINTS_WIDTH = 2
COMMUNITIES_WIDTH = 2
EVENTS_WIDTH = 3
EVENTS_GROUP_WIDTH = 2
ARTIFACTS_WIDTH = 3


@dataclass(frozen=True)
class Button:
    label: str
    payload: str

    @classmethod
    def for_key(cls, key: str) -> Button:
        return cls(label=key, payload=key)


ButtonGrid = tuple[tuple[Button, ...], ...]


def pack(buttons: Sequence[Button], width: int) -> ButtonGrid:
    """Split ``buttons`` into rows of ``width``; the last row may be shorter."""
    if width < 1:
        raise ValueError("row width must be positive")
    return tuple(
        tuple(buttons[i : i + width]) for i in range(0, len(buttons), width)
    )


class Resolution(str, Enum):
    PAGE = "page"
    MENU = "menu"
    EMPTY_MENU = "empty_menu"
    NOT_FOUND = "not_found"


class Selection(NamedTuple):
    text: str
    keyboard: ButtonGrid
    resolution: Resolution


@dataclass(frozen=True)
class CompiledMenu:
    """Read-only result of :func:`compile_menu`."""

    home: ButtonGrid
    keyboards: Mapping[str, ButtonGrid]
    pages: Mapping[str, str]
    collisions: tuple[str, ...] = field(default=())

    def resolve(self, payload: str) -> Selection:
        """Pick the text and keyboard shown for a button ``payload``.

        A known page is shown with the payload's own keyboard when it names a
        category or events group, and with the home keyboard otherwise.  A
        payload with a keyboard but no page shows the payload itself.

        Raises :class:`UnknownSelectionPayload` when neither map has the key.
        """
        page = self.pages.get(payload)
        grid = self.keyboards.get(payload)
        if grid is not None and not grid:
            text = page if page is not None else payload
            return Selection(text, grid, Resolution.EMPTY_MENU)
        if page is not None:
            keyboard = grid if grid is not None else self.home
            return Selection(page, keyboard, Resolution.PAGE)
        if grid is not None:
            return Selection(payload, grid, Resolution.MENU)
        raise UnknownSelectionPayload(payload)


class _Collector:
    def __init__(self) -> None:
        self.keyboards: dict[str, ButtonGrid] = {}
        self.pages: dict[str, str] = {}
        self.collisions: list[str] = []

    def keyboard(self, key: str, grid: ButtonGrid) -> None:
        if key in self.keyboards:
            self.collisions.append(key)
        self.keyboards[key] = grid

    def page(self, key: str, text: str) -> None:
        if key in self.pages:
            self.collisions.append(key)
        self.pages[key] = text


def compile_menu(config: MenuConfig) -> CompiledMenu:
    """Build the home keyboard, category keyboards and all pages.

    The result depends only on ``config``: compiling equal configurations
    yields equal menus.  ``config`` is assumed to be validated already.
    """
    out = _Collector()
    home: list[Button] = []

    def category(
        title: str | None,
        children: Sequence[Button],
        width: int,
        page: str | None,
    ) -> None:
        if title is None:
            return
        home.append(Button.for_key(title))
        out.keyboard(title, pack(children, width))
        if page is not None:
            out.page(title, page)

    title = config.sprint_button_title
    category(
        title,
        [Button.for_key(s.date) for s in config.sprints],
        SPRINTS_WIDTH,
        pages.sprints_page(title, config.sprints) if title is not None else None,
    )
    title = config.events_button_title
    category(
        title,
        [Button.for_key(g.title) for g in config.events],
        EVENTS_WIDTH,
        _info_page(title, config.events_info),
    )
    title = config.teams_button_title
    category(
        title,
        [Button.for_key(t.name) for t in config.teams],
        TEAMS_WIDTH,
        _info_page(title, config.teams_info),
    )
    title = config.communities_button_title
    category(
        title,
        [Button.for_key(c.name) for c in config.communities],
        COMMUNITIES_WIDTH,
        _info_page(title, config.communities_info),
    )
    title = config.artifacts_button_title
    category(
        title,
        [Button.for_key(r.title) for r in config.artifacts],
        ARTIFACTS_WIDTH,
        _info_page(title, config.artifacts_info),
    )

    for sprint in config.sprints:
        out.page(sprint.date, pages.sprint_page(sprint))
    for group in config.events:
        events = [Button.for_key(e.key) for e in group.events]
        out.keyboard(group.title, pack(events, EVENTS_GROUP_WIDTH))
        out.page(group.title, pages.events_group_page(group))
        for event in group.events:
            out.page(event.key, pages.event_page(event))
    for team in config.teams:
        out.page(team.name, pages.team_page(team))
    for community in config.communities:
        out.page(community.name, pages.community_page(community, config.mentors_title))
    for record in config.artifacts:
        out.page(record.title, pages.record_page(record))

    for key in out.collisions:
        log.warning("Menu key %r is defined more than once; last one wins", key)

    return CompiledMenu(
        home=pack(home, HOME_WIDTH),
        keyboards=MappingProxyType(out.keyboards),
        pages=MappingProxyType(out.pages),
        collisions=tuple(out.collisions),
    )


def _info_page(title: str | None, info: str | None) -> str | None:
    if title is None or info is None:
        return None
    return pages.category_page(title, info)
