from __future__ import annotations

import asyncio

import httpx

from .config import Settings, load_settings
from .core.errors import MenuBotError
from .core.roster import Roster
from .data.loader import load_config, load_roster_records
from .logging_config import setup_logging
from .menu.compiler import compile_menu
from .router import Messages, SessionRouter


def build_router(settings: Settings) -> SessionRouter:
    """Load config and roster from disk and wire up the router.

    Raises :class:`~menu_bot.core.errors.MenuBotError` on bad input,
    including :class:`~menu_bot.core.errors.EmptyRosterError`.
    """
    config = load_config(settings.config_path)
    roster = Roster.load(load_roster_records(settings.roster_path))
    menu = compile_menu(config)
    return SessionRouter(menu, roster, Messages.from_config(config))


async def _run_telegram(settings: Settings, router: SessionRouter) -> None:
    from .adapters.telegram import TelegramAdapter
    from .polling import run_polling

    client = httpx.AsyncClient(timeout=settings.poll_timeout + 10)
    adapter = TelegramAdapter(settings.token, client=client)
    try:
        await run_polling(
            adapter, router, workers=settings.workers, timeout=settings.poll_timeout
        )
    finally:
        await adapter.close()


async def _run_discord(settings: Settings, router: SessionRouter) -> None:
    from .bot import MenuBot

    bot = MenuBot(router)
    async with bot:
        await bot.start(settings.token)


def main() -> int:
    log = setup_logging()
    try:
        settings = load_settings()
    except ValueError as exc:
        log.error("%s", exc)
        return 2
    if not settings.token:
        log.error(
            "%s is not set. "
            "Export it in your environment before running.",
            settings.token_env,
        )
        return 2
    try:
        router = build_router(settings)
    except MenuBotError as exc:
        log.error("Cannot start: %s", exc)
        return 1
    log.info(
        "Loaded %d roster entries and %d menu pages",
        len(router.roster),
        len(router.menu.pages),
    )

    runner = _run_telegram if settings.transport == "telegram" else _run_discord
    try:
        asyncio.run(runner(settings, router))
    except KeyboardInterrupt:
        log.info("Shutting down...")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
