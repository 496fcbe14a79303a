"""Long-poll loop feeding Telegram updates to the session router."""

from __future__ import annotations

import asyncio
import logging

from .adapters.telegram import TelegramAdapter, parse_update
from .router import Event, SessionRouter

log = logging.getLogger("menu_bot.polling")


async def _worker(
    name: str,
    queue: asyncio.Queue[Event],
    router: SessionRouter,
    adapter: TelegramAdapter,
) -> None:
    while True:
        event = await queue.get()
        try:
            response = await asyncio.to_thread(router.handle, event)
            await adapter.deliver(response)
        except Exception:
            log.exception("%s failed to handle event for chat %s", name, event.chat_id)
        finally:
            queue.task_done()


async def poll_once(
    adapter: TelegramAdapter,
    queue: asyncio.Queue[Event],
    offset: int,
    timeout: int,
) -> int:
    """Fetch one batch of updates, enqueue their events, return the next offset.

    A malformed update is logged and skipped; the offset still moves past
    it, so no update of the batch is fetched (or queued) twice.
    """
    for update in await adapter.get_updates(offset, timeout):
        try:
            offset = max(offset, int(update["update_id"]) + 1)
            event = parse_update(update)
        except (KeyError, TypeError, ValueError):
            log.exception("Skipping malformed update %r", update)
            continue
        if event is not None:
            await queue.put(event)
    return offset


async def run_polling(
    adapter: TelegramAdapter,
    router: SessionRouter,
    workers: int = 4,
    timeout: int = 60,
) -> None:
    """Serve updates until cancelled.

    Events are queued in arrival order and handled by ``workers`` concurrent
    tasks.  A failed poll is logged and retried after a short pause.
    """
    queue: asyncio.Queue[Event] = asyncio.Queue()
    tasks = [
        asyncio.create_task(_worker(f"worker-{i}", queue, router, adapter))
        for i in range(max(1, workers))
    ]
    offset = 0
    try:
        while True:
            try:
                offset = await poll_once(adapter, queue, offset, timeout)
            except Exception:
                log.exception("Polling for updates failed")
                await asyncio.sleep(1.0)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
