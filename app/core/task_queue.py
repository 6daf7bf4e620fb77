from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from app.core.logging import get_logger
from app.modules.integrations.webhook import WebhookClient


logger = get_logger(__name__)

JobCallable = Callable[[], Awaitable[None]]


class BackgroundQueue:
    """Simple in-process async job queue with fixed concurrency."""

    def __init__(self, *, concurrency: int = 2) -> None:
        self.concurrency = max(1, int(concurrency))
        self._queue: asyncio.Queue[JobCallable] = asyncio.Queue()
        self._workers: list[asyncio.Task[None]] = []
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def _worker(self, idx: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await job()
            except Exception:  # noqa: BLE001
                # A failing job must not take the worker down with it
                logger.exception("Background worker %d job failed", idx)
            finally:
                self._queue.task_done()

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        for i in range(self.concurrency):
            self._workers.append(asyncio.create_task(self._worker(i)))

    async def stop(self) -> None:
        # Drain queue and cancel workers
        await self._queue.join()
        for t in self._workers:
            t.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers.clear()
        self._started = False

    def enqueue(self, fn: JobCallable) -> None:
        self._queue.put_nowait(fn)


queue = BackgroundQueue(concurrency=2)


def enqueue_note_notification(
    *,
    note_id: int,
    content: str,
    user_id: int,
    client: Optional[WebhookClient] = None,
    target: Optional[BackgroundQueue] = None,
) -> None:
    """Enqueue a ``note_created`` webhook delivery."""
    webhook = client or WebhookClient()

    async def _job() -> None:
        await webhook.notify_note_created(
            note_id=note_id, content=content, user_id=user_id
        )

    (target or queue).enqueue(_job)
