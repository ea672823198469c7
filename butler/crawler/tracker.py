# butler/crawler/tracker.py
"""
Counted wait for outstanding crawl work.
"""
from __future__ import annotations

import asyncio


class CompletionTracker:
    """Counter of admitted-but-unfinished tasks with a wait-for-zero.

    ``add`` is called once per enqueued task, ``done`` once per processed task.
    Both must be called from the event loop thread that awaits :meth:`wait`.
    """

    def __init__(self) -> None:
        self._pending = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def pending(self) -> int:
        return self._pending

    def add(self, n: int = 1) -> None:
        if n < 0:
            raise ValueError("add() expects a non-negative count")
        self._pending += n
        if self._pending:
            self._idle.clear()

    def done(self) -> None:
        if self._pending <= 0:
            raise ValueError("done() called more times than add()")
        self._pending -= 1
        if self._pending == 0:
            self._idle.set()

    async def wait(self) -> None:
        """Block until every added unit of work has been marked done."""
        await self._idle.wait()
