"""
Repeating timer on the asyncio event loop.

Each Ticker owns at most one task handle. start() acquires it, stop()
cancels it; using the ticker as an async context manager guarantees the
handle is released on every exit path.

Usage:
    async with Ticker(60, guard.tick, name="hyperfocus"):
        ...
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from joidu.logging_config import get_logger


logger = get_logger(__name__)


class Ticker:
    """Fire `callback` every `interval_seconds` while running."""

    def __init__(
        self,
        interval_seconds: float,
        callback: Callable[[], Any | Awaitable[Any]],
        name: str = "ticker",
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.name = name
        self.ticks = 0
        self.errors = 0
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking. Calling start on a running ticker does nothing."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.debug("ticker_started", ticker=self.name, interval=self.interval_seconds)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug("ticker_stopped", ticker=self.name, ticks=self.ticks)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.ticks += 1
            try:
                result = self.callback()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                self.errors += 1
                logger.exception("ticker_callback_failed", ticker=self.name)

    async def __aenter__(self) -> Ticker:
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
