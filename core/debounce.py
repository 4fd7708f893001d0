"""Trailing-edge debounce for asyncio callers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Coalesce rapid calls into one, delivered after a quiet window.

    Every call restarts the window; when it elapses the callback receives
    the last value passed in. Must be called from a running event loop.
    """

    def __init__(self, delay: float, callback: Callable[[T], Any]) -> None:
        self._delay = delay
        self._callback = callback
        self._task: asyncio.Task | None = None

    def __call__(self, value: T) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire_later(value))

    async def _fire_later(self, value: T) -> None:
        await asyncio.sleep(self._delay)
        self._task = None
        self._callback(value)

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def wait(self) -> None:
        """Block until no call is waiting out its window."""
        while self.pending:
            await asyncio.wait({self._task})
