"""Periodic callbacks that drive countdowns."""

import asyncio
import logging
from typing import Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Ticker(Protocol):
    """Calls a callback repeatedly until cancelled."""

    @property
    def active(self) -> bool:
        ...

    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...


TickerFactory = Callable[[Callable[[], None]], Ticker]


class AsyncTicker:
    """Ticker running on the current asyncio event loop.

    ``start`` and ``cancel`` are both idempotent. The callback may cancel
    its own ticker.
    """

    def __init__(self, callback: Callable[[], None], interval: float = 1.0):
        self.callback = callback
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.active:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.callback()
            except Exception:
                logger.exception("Ticker callback failed")
                self._task = None
                return
