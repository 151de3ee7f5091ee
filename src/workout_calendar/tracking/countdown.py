"""Second-by-second countdown."""

from typing import Callable

from .ticker import Ticker, TickerFactory


def format_clock(seconds: int) -> str:
    """Render seconds as ``m:ss``."""
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes}:{secs:02d}"


class Countdown:
    """A countdown from ``duration`` seconds down to zero.

    Each ``tick`` removes one second while running. Reaching zero stops
    the countdown, puts ``remaining`` back to ``duration`` for the next
    cycle and calls ``on_complete`` once.

    With a ``ticker_factory`` the countdown schedules its own ticks while
    running; without one, ``tick`` must be called by the owner.
    """

    def __init__(
        self,
        duration: int,
        *,
        on_complete: Callable[[], None] | None = None,
        ticker_factory: TickerFactory | None = None,
    ):
        if duration < 0:
            raise ValueError("duration must be >= 0")
        self.duration = duration
        self.remaining = duration
        self.on_complete = on_complete
        self._running = False
        self._ticker: Ticker | None = ticker_factory(self.tick) if ticker_factory else None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ticker(self) -> Ticker | None:
        return self._ticker

    def start(self) -> None:
        """Start or continue counting down from ``remaining``."""
        if self._running:
            return
        if self.remaining <= 0:
            self._finish()
            return
        self._running = True
        if self._ticker is not None:
            self._ticker.start()

    resume = start

    def pause(self) -> None:
        """Stop counting, keeping ``remaining`` as it is."""
        self._running = False
        if self._ticker is not None:
            self._ticker.cancel()

    def toggle(self) -> None:
        if self._running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Stop and restore ``remaining`` to ``duration``."""
        self.pause()
        self.remaining = self.duration

    def set_duration(self, seconds: int) -> None:
        """Change the duration; a stopped countdown picks it up at once."""
        if seconds < 0:
            raise ValueError("duration must be >= 0")
        self.duration = seconds
        if not self._running:
            self.remaining = seconds

    def tick(self) -> bool:
        """Advance one second. Returns True when this tick reached zero."""
        if not self._running:
            return False
        self.remaining -= 1
        if self.remaining <= 0:
            self._finish()
            return True
        return False

    def _finish(self) -> None:
        self.pause()
        self.remaining = self.duration
        if self.on_complete is not None:
            self.on_complete()
