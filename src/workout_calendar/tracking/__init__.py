"""Exercise progress tracking and countdown timers."""

from .countdown import Countdown, format_clock
from .session import ExerciseSession, SessionState
from .ticker import AsyncTicker, Ticker, TickerFactory

__all__ = [
    "AsyncTicker",
    "Countdown",
    "ExerciseSession",
    "SessionState",
    "Ticker",
    "TickerFactory",
    "format_clock",
]
