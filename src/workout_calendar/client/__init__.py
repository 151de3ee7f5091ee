"""Client for the workout-calendar API."""

from .api import ApiClient, ApiError
from .cache import QueryCache
from .notify import LogNotifier, Notifier

__all__ = [
    "ApiClient",
    "ApiError",
    "LogNotifier",
    "Notifier",
    "QueryCache",
]
