"""Persistence error types."""

from functools import wraps

import aiosqlite


class PersistenceError(Exception):
    """A database operation failed.

    ``message`` is safe to show to API clients; the driver error is kept
    as ``__cause__`` for logging only.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def wraps_db_errors(message: str):
    """Decorator translating driver errors from an async repository method."""

    def decorator(f):
        @wraps(f)
        async def wrapper(*args, **kwargs):
            try:
                return await f(*args, **kwargs)
            except aiosqlite.Error as e:
                raise PersistenceError(message) from e

        return wrapper

    return decorator
