"""User-facing notifications."""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Notifier(Protocol):
    """Shows a short, non-blocking message to the user."""

    def notify(self, title: str, message: str = "", *, error: bool = False) -> None:
        ...


class LogNotifier:
    """Notifier that writes to the log."""

    def notify(self, title: str, message: str = "", *, error: bool = False) -> None:
        if error:
            logger.warning("%s: %s", title, message)
        else:
            logger.info("%s: %s", title, message)
