"""Web API for workout-calendar."""

from .app import create_app

__all__ = ["create_app"]
