"""Database layer for workout-calendar."""

from .engine import connect, init_db
from .errors import PersistenceError
from .repositories import (
    ExerciseRepository,
    UserRepository,
    WorkoutRepository,
)

__all__ = [
    "connect",
    "ExerciseRepository",
    "init_db",
    "PersistenceError",
    "UserRepository",
    "WorkoutRepository",
]
