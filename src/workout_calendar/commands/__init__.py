"""CLI commands for workout-calendar."""

from .calendar import calendar
from .exercises import exercises
from .init import init
from .login import login
from .serve import serve
from .templates import templates
from .train import train
from .workouts import workouts

__all__ = [
    "calendar",
    "exercises",
    "init",
    "login",
    "serve",
    "templates",
    "train",
    "workouts",
]
