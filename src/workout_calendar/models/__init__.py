"""Data models for workout-calendar."""

from .calendar import MonthView
from .exercise import Exercise, ExerciseType
from .templates import EXERCISE_TEMPLATES, WORKOUT_TEMPLATES, ExerciseTemplate, WorkoutTemplate
from .user import User
from .workout import DEFAULT_WORKOUT_COLOR, Workout

__all__ = [
    "DEFAULT_WORKOUT_COLOR",
    "EXERCISE_TEMPLATES",
    "Exercise",
    "ExerciseTemplate",
    "ExerciseType",
    "MonthView",
    "User",
    "WORKOUT_TEMPLATES",
    "Workout",
    "WorkoutTemplate",
]
