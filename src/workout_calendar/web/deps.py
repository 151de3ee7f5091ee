"""Request-scoped dependencies."""

from fastapi import Request

from ..config import Settings
from ..db import ExerciseRepository, UserRepository, WorkoutRepository


def get_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_user_repo(request: Request) -> UserRepository:
    return UserRepository(request.app.state.settings.db_path)


def get_workout_repo(request: Request) -> WorkoutRepository:
    return WorkoutRepository(request.app.state.settings.db_path)


def get_exercise_repo(request: Request) -> ExerciseRepository:
    return ExerciseRepository(request.app.state.settings.db_path)
