"""Request and response schemas shared by the API and its client.

Field names are camelCase on the wire; snake_case is accepted on input.
"""

from datetime import date as Date
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .models.exercise import Exercise, ExerciseType
from .models.user import User
from .models.workout import DEFAULT_WORKOUT_COLOR, Workout

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def _reject_null(value):
    if value is None:
        raise ValueError("must not be null")
    return value


# --- Workout schemas ---
class WorkoutCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    date: Date
    description: str | None = None
    color: str = Field(DEFAULT_WORKOUT_COLOR, pattern=COLOR_PATTERN)
    completed: bool = False


class WorkoutUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    date: Date | None = None
    description: str | None = None
    color: str | None = Field(None, pattern=COLOR_PATTERN)
    completed: bool | None = None

    @field_validator("name", "date", "color", "completed", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)

    def changes(self) -> dict:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


class WorkoutRead(CamelModel):
    id: str
    user_id: str
    name: str
    description: str | None = None
    date: Date
    completed: bool
    color: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_workout(cls, workout: Workout) -> "WorkoutRead":
        return cls.model_validate(workout.to_dict())

    def to_workout(self) -> Workout:
        return Workout.from_dict(self.model_dump())


# --- Exercise schemas ---
class ExerciseCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    type: ExerciseType = ExerciseType.STRENGTH
    sets: int = Field(1, ge=1)
    reps: int = Field(1, ge=1)
    rest_duration: int = Field(60, ge=0)
    current_count: int = Field(0, ge=0)
    max_count: int = Field(1, ge=1)
    completed: bool = False
    order: int | None = Field(None, ge=0)


class ExerciseUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    type: ExerciseType | None = None
    sets: int | None = Field(None, ge=1)
    reps: int | None = Field(None, ge=1)
    rest_duration: int | None = Field(None, ge=0)
    current_count: int | None = Field(None, ge=0)
    max_count: int | None = Field(None, ge=1)
    completed: bool | None = None
    order: int | None = Field(None, ge=0)

    @field_validator(
        "name", "type", "sets", "reps", "rest_duration",
        "current_count", "max_count", "completed", "order",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)

    def changes(self) -> dict:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


class ExerciseRead(CamelModel):
    id: str
    workout_id: str
    name: str
    description: str | None = None
    type: ExerciseType
    sets: int
    reps: int
    current_count: int
    max_count: int
    rest_duration: int
    completed: bool
    order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_exercise(cls, exercise: Exercise) -> "ExerciseRead":
        return cls.model_validate(exercise.to_dict())

    def to_exercise(self) -> Exercise:
        return Exercise.from_dict(self.model_dump())


# --- User schemas ---
class UserRead(CamelModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        return cls.model_validate(user.to_dict())

    def to_user(self) -> User:
        return User.from_dict(self.model_dump())
