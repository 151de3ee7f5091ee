"""Exercise data model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ._time import format_timestamp, parse_timestamp


class ExerciseType(str, Enum):
    """Broad category of an exercise."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    CORE = "core"
    OTHER = "other"


@dataclass
class Exercise:
    """One movement inside a workout.

    ``completed`` is the authoritative progress flag. ``current_count`` and
    ``max_count`` are the repetition counter shown by the compact workout
    card; the server stores both representations and does not reconcile
    them.
    """

    workout_id: str
    name: str
    sets: int = 1
    reps: int = 1
    rest_duration: int = 60  # seconds
    description: str | None = None
    type: ExerciseType = ExerciseType.STRENGTH
    current_count: int = 0
    max_count: int = 1
    completed: bool = False
    order: int = 0
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def count_reached(self) -> bool:
        """Whether the repetition counter has hit its target."""
        return self.current_count >= self.max_count

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "workout_id": self.workout_id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "sets": self.sets,
            "reps": self.reps,
            "current_count": self.current_count,
            "max_count": self.max_count,
            "rest_duration": self.rest_duration,
            "completed": self.completed,
            "order": self.order,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            workout_id=data["workout_id"],
            name=data["name"],
            description=data.get("description"),
            type=ExerciseType(data.get("type") or ExerciseType.STRENGTH.value),
            sets=data.get("sets", 1),
            reps=data.get("reps", 1),
            current_count=data.get("current_count", 0),
            max_count=data.get("max_count", 1),
            rest_duration=data.get("rest_duration", 60),
            completed=bool(data.get("completed", False)),
            order=data.get("order", 0),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )
