"""Workout data model."""

from dataclasses import dataclass
from datetime import date, datetime

from ._time import format_timestamp, parse_timestamp

DEFAULT_WORKOUT_COLOR = "#6366F1"


@dataclass
class Workout:
    """A session scheduled on one calendar day and owned by one user."""

    user_id: str
    name: str
    date: date
    description: str | None = None
    completed: bool = False
    color: str = DEFAULT_WORKOUT_COLOR
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "date": self.date.isoformat(),
            "completed": self.completed,
            "color": self.color,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        """Create from dictionary."""
        day = data["date"]
        if isinstance(day, str):
            day = date.fromisoformat(day)
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            name=data["name"],
            description=data.get("description"),
            date=day,
            completed=bool(data.get("completed", False)),
            color=data.get("color") or DEFAULT_WORKOUT_COLOR,
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )
