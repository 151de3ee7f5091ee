"""Month grid and date bucketing for the calendar."""

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date

from .workout import Workout

# Weeks start on Sunday
_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)

DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class MonthView:
    """A single calendar month."""

    year: int
    month: int

    @classmethod
    def containing(cls, day: date) -> "MonthView":
        """The month that contains ``day``."""
        return cls(day.year, day.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def title(self) -> str:
        return self.first_day.strftime("%B %Y")

    def next(self) -> "MonthView":
        """The following month."""
        if self.month == 12:
            return MonthView(self.year + 1, 1)
        return MonthView(self.year, self.month + 1)

    def previous(self) -> "MonthView":
        """The preceding month."""
        if self.month == 1:
            return MonthView(self.year - 1, 12)
        return MonthView(self.year, self.month - 1)

    def days(self) -> list[date]:
        """Every day of the month in order."""
        return [
            date(self.year, self.month, d)
            for d in range(1, self.last_day.day + 1)
        ]

    def weeks(self) -> list[list[date | None]]:
        """Sunday-first week rows; cells outside the month are None."""
        return [
            [d if d.month == self.month else None for d in week]
            for week in _CALENDAR.monthdatescalendar(self.year, self.month)
        ]

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month


def bucket_by_date(workouts: list[Workout]) -> dict[date, list[Workout]]:
    """Group workouts by their exact calendar date, keeping input order."""
    buckets: dict[date, list[Workout]] = defaultdict(list)
    for workout in workouts:
        buckets[workout.date].append(workout)
    return dict(buckets)


def day_color(workouts: list[Workout]) -> str | None:
    """Marker colour for a day: the first workout's colour."""
    if not workouts:
        return None
    return workouts[0].color
