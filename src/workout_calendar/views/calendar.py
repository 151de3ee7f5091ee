"""Month calendar with workouts bucketed by day."""

from dataclasses import dataclass, field
from datetime import date

from ..client import ApiClient, ApiError, LogNotifier, Notifier
from ..models.calendar import MonthView, bucket_by_date, day_color
from ..models.templates import WorkoutTemplate
from ..models.workout import Workout
from .exercise_card import describe_error


@dataclass
class DayCell:
    """One day in the month grid."""

    day: date
    workouts: list[Workout] = field(default_factory=list)
    selected: bool = False
    today: bool = False

    @property
    def color(self) -> str | None:
        return day_color(self.workouts)


class CalendarView:
    """Pages through months and selects days.

    Workouts are matched to days by exact date equality. The selected
    day starts as ``today`` and moving to another month does not change it.
    """

    def __init__(
        self,
        client: ApiClient,
        *,
        today: date | None = None,
        notifier: Notifier | None = None,
    ):
        self.client = client
        self.notifier = notifier or LogNotifier()
        self.today = today or date.today()
        self.selected = self.today
        self.month = MonthView.containing(self.today)
        self._buckets: dict[date, list[Workout]] = {}

    async def load(self) -> None:
        """Fetch the user's workouts and bucket them by day."""
        workouts = await self.client.list_workouts()
        self._buckets = bucket_by_date(workouts)

    async def next_month(self) -> MonthView:
        self.month = self.month.next()
        await self.load()
        return self.month

    async def previous_month(self) -> MonthView:
        self.month = self.month.previous()
        await self.load()
        return self.month

    def workouts_for(self, day: date) -> list[Workout]:
        return list(self._buckets.get(day, []))

    def color_for(self, day: date) -> str | None:
        return day_color(self._buckets.get(day, []))

    def grid(self) -> list[list[DayCell | None]]:
        """Sunday-first weeks of the current month."""
        return [
            [
                DayCell(
                    day=d,
                    workouts=self.workouts_for(d),
                    selected=d == self.selected,
                    today=d == self.today,
                )
                if d is not None
                else None
                for d in week
            ]
            for week in self.month.weeks()
        ]

    def month_workouts(self) -> list[Workout]:
        """Workouts in the current month, by day."""
        return [
            workout
            for day in self.month.days()
            for workout in self._buckets.get(day, [])
        ]

    async def select(self, day: date) -> list[Workout]:
        """Select ``day`` and return the workouts scheduled on it."""
        self.selected = day
        if not self.month.contains(day):
            self.month = MonthView.containing(day)
            await self.load()
        return await self.client.workouts_on(day)

    async def create_workout(
        self,
        name: str | None = None,
        *,
        template: WorkoutTemplate | None = None,
        description: str | None = None,
        color: str | None = None,
    ) -> Workout | None:
        """Schedule a new workout on the selected day."""
        fields = {}
        if template is not None:
            fields.update(name=template.name, description=template.description, color=template.color)
        if name is not None:
            fields["name"] = name
        if description is not None:
            fields["description"] = description
        if color is not None:
            fields["color"] = color
        fields["date"] = self.selected

        try:
            workout = await self.client.create_workout(**fields)
        except ApiError as e:
            self.notifier.notify("Failed to create workout", describe_error(e), error=True)
            return None
        self.notifier.notify("Workout created", f"{workout.name} on {workout.date.isoformat()}")
        await self.load()
        return workout
