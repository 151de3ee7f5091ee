"""Client-side views built on the API client."""

from .calendar import CalendarView, DayCell
from .exercise_card import ExerciseCard
from .workout_view import WorkoutView

__all__ = ["CalendarView", "DayCell", "ExerciseCard", "WorkoutView"]
