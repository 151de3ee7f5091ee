"""workout-calendar: schedule workouts, log sets and pace rest periods."""

__version__ = "0.1.0"
