"""Built-in templates used to prefill the creation forms."""

from dataclasses import dataclass

from .exercise import ExerciseType


@dataclass(frozen=True)
class WorkoutTemplate:
    """A named workout preset."""

    name: str
    description: str
    color: str


@dataclass(frozen=True)
class ExerciseTemplate:
    """A common exercise with sensible set/rep/rest defaults."""

    name: str
    sets: int
    reps: int
    rest_duration: int
    type: ExerciseType = ExerciseType.STRENGTH

    def to_payload(self) -> dict:
        """Fields for an exercise creation request."""
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "rest_duration": self.rest_duration,
            "type": self.type.value,
        }


WORKOUT_TEMPLATES: list[WorkoutTemplate] = [
    WorkoutTemplate("Upper Body", "Chest, shoulders, arms", "#10B981"),
    WorkoutTemplate("Leg Day", "Quads, glutes, calves", "#6366F1"),
    WorkoutTemplate("Back & Biceps", "Back, lats, biceps", "#10B981"),
    WorkoutTemplate("Cardio", "Running, cycling, swimming", "#EF4444"),
    WorkoutTemplate("Core", "Abs, hips, lower back", "#F59E0B"),
    WorkoutTemplate("Full Body", "Whole body", "#8B5CF6"),
    WorkoutTemplate("HIIT", "High intensity intervals", "#EF4444"),
    WorkoutTemplate("Yoga", "Mobility and relaxation", "#8B5CF6"),
]

EXERCISE_TEMPLATES: list[ExerciseTemplate] = [
    ExerciseTemplate("Crunches", 3, 15, 30, ExerciseType.CORE),
    ExerciseTemplate("Push-up", 3, 10, 60),
    ExerciseTemplate("Squat", 4, 12, 90),
    ExerciseTemplate("Deadlift", 3, 8, 120),
    ExerciseTemplate("Bench Press", 3, 10, 90),
    ExerciseTemplate("Pull-up", 3, 8, 90),
    ExerciseTemplate("Plank", 3, 1, 60, ExerciseType.CORE),
    ExerciseTemplate("Lunges", 3, 12, 60),
    ExerciseTemplate("Shoulder Press", 3, 10, 60),
    ExerciseTemplate("Bicep Curls", 3, 12, 45),
]


def find_workout_template(name: str) -> WorkoutTemplate | None:
    """Look up a workout template by case-insensitive name."""
    wanted = name.strip().lower()
    for template in WORKOUT_TEMPLATES:
        if template.name.lower() == wanted:
            return template
    return None


def find_exercise_template(name: str) -> ExerciseTemplate | None:
    """Look up an exercise template by case-insensitive name."""
    wanted = name.strip().lower()
    for template in EXERCISE_TEMPLATES:
        if template.name.lower() == wanted:
            return template
    return None
