"""Tests for data models."""

from datetime import date, datetime, timezone

from workout_calendar.models import (
    DEFAULT_WORKOUT_COLOR,
    EXERCISE_TEMPLATES,
    WORKOUT_TEMPLATES,
    Exercise,
    ExerciseType,
    User,
    Workout,
)
from workout_calendar.models.templates import find_exercise_template, find_workout_template


class TestWorkout:
    """Tests for Workout model."""

    def test_defaults(self):
        """A new workout is not completed and uses the default colour."""
        workout = Workout(user_id="u1", name="Leg Day", date=date(2024, 5, 1))

        assert workout.completed is False
        assert workout.color == DEFAULT_WORKOUT_COLOR == "#6366F1"
        assert workout.id is None

    def test_to_dict(self):
        """Test workout serialization."""
        workout = Workout(
            id="w1",
            user_id="u1",
            name="Leg Day",
            date=date(2024, 5, 1),
            created_at=datetime(2024, 4, 30, 12, 0, tzinfo=timezone.utc),
        )
        data = workout.to_dict()

        assert data["date"] == "2024-05-01"
        assert data["completed"] is False
        assert data["created_at"] == "2024-04-30T12:00:00+00:00"
        assert data["updated_at"] is None

    def test_from_dict_parses_storage_values(self):
        """Rows store dates as text and booleans as integers."""
        workout = Workout.from_dict({
            "id": "w1",
            "user_id": "u1",
            "name": "Leg Day",
            "date": "2024-05-01",
            "completed": 1,
            "color": None,
            "created_at": "2024-04-30T12:00:00+00:00",
        })

        assert workout.date == date(2024, 5, 1)
        assert workout.completed is True
        assert workout.color == DEFAULT_WORKOUT_COLOR
        assert workout.created_at.tzinfo is not None


class TestExercise:
    """Tests for Exercise model."""

    def test_defaults(self):
        """Exercises start with one set, one rep and a minute of rest."""
        exercise = Exercise(workout_id="w1", name="Squat")

        assert exercise.sets == 1
        assert exercise.reps == 1
        assert exercise.rest_duration == 60
        assert exercise.type == ExerciseType.STRENGTH
        assert exercise.current_count == 0
        assert exercise.max_count == 1
        assert exercise.order == 0
        assert exercise.completed is False

    def test_round_trip(self):
        """Test exercise serialization and deserialization."""
        exercise = Exercise(
            id="e1",
            workout_id="w1",
            name="Plank",
            sets=3,
            reps=1,
            rest_duration=45,
            type=ExerciseType.CORE,
            order=2,
        )
        restored = Exercise.from_dict(exercise.to_dict())

        assert restored == exercise
        assert exercise.to_dict()["type"] == "core"

    def test_count_reached(self):
        exercise = Exercise(workout_id="w1", name="Squat", current_count=2, max_count=3)
        assert not exercise.count_reached

        exercise.current_count = 3
        assert exercise.count_reached


class TestUser:
    """Tests for User model."""

    def test_display_name_prefers_full_name(self):
        user = User(id="u1", email="a@example.com", first_name="Ada", last_name="Lovelace")
        assert user.display_name == "Ada Lovelace"

    def test_display_name_falls_back(self):
        assert User(id="u1", email="a@example.com").display_name == "a@example.com"
        assert User(id="u1").display_name == "u1"


class TestTemplates:
    """Tests for the built-in templates."""

    def test_templates_populated(self):
        assert len(WORKOUT_TEMPLATES) > 0
        assert len(EXERCISE_TEMPLATES) > 0
        assert all(t.color.startswith("#") for t in WORKOUT_TEMPLATES)

    def test_find_is_case_insensitive(self):
        squat = find_exercise_template("  squat ")

        assert squat is not None
        assert (squat.sets, squat.reps, squat.rest_duration) == (4, 12, 90)
        assert find_workout_template("leg day").name == "Leg Day"
        assert find_exercise_template("Unknown") is None

    def test_exercise_template_payload(self):
        payload = find_exercise_template("Plank").to_payload()

        assert payload == {
            "name": "Plank",
            "sets": 3,
            "reps": 1,
            "rest_duration": 60,
            "type": "core",
        }
