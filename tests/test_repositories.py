"""Tests for the repositories against a temporary SQLite file."""

import asyncio
from datetime import date

import pytest

from workout_calendar.db import (
    ExerciseRepository,
    PersistenceError,
    UserRepository,
    WorkoutRepository,
    init_db,
)
from workout_calendar.models import Exercise, User, Workout


@pytest.fixture
def repos(temp_db_path):
    """Initialized database with users alice and bob."""

    async def setup():
        await init_db(temp_db_path)
        users = UserRepository(temp_db_path)
        await users.upsert(User(id="alice", email="alice@example.com"))
        await users.upsert(User(id="bob", email="bob@example.com"))

    asyncio.run(setup())
    return (
        UserRepository(temp_db_path),
        WorkoutRepository(temp_db_path),
        ExerciseRepository(temp_db_path),
    )


def leg_day(user_id: str = "alice", day: date = date(2024, 5, 1), name: str = "Leg Day") -> Workout:
    return Workout(user_id=user_id, name=name, date=day)


class TestUserRepository:
    """Tests for user upserts."""

    def test_upsert_creates_then_updates(self, repos):
        users, _, _ = repos

        async def scenario():
            first = await users.upsert(User(id="carol", first_name="Carol"))
            second = await users.upsert(User(id="carol", first_name="Caroline", last_name="X"))
            return first, second

        first, second = asyncio.run(scenario())

        assert first.first_name == "Carol"
        assert second.first_name == "Caroline"
        assert second.created_at == first.created_at
        assert second.updated_at >= first.updated_at

    def test_get_missing(self, repos):
        users, _, _ = repos
        assert asyncio.run(users.get("nobody")) is None


class TestWorkoutRepository:
    """Tests for ownership-scoped workout queries."""

    def test_create_returns_stored_record(self, repos):
        _, workouts, _ = repos

        workout = asyncio.run(workouts.create(leg_day()))

        assert workout.id
        assert workout.date == date(2024, 5, 1)
        assert workout.completed is False
        assert workout.created_at is not None
        assert workout.updated_at is not None

    def test_list_by_user_newest_date_first(self, repos):
        _, workouts, _ = repos

        async def scenario():
            await workouts.create(leg_day(day=date(2024, 5, 1), name="A"))
            await workouts.create(leg_day(day=date(2024, 5, 3), name="B"))
            await workouts.create(leg_day(day=date(2024, 4, 20), name="C"))
            await workouts.create(leg_day(user_id="bob", name="Bob's"))
            return await workouts.list_by_user("alice")

        names = [w.name for w in asyncio.run(scenario())]
        assert names == ["B", "A", "C"]

    def test_list_by_date_exact_day_oldest_first(self, repos):
        _, workouts, _ = repos

        async def scenario():
            await workouts.create(leg_day(name="First"))
            await workouts.create(leg_day(day=date(2024, 5, 2), name="Other day"))
            await workouts.create(leg_day(name="Second"))
            return await workouts.list_by_date("alice", date(2024, 5, 1))

        assert [w.name for w in asyncio.run(scenario())] == ["First", "Second"]

    def test_get_scoped_by_owner(self, repos):
        _, workouts, _ = repos

        async def scenario():
            created = await workouts.create(leg_day())
            return (
                await workouts.get(created.id, "alice"),
                await workouts.get(created.id, "bob"),
            )

        mine, theirs = asyncio.run(scenario())
        assert mine is not None
        assert theirs is None

    def test_update_merges_and_stamps(self, repos):
        _, workouts, _ = repos

        async def scenario():
            created = await workouts.create(leg_day())
            updated = await workouts.update(created.id, "alice", {"completed": True})
            return created, updated

        created, updated = asyncio.run(scenario())
        assert updated.completed is True
        assert updated.name == created.name
        assert updated.updated_at >= created.updated_at

    def test_update_not_owned_is_silent_noop(self, repos):
        _, workouts, _ = repos

        async def scenario():
            created = await workouts.create(leg_day())
            result = await workouts.update(created.id, "bob", {"name": "Hijacked"})
            return result, await workouts.get(created.id, "alice")

        result, stored = asyncio.run(scenario())
        assert result is None
        assert stored.name == "Leg Day"

    def test_update_ignores_unknown_columns(self, repos):
        _, workouts, _ = repos

        async def scenario():
            created = await workouts.create(leg_day())
            return await workouts.update(created.id, "alice", {"user_id": "bob", "name": "Renamed"})

        updated = asyncio.run(scenario())
        assert updated.user_id == "alice"
        assert updated.name == "Renamed"

    def test_delete_scoped_by_owner(self, repos):
        _, workouts, _ = repos

        async def scenario():
            created = await workouts.create(leg_day())
            by_bob = await workouts.delete(created.id, "bob")
            by_alice = await workouts.delete(created.id, "alice")
            return by_bob, by_alice, await workouts.get(created.id, "alice")

        by_bob, by_alice, remaining = asyncio.run(scenario())
        assert by_bob is False
        assert by_alice is True
        assert remaining is None

    def test_create_for_unknown_user_raises_persistence_error(self, repos):
        _, workouts, _ = repos

        with pytest.raises(PersistenceError) as exc_info:
            asyncio.run(workouts.create(leg_day(user_id="ghost")))
        assert exc_info.value.message == "Failed to create workout"


class TestExerciseRepository:
    """Tests for exercise queries, which are keyed by parent only."""

    def test_ordering_and_append(self, repos):
        _, workouts, exercises = repos

        async def scenario():
            workout = await workouts.create(leg_day())
            await exercises.create(Exercise(workout_id=workout.id, name="Squat"))
            await exercises.create(Exercise(workout_id=workout.id, name="Lunge"))
            await exercises.create(Exercise(workout_id=workout.id, name="Warm-up"), order=0)
            return await exercises.list_by_workout(workout.id)

        listed = asyncio.run(scenario())
        assert [(e.name, e.order) for e in listed] == [
            ("Squat", 0),
            ("Warm-up", 0),
            ("Lunge", 1),
        ]

    def test_first_exercise_gets_order_zero(self, repos):
        _, workouts, exercises = repos

        async def scenario():
            workout = await workouts.create(leg_day())
            return await exercises.create(Exercise(workout_id=workout.id, name="Squat"))

        assert asyncio.run(scenario()).order == 0

    def test_update_and_missing(self, repos):
        _, workouts, exercises = repos

        async def scenario():
            workout = await workouts.create(leg_day())
            exercise = await exercises.create(Exercise(workout_id=workout.id, name="Squat"))
            updated = await exercises.update(exercise.id, {"sets": 5, "completed": True})
            missing = await exercises.update("nope", {"sets": 5})
            return updated, missing

        updated, missing = asyncio.run(scenario())
        assert updated.sets == 5
        assert updated.completed is True
        assert missing is None

    def test_mutation_is_not_owner_scoped(self, repos):
        """Anyone holding an exercise id can change it; callers must check."""
        _, workouts, exercises = repos

        async def scenario():
            workout = await workouts.create(leg_day(user_id="alice"))
            exercise = await exercises.create(Exercise(workout_id=workout.id, name="Squat"))
            await exercises.update(exercise.id, {"name": "Changed"})
            return exercise.id, await exercises.get_owner_id(exercise.id)

        exercise_id, owner = asyncio.run(scenario())
        assert owner == "alice"
        assert asyncio.run(exercises.get(exercise_id)).name == "Changed"

    def test_deleting_workout_cascades(self, repos):
        _, workouts, exercises = repos

        async def scenario():
            workout = await workouts.create(leg_day())
            await exercises.create(Exercise(workout_id=workout.id, name="Squat"))
            await exercises.create(Exercise(workout_id=workout.id, name="Lunge"))
            await workouts.delete(workout.id, "alice")
            return await exercises.list_by_workout(workout.id)

        assert asyncio.run(scenario()) == []

    def test_create_under_missing_workout_fails(self, repos):
        _, _, exercises = repos

        with pytest.raises(PersistenceError) as exc_info:
            asyncio.run(exercises.create(Exercise(workout_id="missing", name="Squat")))
        assert exc_info.value.message == "Failed to create exercise"

    def test_delete_missing_returns_false(self, repos):
        _, _, exercises = repos
        assert asyncio.run(exercises.delete("missing")) is False
