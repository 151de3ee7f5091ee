"""Data access layer for workout-calendar."""

from datetime import date
from pathlib import Path
from uuid import uuid4

import aiosqlite

from ..models._time import utcnow
from ..models.exercise import Exercise
from ..models.user import User
from ..models.workout import Workout
from .engine import connect
from .errors import wraps_db_errors

# Columns a partial update may touch, keyed by model field name
WORKOUT_UPDATE_COLUMNS = {
    "name": "name",
    "description": "description",
    "date": "date",
    "completed": "completed",
    "color": "color",
}

EXERCISE_UPDATE_COLUMNS = {
    "name": "name",
    "description": "description",
    "type": "type",
    "sets": "sets",
    "reps": "reps",
    "current_count": "current_count",
    "max_count": "max_count",
    "rest_duration": "rest_duration",
    "completed": "completed",
    "order": '"order"',
}


def _new_id() -> str:
    return str(uuid4())


def _to_sql(value):
    """Adapt a model value to something sqlite3 stores directly."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, date):
        return value.isoformat()
    if hasattr(value, "value"):  # str enums
        return value.value
    return value


def _set_clause(changes: dict, columns: dict[str, str]) -> tuple[str, list]:
    """Build ``col = ?`` pairs for the allowed fields present in ``changes``."""
    assignments = []
    params = []
    for field_name, value in changes.items():
        column = columns.get(field_name)
        if column is None:
            continue
        assignments.append(f"{column} = ?")
        params.append(_to_sql(value))
    return ", ".join(assignments), params


class UserRepository:
    """Repository for users."""

    def __init__(self, db_path: Path):
        self.db_path = db_path

    @wraps_db_errors("Failed to fetch user")
    async def get(self, user_id: str) -> User | None:
        """Get a user by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    @wraps_db_errors("Failed to save user")
    async def upsert(self, user: User) -> User:
        """Insert a user, or refresh the profile fields of an existing one."""
        now = utcnow().isoformat()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO users
                (id, email, first_name, last_name, profile_image_url, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    email = excluded.email,
                    first_name = excluded.first_name,
                    last_name = excluded.last_name,
                    profile_image_url = excluded.profile_image_url,
                    updated_at = excluded.updated_at
                """,
                (
                    user.id,
                    user.email,
                    user.first_name,
                    user.last_name,
                    user.profile_image_url,
                    now,
                    now,
                ),
            )
            await db.commit()
        return await self.get(user.id)

    def _row_to_user(self, row: aiosqlite.Row) -> User:
        """Convert a database row to a User."""
        return User.from_dict(dict(row))


class WorkoutRepository:
    """Repository for workouts. Every query is scoped by the owning user."""

    def __init__(self, db_path: Path):
        self.db_path = db_path

    @wraps_db_errors("Failed to fetch workouts")
    async def list_by_user(self, user_id: str) -> list[Workout]:
        """All of a user's workouts, newest date first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workouts
                WHERE user_id = ?
                ORDER BY date DESC, created_at DESC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_workout(row) for row in rows]

    @wraps_db_errors("Failed to fetch workouts")
    async def list_by_date(self, user_id: str, day: date) -> list[Workout]:
        """A user's workouts on exactly ``day``, oldest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workouts
                WHERE user_id = ? AND date = ?
                ORDER BY created_at ASC
                """,
                (user_id, day.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_workout(row) for row in rows]

    @wraps_db_errors("Failed to fetch workout")
    async def get(self, workout_id: str, user_id: str) -> Workout | None:
        """Get a workout by ID, or None when missing or owned by someone else."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workouts WHERE id = ? AND user_id = ?",
                (workout_id, user_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_workout(row)

    @wraps_db_errors("Failed to create workout")
    async def create(self, workout: Workout) -> Workout:
        """Create a new workout and return the stored record."""
        workout_id = _new_id()
        now = utcnow().isoformat()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO workouts
                (id, user_id, name, description, date, completed, color, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    workout_id,
                    workout.user_id,
                    workout.name,
                    workout.description,
                    workout.date.isoformat(),
                    int(workout.completed),
                    workout.color,
                    now,
                    now,
                ),
            )
            await db.commit()
        return await self.get(workout_id, workout.user_id)

    @wraps_db_errors("Failed to update workout")
    async def update(self, workout_id: str, user_id: str, changes: dict) -> Workout | None:
        """Apply a partial update.

        Returns None without raising when no row matches the id/owner pair.
        """
        assignments, params = _set_clause(changes, WORKOUT_UPDATE_COLUMNS)
        assignments = ", ".join(filter(None, [assignments, "updated_at = ?"]))
        params.append(utcnow().isoformat())

        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"UPDATE workouts SET {assignments} WHERE id = ? AND user_id = ?",
                (*params, workout_id, user_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                return None
        return await self.get(workout_id, user_id)

    @wraps_db_errors("Failed to delete workout")
    async def delete(self, workout_id: str, user_id: str) -> bool:
        """Delete a workout and, by cascade, its exercises."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workouts WHERE id = ? AND user_id = ?",
                (workout_id, user_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_workout(self, row: aiosqlite.Row) -> Workout:
        """Convert a database row to a Workout."""
        return Workout.from_dict(dict(row))


class ExerciseRepository:
    """Repository for exercises.

    Queries here are keyed by workout or exercise id only; callers are
    trusted to have checked that the parent workout belongs to them.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path

    @wraps_db_errors("Failed to fetch exercises")
    async def list_by_workout(self, workout_id: str) -> list[Exercise]:
        """Exercises of a workout in their display order."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM exercises
                WHERE workout_id = ?
                ORDER BY "order" ASC, created_at ASC
                """,
                (workout_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    @wraps_db_errors("Failed to fetch exercise")
    async def get(self, exercise_id: str) -> Exercise | None:
        """Get an exercise by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    @wraps_db_errors("Failed to fetch exercise")
    async def get_owner_id(self, exercise_id: str) -> str | None:
        """User id owning the exercise's workout."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT w.user_id FROM exercises e
                JOIN workouts w ON w.id = e.workout_id
                WHERE e.id = ?
                """,
                (exercise_id,),
            )
            row = await cursor.fetchone()
            return row["user_id"] if row else None

    @wraps_db_errors("Failed to create exercise")
    async def create(self, exercise: Exercise, order: int | None = None) -> Exercise:
        """Create a new exercise.

        When ``order`` is None the exercise goes after the workout's last one.
        """
        exercise_id = _new_id()
        now = utcnow().isoformat()
        async with connect(self.db_path) as db:
            if order is None:
                cursor = await db.execute(
                    'SELECT COALESCE(MAX("order") + 1, 0) FROM exercises WHERE workout_id = ?',
                    (exercise.workout_id,),
                )
                order = (await cursor.fetchone())[0]

            await db.execute(
                """
                INSERT INTO exercises
                (id, workout_id, name, description, type, sets, reps, current_count,
                 max_count, rest_duration, completed, "order", created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    exercise_id,
                    exercise.workout_id,
                    exercise.name,
                    exercise.description,
                    exercise.type.value,
                    exercise.sets,
                    exercise.reps,
                    exercise.current_count,
                    exercise.max_count,
                    exercise.rest_duration,
                    int(exercise.completed),
                    order,
                    now,
                    now,
                ),
            )
            await db.commit()
        return await self.get(exercise_id)

    @wraps_db_errors("Failed to update exercise")
    async def update(self, exercise_id: str, changes: dict) -> Exercise | None:
        """Apply a partial update; None when the exercise does not exist."""
        assignments, params = _set_clause(changes, EXERCISE_UPDATE_COLUMNS)
        assignments = ", ".join(filter(None, [assignments, "updated_at = ?"]))
        params.append(utcnow().isoformat())

        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"UPDATE exercises SET {assignments} WHERE id = ?",
                (*params, exercise_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                return None
        return await self.get(exercise_id)

    @wraps_db_errors("Failed to delete exercise")
    async def delete(self, exercise_id: str) -> bool:
        """Delete an exercise."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM exercises WHERE id = ?", (exercise_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise.from_dict(dict(row))
