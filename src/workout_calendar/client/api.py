"""Async HTTP client for the workout-calendar API."""

import logging
from datetime import date

import httpx
from pydantic import BaseModel, ValidationError

from ..models.exercise import Exercise
from ..models.user import User
from ..models.workout import Workout
from ..schemas import (
    ExerciseCreate,
    ExerciseRead,
    ExerciseUpdate,
    UserRead,
    WorkoutCreate,
    WorkoutRead,
    WorkoutUpdate,
)
from .cache import QueryCache

logger = logging.getLogger(__name__)

WORKOUTS: tuple[str, ...] = ("workouts",)


def workout_key(workout_id: str) -> tuple[str, ...]:
    return ("workouts", workout_id)


def exercises_key(workout_id: str) -> tuple[str, ...]:
    return ("workouts", workout_id, "exercises")


def date_key(day: date) -> tuple[str, ...]:
    return ("workouts", "date", day.isoformat())


class ApiError(Exception):
    """A request was rejected or failed.

    ``errors`` carries per-field validation details when the failure was a
    validation error (client- or server-side).
    """

    def __init__(self, status_code: int, message: str, errors: list[dict] | None = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            response.status_code,
            body.get("message") or response.reason_phrase,
            body.get("errors"),
        )

    @classmethod
    def from_validation(cls, exc: ValidationError) -> "ApiError":
        errors = [
            {
                "field": ".".join(str(p) for p in error["loc"]) or None,
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        return cls(400, "Invalid request data", errors)


def _payload(schema: type[BaseModel], fields: dict) -> dict:
    """Validate ``fields`` locally and render them in wire format."""
    try:
        model = schema.model_validate(fields)
    except ValidationError as e:
        logger.warning("Rejected %s with %d error(s)", schema.__name__, e.error_count())
        raise ApiError.from_validation(e) from e
    return model.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ApiClient:
    """Talks to the API, caching reads and invalidating them after writes.

    Holds the session cookie between calls, so one client corresponds to
    one signed-in user.
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        cache: QueryCache | None = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
        )
        self.cache = cache or QueryCache()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict | None = None,
        headers: dict | None = None,
    ) -> httpx.Response:
        try:
            response = await self._http.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(0, f"Could not reach server: {e}") from e
        if response.is_error:
            error = ApiError.from_response(response)
            logger.warning("%s %s -> %s %s", method, path, error.status_code, error.message)
            raise error
        return response

    # --- Session ---

    async def login(self, identity_headers: dict[str, str]) -> None:
        """Sign in by presenting identity headers to the login endpoint."""
        await self._request("GET", "/api/login", headers=identity_headers)
        self.cache.clear()

    async def logout(self) -> None:
        await self._request("GET", "/api/logout")
        self.cache.clear()

    async def current_user(self) -> User:
        response = await self._request("GET", "/api/auth/user")
        return UserRead.model_validate(response.json()).to_user()

    # --- Workout queries ---

    async def list_workouts(self) -> list[Workout]:
        """All of the user's workouts, newest date first."""

        async def load():
            response = await self._request("GET", "/api/workouts")
            return [WorkoutRead.model_validate(w).to_workout() for w in response.json()]

        return await self.cache.fetch(WORKOUTS, load)

    async def workouts_on(self, day: date) -> list[Workout]:
        """Workouts scheduled on ``day``."""

        async def load():
            response = await self._request("GET", f"/api/workouts/date/{day.isoformat()}")
            return [WorkoutRead.model_validate(w).to_workout() for w in response.json()]

        return await self.cache.fetch(date_key(day), load)

    async def get_workout(self, workout_id: str) -> Workout:
        """A single workout; raises ApiError(404) when it is not the user's."""

        async def load():
            response = await self._request("GET", f"/api/workouts/{workout_id}")
            return WorkoutRead.model_validate(response.json()).to_workout()

        return await self.cache.fetch(workout_key(workout_id), load)

    async def list_exercises(self, workout_id: str) -> list[Exercise]:
        """Exercises of a workout in display order."""

        async def load():
            response = await self._request("GET", f"/api/workouts/{workout_id}/exercises")
            return [ExerciseRead.model_validate(e).to_exercise() for e in response.json()]

        return await self.cache.fetch(exercises_key(workout_id), load)

    # --- Workout mutations ---

    async def create_workout(self, **fields) -> Workout:
        response = await self._request(
            "POST", "/api/workouts", json=_payload(WorkoutCreate, fields)
        )
        self.cache.invalidate(WORKOUTS)
        return WorkoutRead.model_validate(response.json()).to_workout()

    async def update_workout(self, workout_id: str, **changes) -> Workout | None:
        """Apply a partial update; None when the server matched nothing."""
        response = await self._request(
            "PATCH", f"/api/workouts/{workout_id}", json=_payload(WorkoutUpdate, changes)
        )
        self.cache.invalidate(WORKOUTS)
        data = response.json()
        if data is None:
            return None
        return WorkoutRead.model_validate(data).to_workout()

    async def delete_workout(self, workout_id: str) -> None:
        await self._request("DELETE", f"/api/workouts/{workout_id}")
        self.cache.invalidate(WORKOUTS)

    # --- Exercise mutations ---

    async def create_exercise(self, workout_id: str, **fields) -> Exercise:
        response = await self._request(
            "POST",
            f"/api/workouts/{workout_id}/exercises",
            json=_payload(ExerciseCreate, fields),
        )
        self.cache.invalidate(exercises_key(workout_id))
        return ExerciseRead.model_validate(response.json()).to_exercise()

    async def update_exercise(self, exercise_id: str, **changes) -> Exercise | None:
        """Apply a partial update; None when the exercise does not exist."""
        response = await self._request(
            "PATCH", f"/api/exercises/{exercise_id}", json=_payload(ExerciseUpdate, changes)
        )
        data = response.json()
        if data is None:
            return None
        exercise = ExerciseRead.model_validate(data).to_exercise()
        self.cache.invalidate(exercises_key(exercise.workout_id))
        return exercise

    async def delete_exercise(self, exercise_id: str, workout_id: str | None = None) -> None:
        """Delete an exercise.

        Without ``workout_id`` every workout query is invalidated, since the
        parent is unknown.
        """
        await self._request("DELETE", f"/api/exercises/{exercise_id}")
        self.cache.invalidate(exercises_key(workout_id) if workout_id else WORKOUTS)
