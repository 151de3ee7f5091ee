"""Exercise routes.

By default these trust the caller to have obtained the workout or
exercise id through an owner-scoped workout query, and do not re-check
ownership. Setting ``strict_exercise_ownership`` makes every route
confirm that the parent workout belongs to the caller.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...config import Settings
from ...db import ExerciseRepository, WorkoutRepository
from ...models.exercise import Exercise
from ...schemas import ExerciseCreate, ExerciseRead, ExerciseUpdate
from ..auth import Claims, current_claims
from ..deps import get_exercise_repo, get_settings, get_workout_repo

router = APIRouter(prefix="/api", tags=["exercises"])


async def _check_workout_owner(
    workout_id: str,
    claims: Claims,
    settings: Settings,
    workouts: WorkoutRepository,
) -> None:
    if not settings.strict_exercise_ownership:
        return
    if await workouts.get(workout_id, claims.sub) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")


async def _check_exercise_owner(
    exercise_id: str,
    claims: Claims,
    settings: Settings,
    exercises: ExerciseRepository,
) -> bool:
    """False when strict ownership is on and the caller does not own it."""
    if not settings.strict_exercise_ownership:
        return True
    return await exercises.get_owner_id(exercise_id) == claims.sub


@router.get("/workouts/{workout_id}/exercises", response_model=list[ExerciseRead])
async def list_exercises(
    workout_id: str,
    claims: Claims = Depends(current_claims),
    settings: Settings = Depends(get_settings),
    workouts: WorkoutRepository = Depends(get_workout_repo),
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    """Exercises of a workout in display order."""
    await _check_workout_owner(workout_id, claims, settings, workouts)
    return [
        ExerciseRead.from_exercise(e)
        for e in await exercises.list_by_workout(workout_id)
    ]


@router.post(
    "/workouts/{workout_id}/exercises",
    response_model=ExerciseRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_exercise(
    workout_id: str,
    payload: ExerciseCreate,
    claims: Claims = Depends(current_claims),
    settings: Settings = Depends(get_settings),
    workouts: WorkoutRepository = Depends(get_workout_repo),
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    """Add an exercise to a workout."""
    await _check_workout_owner(workout_id, claims, settings, workouts)
    data = payload.model_dump(exclude={"order"})
    exercise = await exercises.create(
        Exercise(workout_id=workout_id, **data),
        order=payload.order,
    )
    return ExerciseRead.from_exercise(exercise)


@router.patch("/exercises/{exercise_id}", response_model=ExerciseRead | None)
async def update_exercise(
    exercise_id: str,
    payload: ExerciseUpdate,
    claims: Claims = Depends(current_claims),
    settings: Settings = Depends(get_settings),
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    """Apply a partial update; a null body means nothing matched."""
    if not await _check_exercise_owner(exercise_id, claims, settings, exercises):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    exercise = await exercises.update(exercise_id, payload.changes())
    if exercise is None:
        return None
    return ExerciseRead.from_exercise(exercise)


@router.delete("/exercises/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(
    exercise_id: str,
    claims: Claims = Depends(current_claims),
    settings: Settings = Depends(get_settings),
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    """Delete an exercise."""
    if not await _check_exercise_owner(exercise_id, claims, settings, exercises):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    await exercises.delete(exercise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
