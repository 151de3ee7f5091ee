"""Workout routes. Every query is scoped to the signed-in user."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...db import WorkoutRepository
from ...models.workout import Workout
from ...schemas import WorkoutCreate, WorkoutRead, WorkoutUpdate
from ..auth import Claims, current_claims
from ..deps import get_workout_repo

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    claims: Claims = Depends(current_claims),
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    """All of the caller's workouts, newest date first."""
    return [WorkoutRead.from_workout(w) for w in await workouts.list_by_user(claims.sub)]


@router.get("/date/{day}", response_model=list[WorkoutRead])
async def list_workouts_on_date(
    day: date,
    claims: Claims = Depends(current_claims),
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    """The caller's workouts scheduled on ``day`` (yyyy-MM-dd)."""
    return [
        WorkoutRead.from_workout(w)
        for w in await workouts.list_by_date(claims.sub, day)
    ]


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: str,
    claims: Claims = Depends(current_claims),
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    """A single workout; 404 when missing or owned by someone else."""
    workout = await workouts.get(workout_id, claims.sub)
    if workout is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return WorkoutRead.from_workout(workout)


@router.post("", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
async def create_workout(
    payload: WorkoutCreate,
    claims: Claims = Depends(current_claims),
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    """Create a workout owned by the caller."""
    workout = Workout(user_id=claims.sub, **payload.model_dump())
    return WorkoutRead.from_workout(await workouts.create(workout))


@router.patch("/{workout_id}", response_model=WorkoutRead | None)
async def update_workout(
    workout_id: str,
    payload: WorkoutUpdate,
    claims: Claims = Depends(current_claims),
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    """Apply a partial update.

    Answers 200 with a null body when no workout of the caller matches.
    """
    workout = await workouts.update(workout_id, claims.sub, payload.changes())
    if workout is None:
        return None
    return WorkoutRead.from_workout(workout)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(
    workout_id: str,
    claims: Claims = Depends(current_claims),
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    """Delete a workout together with its exercises."""
    await workouts.delete(workout_id, claims.sub)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
