from fastapi import APIRouter, Depends, status
from liftoff.deps.auth import get_current_user
from liftoff.deps.services import get_workout_store
from liftoff.models import User
from liftoff.schemas.workout import ExerciseCreate, ExerciseRead, ExerciseUpdate
from liftoff.services import WorkoutStore

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def create_exercise(
    payload: ExerciseCreate,
    store: WorkoutStore = Depends(get_workout_store),
    current: User = Depends(get_current_user),
):
    return store.create_exercise(
        current.id,
        payload.workout_id,
        name=payload.name,
        sets=payload.sets,
        reps=payload.reps,
        weight=payload.weight,
    )

@router.put("/{exercise_id}", response_model=ExerciseRead)
def update_exercise(
    exercise_id: str,
    payload: ExerciseUpdate,
    store: WorkoutStore = Depends(get_workout_store),
    current: User = Depends(get_current_user),
):
    return store.update_exercise(
        current.id,
        exercise_id,
        name=payload.name,
        sets=payload.sets,
        reps=payload.reps,
        weight=payload.weight,
    )

@router.delete("/{exercise_id}")
def delete_exercise(exercise_id: str, store: WorkoutStore = Depends(get_workout_store),
                    current: User = Depends(get_current_user)):
    store.delete_exercise(current.id, exercise_id)
    return {"message": "Exercise deleted"}
