from fastapi import APIRouter, Depends, status
from liftoff.deps.auth import get_current_user
from liftoff.deps.services import get_workout_store
from liftoff.models import User
from liftoff.schemas.workout import ExerciseRead, WorkoutCreate, WorkoutRead, WorkoutRename
from liftoff.services import WorkoutStore

router = APIRouter(prefix="/workouts", tags=["workouts"])

@router.get("", response_model=list[WorkoutRead])
def list_workouts(store: WorkoutStore = Depends(get_workout_store), current: User = Depends(get_current_user)):
    return store.list_workouts(current.id)

@router.post("", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
def create_workout(
    payload: WorkoutCreate,
    store: WorkoutStore = Depends(get_workout_store),
    current: User = Depends(get_current_user),
):
    return store.create_workout(current.id, payload.name, payload.type.value)

@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: str, store: WorkoutStore = Depends(get_workout_store),
                current: User = Depends(get_current_user)):
    return store.get_workout(current.id, workout_id)

@router.patch("/{workout_id}", response_model=WorkoutRead)
def rename_workout(
    workout_id: str,
    payload: WorkoutRename,
    store: WorkoutStore = Depends(get_workout_store),
    current: User = Depends(get_current_user),
):
    return store.rename_workout(current.id, workout_id, payload.name)

@router.delete("/{workout_id}")
def delete_workout(workout_id: str, store: WorkoutStore = Depends(get_workout_store),
                   current: User = Depends(get_current_user)):
    store.delete_workout(current.id, workout_id)
    return {"message": "Workout deleted successfully"}

@router.get("/{workout_id}/exercises", response_model=list[ExerciseRead])
def list_exercises(workout_id: str, store: WorkoutStore = Depends(get_workout_store),
                   current: User = Depends(get_current_user)):
    return store.list_exercises(current.id, workout_id)
