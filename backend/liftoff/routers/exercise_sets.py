from fastapi import APIRouter, Depends, status
from liftoff.deps.auth import get_current_user
from liftoff.deps.services import get_session_engine
from liftoff.models import User
from liftoff.schemas.exercise_set import SetComplete, SetCreate, SetLog, SetRead
from liftoff.services import SessionEngine

router = APIRouter(prefix="/exercise-sets", tags=["sets"])

@router.post("", response_model=SetRead, status_code=status.HTTP_201_CREATED)
def add_set(
    payload: SetCreate,
    engine: SessionEngine = Depends(get_session_engine),
    current: User = Depends(get_current_user),
):
    return engine.add_set(current.id, payload.session_exercise_id, reps=payload.reps, weight=payload.weight)

@router.put("/{set_id}", response_model=SetRead)
def log_set(
    set_id: str,
    payload: SetLog,
    engine: SessionEngine = Depends(get_session_engine),
    current: User = Depends(get_current_user),
):
    return engine.log_set(current.id, set_id, reps=payload.reps, weight=payload.weight, notes=payload.notes)

# the path id here is the session exercise; the body picks which of its sets
@router.put("/{session_exercise_id}/complete", response_model=SetRead)
def complete_set(
    session_exercise_id: str,
    payload: SetComplete,
    engine: SessionEngine = Depends(get_session_engine),
    current: User = Depends(get_current_user),
):
    return engine.complete_set(current.id, session_exercise_id, payload.set_index)
