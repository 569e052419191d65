from typing import Optional
from fastapi import APIRouter, Depends, status
from liftoff.deps.auth import get_current_user
from liftoff.deps.services import get_session_engine
from liftoff.models import User
from liftoff.schemas.session import SessionCreate, SessionExerciseCreate, SessionExerciseRead, SessionRead
from liftoff.services import SessionEngine

router = APIRouter(prefix="/sessions", tags=["sessions"])

@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def create_session(
    payload: SessionCreate,
    engine: SessionEngine = Depends(get_session_engine),
    current: User = Depends(get_current_user),
):
    return engine.create_session(current.id, payload.workout_id)

# static paths first so they are not captured by /{session_id}
@router.get("/active", response_model=Optional[SessionRead])
def get_active_session(engine: SessionEngine = Depends(get_session_engine),
                       current: User = Depends(get_current_user)):
    # null body when nothing is active
    return engine.get_active_session(current.id)

@router.get("/completed", response_model=list[SessionRead])
def list_completed_sessions(engine: SessionEngine = Depends(get_session_engine),
                            current: User = Depends(get_current_user)):
    return engine.get_completed_sessions(current.id)

@router.get("/{session_id}", response_model=SessionRead)
def get_session(session_id: str, engine: SessionEngine = Depends(get_session_engine),
                current: User = Depends(get_current_user)):
    return engine.get_session(current.id, session_id)

@router.put("/{session_id}/end", response_model=SessionRead)
def end_session(session_id: str, engine: SessionEngine = Depends(get_session_engine),
                current: User = Depends(get_current_user)):
    return engine.end_session(current.id, session_id)

@router.post("/{session_id}/exercises", response_model=SessionExerciseRead, status_code=status.HTTP_201_CREATED)
def add_session_exercise(
    session_id: str,
    payload: SessionExerciseCreate,
    engine: SessionEngine = Depends(get_session_engine),
    current: User = Depends(get_current_user),
):
    return engine.add_session_exercise(current.id, session_id, payload.exercise_id)
