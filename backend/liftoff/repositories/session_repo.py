from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import selectinload

from liftoff.models import Exercise, SessionExercise, WorkoutSession
from liftoff.repositories.base import BaseRepository

# session -> session exercises -> sets, in creation order
_POPULATED = selectinload(WorkoutSession.exercises).selectinload(SessionExercise.sets)

class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def get_for_user(self, user_id: str, session_id: str) -> Optional[WorkoutSession]:
        stmt = (
            select(WorkoutSession)
            .where(WorkoutSession.id == session_id, WorkoutSession.user_id == user_id)
            .options(_POPULATED)
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_active(self, user_id: str) -> Optional[WorkoutSession]:
        stmt = (
            select(WorkoutSession)
            .where(WorkoutSession.user_id == user_id, WorkoutSession.is_active.is_(True))
            .order_by(WorkoutSession.started_at.desc())
            .limit(1)
            .options(_POPULATED)
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalars().first()

    def list_completed(self, user_id: str) -> list[WorkoutSession]:
        stmt = (
            select(WorkoutSession)
            .where(
                WorkoutSession.user_id == user_id,
                WorkoutSession.is_active.is_(False),
                WorkoutSession.ended_at.is_not(None),
            )
            .order_by(WorkoutSession.ended_at.desc(), WorkoutSession.started_at.desc())
            .options(_POPULATED)
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: str, *, workout_id: str, workout_name: str, started_at: datetime) -> WorkoutSession:
        return self.insert(
            user_id=user_id,
            workout_id=workout_id,
            workout_name=workout_name,
            started_at=started_at,
            is_active=True,
        )

    def end(self, user_id: str, session_id: str, *, ended_at: datetime) -> int:
        """Conditionally end an active session. Returns the affected-row count."""
        stmt = (
            update(WorkoutSession)
            .where(
                WorkoutSession.id == session_id,
                WorkoutSession.user_id == user_id,
                WorkoutSession.is_active.is_(True),
            )
            .values(is_active=False, ended_at=ended_at, updated_at=ended_at)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount

class SessionExerciseRepository(BaseRepository[SessionExercise]):
    model = SessionExercise

    def count_for_session(self, session_id: str) -> int:
        stmt = select(func.count()).select_from(SessionExercise).where(SessionExercise.session_id == session_id)
        return self.db.execute(stmt).scalar_one()

    def snapshot(self, session_id: str, exercise: Exercise, *, position: int) -> SessionExercise:
        """Copy the exercise's current plan into the session."""
        return self.insert(
            session_id=session_id,
            exercise_id=exercise.id,
            exercise_name=exercise.name,
            planned_sets=exercise.sets,
            planned_reps=exercise.reps,
            planned_weight=exercise.weight,
            position=position,
        )
