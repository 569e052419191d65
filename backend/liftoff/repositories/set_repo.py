from __future__ import annotations

from sqlalchemy import func, select

from liftoff.db import utcnow
from liftoff.models import ExerciseSet
from liftoff.repositories.base import BaseRepository

class SetRepository(BaseRepository[ExerciseSet]):
    model = ExerciseSet

    def list_by_session_exercise(self, session_exercise_id: str, *, lock: bool = False) -> list[ExerciseSet]:
        stmt = (
            select(ExerciseSet)
            .where(ExerciseSet.session_exercise_id == session_exercise_id)
            .order_by(ExerciseSet.created_at.asc(), ExerciseSet.position.asc())
            .execution_options(populate_existing=True)
        )
        if lock:
            stmt = self.backend.lock_for_update(stmt)
        return list(self.db.execute(stmt).scalars().all())

    def next_position(self, session_exercise_id: str) -> int:
        stmt = select(func.max(ExerciseSet.position)).where(
            ExerciseSet.session_exercise_id == session_exercise_id
        )
        current = self.db.execute(stmt).scalar_one()
        return 0 if current is None else current + 1

    def create(self, session_exercise_id: str, *, reps: int, weight: float, position: int) -> ExerciseSet:
        return self.insert(
            session_exercise_id=session_exercise_id,
            reps=reps,
            weight=weight,
            completed=False,
            position=position,
        )

    def record(self, s: ExerciseSet, *, reps: int, weight: float, notes: str | None) -> ExerciseSet:
        s.reps = reps
        s.weight = weight
        s.notes = notes
        s.completed = True
        s.updated_at = utcnow()
        self.db.flush()
        return s

    def mark_completed(self, s: ExerciseSet) -> ExerciseSet:
        s.completed = True
        s.updated_at = utcnow()
        self.db.flush()
        return s
