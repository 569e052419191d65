from __future__ import annotations
from datetime import date
from typing import NamedTuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from liftoff.models import ExerciseSet, SessionExercise, WorkoutSession
from liftoff.storage import StorageBackend

class ProgressRow(NamedTuple):
    exercise_name: str
    day: date
    max_weight: float
    total_volume: float

class ProgressRepository:
    def __init__(self, db: Session, backend: StorageBackend):
        self.db = db
        self.backend = backend

    def completed_set_summary(self, user_id: str) -> list[ProgressRow]:
        """Max weight and weight x reps volume per exercise name and UTC day.

        Only completed sets of sessions owned by ``user_id`` are counted.
        """
        day = self.backend.day_bucket(WorkoutSession.started_at)
        stmt = (
            select(
                SessionExercise.exercise_name.label("exercise_name"),
                day.label("day"),
                func.max(ExerciseSet.weight).label("max_weight"),
                func.sum(ExerciseSet.weight * ExerciseSet.reps).label("total_volume"),
            )
            .select_from(ExerciseSet)
            .join(SessionExercise, ExerciseSet.session_exercise_id == SessionExercise.id)
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)
            .where(WorkoutSession.user_id == user_id, ExerciseSet.completed.is_(True))
            .group_by(SessionExercise.exercise_name, day)
        )
        return [
            ProgressRow(
                exercise_name=r.exercise_name,
                day=self.backend.to_date(r.day),
                max_weight=float(r.max_weight or 0),
                total_volume=float(r.total_volume or 0),
            )
            for r in self.db.execute(stmt)
        ]
