from __future__ import annotations
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from liftoff.db import utcnow
from liftoff.models import Exercise, Workout
from liftoff.repositories.base import BaseRepository

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def get_for_user(self, user_id: str, workout_id: str) -> Optional[Workout]:
        stmt = (
            select(Workout)
            .where(Workout.id == workout_id, Workout.user_id == user_id)
            .options(selectinload(Workout.exercises))
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_user(self, user_id: str) -> list[Workout]:
        stmt = (
            select(Workout)
            .where(Workout.user_id == user_id)
            .options(selectinload(Workout.exercises))
            .order_by(Workout.created_at.desc(), Workout.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: str, *, name: str, workout_type: str) -> Workout:
        return self.insert(user_id=user_id, name=name, type=workout_type)

    def rename(self, workout: Workout, *, name: str) -> Workout:
        workout.name = name
        workout.updated_at = utcnow()
        self.db.flush()
        return workout

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def list_by_workout(self, workout_id: str) -> list[Exercise]:
        stmt = (
            select(Exercise)
            .where(Exercise.workout_id == workout_id)
            .order_by(Exercise.created_at.asc(), Exercise.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, workout_id: str, *, name: str, sets: int, reps: int, weight: float) -> Exercise:
        return self.insert(workout_id=workout_id, name=name, sets=sets, reps=reps, weight=weight)

    def update(self, exercise: Exercise, *, name: str, sets: int, reps: int, weight: float) -> Exercise:
        exercise.name = name
        exercise.sets = sets
        exercise.reps = reps
        exercise.weight = weight
        exercise.updated_at = utcnow()
        self.db.flush()
        return exercise
