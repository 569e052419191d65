from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from liftoff.db import transaction
from liftoff.errors import NotFound, ValidationError
from liftoff.models import Exercise, Workout, WorkoutType
from liftoff.repositories.workout_repo import ExerciseRepository, WorkoutRepository
from liftoff.services.guard import EntityKind, OwnershipGuard
from liftoff.services.validation import check_count, check_weight, clean_name
from liftoff.storage import StorageBackend

log = logging.getLogger("uvicorn")


def _check_type(value: str | None) -> str:
    if value is None:
        return WorkoutType.strength.value
    try:
        return WorkoutType(value).value
    except ValueError:
        allowed = ", ".join(t.value for t in WorkoutType)
        raise ValidationError("type", f"must be one of {allowed}")


class WorkoutStore:
    """Workout plans and their exercises, scoped to the calling user."""

    def __init__(self, db: Session, backend: StorageBackend):
        self.db = db
        self.workouts = WorkoutRepository(db, backend)
        self.exercises = ExerciseRepository(db, backend)
        self.guard = OwnershipGuard(db)

    # workouts
    def create_workout(self, owner_id: str, name: str, workout_type: str | None = None) -> Workout:
        name = clean_name(name)
        workout_type = _check_type(workout_type)
        with transaction(self.db):
            workout = self.workouts.create(owner_id, name=name, workout_type=workout_type)
        return self._load(owner_id, workout.id)

    def list_workouts(self, owner_id: str) -> list[Workout]:
        return self.workouts.list_by_user(owner_id)

    def get_workout(self, owner_id: str, workout_id: str) -> Workout:
        self.guard.require(owner_id, EntityKind.workout, workout_id)
        return self._load(owner_id, workout_id)

    def rename_workout(self, owner_id: str, workout_id: str, name: str) -> Workout:
        name = clean_name(name)
        workout = self.get_workout(owner_id, workout_id)
        with transaction(self.db):
            self.workouts.rename(workout, name=name)
        return self._load(owner_id, workout_id)

    def delete_workout(self, owner_id: str, workout_id: str) -> None:
        """Delete the plan and its exercises. Sessions started from it are kept."""
        workout = self.get_workout(owner_id, workout_id)
        with transaction(self.db):
            self.workouts.delete(workout)
        log.info("workout deleted id=%s user=%s", workout_id, owner_id)

    # exercises
    def create_exercise(self, owner_id: str, workout_id: str, name: str,
                        sets: int, reps: int, weight: float) -> Exercise:
        name = clean_name(name)
        sets = check_count(sets, "sets")
        reps = check_count(reps, "reps")
        weight = check_weight(weight)
        self.guard.require(owner_id, EntityKind.workout, workout_id)
        with transaction(self.db):
            exercise = self.exercises.create(workout_id, name=name, sets=sets, reps=reps, weight=weight)
        return exercise

    def list_exercises(self, owner_id: str, workout_id: str) -> list[Exercise]:
        self.guard.require(owner_id, EntityKind.workout, workout_id)
        return self.exercises.list_by_workout(workout_id)

    def get_exercise(self, owner_id: str, exercise_id: str) -> Exercise:
        self.guard.require(owner_id, EntityKind.exercise, exercise_id)
        exercise = self.exercises.get(exercise_id)
        if exercise is None:
            raise NotFound("Exercise not found")
        return exercise

    def update_exercise(self, owner_id: str, exercise_id: str, name: str,
                        sets: int, reps: int, weight: float) -> Exercise:
        """Change the plan. Sessions already started keep their own copy."""
        name = clean_name(name)
        sets = check_count(sets, "sets")
        reps = check_count(reps, "reps")
        weight = check_weight(weight)
        exercise = self.get_exercise(owner_id, exercise_id)
        with transaction(self.db):
            self.exercises.update(exercise, name=name, sets=sets, reps=reps, weight=weight)
        return exercise

    def delete_exercise(self, owner_id: str, exercise_id: str) -> None:
        exercise = self.get_exercise(owner_id, exercise_id)
        with transaction(self.db):
            self.exercises.delete(exercise)

    def _load(self, owner_id: str, workout_id: str) -> Workout:
        workout = self.workouts.get_for_user(owner_id, workout_id)
        if workout is None:
            raise NotFound("Workout not found")
        return workout
