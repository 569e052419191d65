"""Ownership checks.

Every entity resolves to exactly one owning user by walking its parents:

    ExerciseSet -> SessionExercise -> WorkoutSession -> User
    Exercise -> Workout -> User

``OwnershipGuard.require`` is the single place that walks those chains. A row
that does not exist and a row that belongs to someone else raise the same
``NotFound``.
"""
from __future__ import annotations

from enum import Enum

from sqlalchemy import select
from sqlalchemy.orm import Session

from liftoff.errors import NotFound
from liftoff.models import Exercise, ExerciseSet, SessionExercise, Workout, WorkoutSession


class EntityKind(str, Enum):
    workout = "workout"
    exercise = "exercise"
    session = "session"
    session_exercise = "session_exercise"
    exercise_set = "exercise_set"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    EntityKind.workout: "Workout",
    EntityKind.exercise: "Exercise",
    EntityKind.session: "Session",
    EntityKind.session_exercise: "Session exercise",
    EntityKind.exercise_set: "Exercise set",
}


def _owner_query(kind: EntityKind, entity_id: str):
    if kind is EntityKind.workout:
        return select(Workout.user_id).where(Workout.id == entity_id)
    if kind is EntityKind.exercise:
        return (
            select(Workout.user_id)
            .join(Exercise, Exercise.workout_id == Workout.id)
            .where(Exercise.id == entity_id)
        )
    if kind is EntityKind.session:
        return select(WorkoutSession.user_id).where(WorkoutSession.id == entity_id)
    if kind is EntityKind.session_exercise:
        return (
            select(WorkoutSession.user_id)
            .join(SessionExercise, SessionExercise.session_id == WorkoutSession.id)
            .where(SessionExercise.id == entity_id)
        )
    if kind is EntityKind.exercise_set:
        return (
            select(WorkoutSession.user_id)
            .join(SessionExercise, SessionExercise.session_id == WorkoutSession.id)
            .join(ExerciseSet, ExerciseSet.session_exercise_id == SessionExercise.id)
            .where(ExerciseSet.id == entity_id)
        )
    raise ValueError(f"unknown entity kind {kind!r}")


class OwnershipGuard:
    def __init__(self, db: Session):
        self.db = db

    def owner_of(self, kind: EntityKind, entity_id: str) -> str | None:
        """Owning user id of the entity, or None when it does not exist."""
        if not entity_id:
            return None
        return self.db.execute(_owner_query(kind, entity_id)).scalar_one_or_none()

    def require(self, caller_id: str | None, kind: EntityKind, entity_id: str) -> str:
        owner = self.owner_of(kind, entity_id)
        if caller_id is None or owner is None or owner != caller_id:
            raise NotFound(f"{kind.label} not found")
        return owner
