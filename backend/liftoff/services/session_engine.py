"""Workout sessions: start, track, end.

A session is a copy of a workout taken when it starts. Each exercise becomes a
``SessionExercise`` holding its own name and plan, and each planned set becomes
an ``ExerciseSet`` pre-filled with the planned reps and weight. Editing or
deleting the workout afterwards does not touch sessions already started.

State per session is just ``active`` -> ``ended``; ending is terminal.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from liftoff.db import transaction, utcnow
from liftoff.errors import Conflict, InvalidArgument, NotFound
from liftoff.models import ExerciseSet, SessionExercise, WorkoutSession
from liftoff.repositories.session_repo import SessionExerciseRepository, SessionRepository
from liftoff.repositories.set_repo import SetRepository
from liftoff.repositories.workout_repo import ExerciseRepository, WorkoutRepository
from liftoff.services.guard import EntityKind, OwnershipGuard
from liftoff.services.validation import check_count, check_weight, clean_notes
from liftoff.storage import StorageBackend

log = logging.getLogger("uvicorn")

ACTIVE_SESSION_EXISTS = "An active session already exists; end it before starting another"


class SessionEngine:
    def __init__(self, db: Session, backend: StorageBackend):
        self.db = db
        self.sessions = SessionRepository(db, backend)
        self.session_exercises = SessionExerciseRepository(db, backend)
        self.sets = SetRepository(db, backend)
        self.workouts = WorkoutRepository(db, backend)
        self.exercises = ExerciseRepository(db, backend)
        self.guard = OwnershipGuard(db)

    # lifecycle
    def create_session(self, owner_id: str, workout_id: str) -> WorkoutSession:
        """Start a session from a workout and materialise every planned set.

        The session row, its session exercises and all of their sets are written
        in one transaction, from one read of the workout's exercises.
        """
        self.guard.require(owner_id, EntityKind.workout, workout_id)
        workout = self.workouts.get(workout_id)
        if workout is None:
            raise NotFound("Workout not found")

        n_sets = 0
        try:
            with transaction(self.db):
                if self.sessions.get_active(owner_id) is not None:
                    raise Conflict(ACTIVE_SESSION_EXISTS)
                started_at = utcnow()
                session = self.sessions.create(
                    owner_id, workout_id=workout.id, workout_name=workout.name, started_at=started_at
                )
                plan = self.exercises.list_by_workout(workout.id)
                for position, exercise in enumerate(plan):
                    se = self.session_exercises.snapshot(session.id, exercise, position=position)
                    for i in range(exercise.sets):
                        self.sets.create(se.id, reps=exercise.reps, weight=exercise.weight, position=i)
                        n_sets += 1
                session_id = session.id
        except IntegrityError as exc:
            # lost a race against a concurrent start for the same user
            raise Conflict(ACTIVE_SESSION_EXISTS) from exc

        log.info("session started id=%s user=%s workout=%s exercises=%d sets=%d",
                 session_id, owner_id, workout_id, len(plan), n_sets)
        return self._load(owner_id, session_id)

    def end_session(self, owner_id: str, session_id: str) -> WorkoutSession:
        """End an active session.

        Unknown, foreign and already-ended sessions all raise ``Conflict``.
        """
        if self.guard.owner_of(EntityKind.session, session_id) != owner_id:
            raise Conflict("Session not found or already ended")
        with transaction(self.db):
            ended = self.sessions.end(owner_id, session_id, ended_at=utcnow())
            if ended == 0:
                raise Conflict("Session not found or already ended")
        log.info("session ended id=%s user=%s", session_id, owner_id)
        return self._load(owner_id, session_id)

    # reads
    def get_active_session(self, owner_id: str) -> Optional[WorkoutSession]:
        return self.sessions.get_active(owner_id)

    def get_session(self, owner_id: str, session_id: str) -> WorkoutSession:
        self.guard.require(owner_id, EntityKind.session, session_id)
        return self._load(owner_id, session_id)

    def get_completed_sessions(self, owner_id: str) -> list[WorkoutSession]:
        return self.sessions.list_completed(owner_id)

    # children
    def add_session_exercise(self, owner_id: str, session_id: str, exercise_id: str) -> SessionExercise:
        """Copy one more planned exercise into a session, without sets."""
        self.guard.require(owner_id, EntityKind.session, session_id)
        self.guard.require(owner_id, EntityKind.exercise, exercise_id)
        exercise = self.exercises.get(exercise_id)
        if exercise is None:
            raise NotFound("Exercise not found")
        with transaction(self.db):
            position = self.session_exercises.count_for_session(session_id)
            se = self.session_exercises.snapshot(session_id, exercise, position=position)
        return se

    def add_set(self, owner_id: str, session_exercise_id: str, reps: int, weight: float) -> ExerciseSet:
        """Append an extra, not yet completed set to a session exercise."""
        reps = check_count(reps, "reps")
        weight = check_weight(weight)
        self.guard.require(owner_id, EntityKind.session_exercise, session_exercise_id)
        with transaction(self.db):
            position = self.sets.next_position(session_exercise_id)
            s = self.sets.create(session_exercise_id, reps=reps, weight=weight, position=position)
        return s

    def log_set(self, owner_id: str, set_id: str, reps: int, weight: float,
                notes: str | None = None) -> ExerciseSet:
        """Record what was actually done and mark the set completed.

        Logging the same set again overwrites the previous values.
        """
        reps = check_count(reps, "reps")
        weight = check_weight(weight)
        notes = clean_notes(notes)
        self.guard.require(owner_id, EntityKind.exercise_set, set_id)
        with transaction(self.db):
            s = self.sets.get(set_id)
            if s is None:
                raise NotFound("Exercise set not found")
            self.sets.record(s, reps=reps, weight=weight, notes=notes)
        return s

    def complete_set(self, owner_id: str, session_exercise_id: str, index: int) -> ExerciseSet:
        """Mark the ``index``-th set (creation order, 0-based) completed as planned."""
        self.guard.require(owner_id, EntityKind.session_exercise, session_exercise_id)
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidArgument(f"invalid set index: {index!r}")
        with transaction(self.db):
            sets = self.sets.list_by_session_exercise(session_exercise_id, lock=True)
            if not 0 <= index < len(sets):
                raise InvalidArgument(f"invalid set index: {index} (session exercise has {len(sets)} sets)")
            s = self.sets.mark_completed(sets[index])
        return s

    def _load(self, owner_id: str, session_id: str) -> WorkoutSession:
        session = self.sessions.get_for_user(owner_id, session_id)
        if session is None:
            raise NotFound("Session not found")
        return session
