from dataclasses import dataclass
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Boolean, ForeignKey, Index, Integer, Numeric, String, text
from liftoff.db import Base, new_id, utcnow
from liftoff.models.types import UTCDateTime

class WorkoutSession(Base):
    __tablename__ = "workout_sessions"
    __table_args__ = (
        # at most one active session per user
        Index(
            "uq_workout_sessions_active_user",
            "user_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    # kept for history after the workout is deleted
    workout_id: Mapped[str | None] = mapped_column(
        ForeignKey("workouts.id", ondelete="SET NULL"), index=True, nullable=True
    )
    workout_name: Mapped[str] = mapped_column(String(255), nullable=False)
    started_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)
    ended_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)

    exercises = relationship(
        "SessionExercise",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[SessionExercise.created_at, SessionExercise.position]",
    )

@dataclass(frozen=True)
class ExerciseSnapshot:
    """The planned exercise as it looked when it was copied into a session."""
    id: str | None
    name: str
    sets: int
    reps: int
    weight: float

class SessionExercise(Base):
    __tablename__ = "session_exercises"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    session_id: Mapped[str] = mapped_column(
        ForeignKey("workout_sessions.id", ondelete="CASCADE"), index=True, nullable=False
    )
    exercise_id: Mapped[str | None] = mapped_column(
        ForeignKey("exercises.id", ondelete="SET NULL"), index=True, nullable=True
    )
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    planned_sets: Mapped[int] = mapped_column(Integer, nullable=False)
    planned_reps: Mapped[int] = mapped_column(Integer, nullable=False)
    planned_weight: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)

    session = relationship("WorkoutSession", back_populates="exercises")
    sets = relationship(
        "ExerciseSet",
        back_populates="session_exercise",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[ExerciseSet.created_at, ExerciseSet.position]",
    )

    @property
    def exercise(self) -> ExerciseSnapshot:
        return ExerciseSnapshot(
            id=self.exercise_id,
            name=self.exercise_name,
            sets=self.planned_sets,
            reps=self.planned_reps,
            weight=self.planned_weight,
        )
