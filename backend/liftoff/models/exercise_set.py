from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text
from liftoff.db import Base, new_id, utcnow
from liftoff.models.types import UTCDateTime

class ExerciseSet(Base):
    __tablename__ = "exercise_sets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    session_exercise_id: Mapped[str] = mapped_column(
        ForeignKey("session_exercises.id", ondelete="CASCADE"), index=True, nullable=False
    )
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)

    session_exercise = relationship("SessionExercise", back_populates="sets")
