from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from liftoff.repositories.progress_repo import ProgressRepository
from liftoff.storage import StorageBackend


@dataclass(frozen=True)
class ProgressEntry:
    exercise_name: str
    date: date
    max_weight: float
    total_volume: float


class ProgressAggregator:
    """Per exercise, per UTC day: heaviest completed set and total volume.

    The day is the one the session started on. Incomplete sets are ignored, so
    an exercise/day with nothing completed has no entry at all.
    """

    def __init__(self, db: Session, backend: StorageBackend):
        self.repo = ProgressRepository(db, backend)

    def get_progress(self, owner_id: str) -> list[ProgressEntry]:
        entries = [
            ProgressEntry(
                exercise_name=row.exercise_name,
                date=row.day,
                max_weight=row.max_weight,
                total_volume=row.total_volume,
            )
            for row in self.repo.completed_set_summary(owner_id)
        ]
        # newest day first, then exercise name
        entries.sort(key=lambda e: e.exercise_name)
        entries.sort(key=lambda e: e.date, reverse=True)
        return entries
