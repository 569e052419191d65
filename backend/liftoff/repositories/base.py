from __future__ import annotations
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

from liftoff.db import new_id, utcnow
from liftoff.storage import StorageBackend

T = TypeVar("T")  # SQLAlchemy model type

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style.

    Repositories never commit; the store or engine that owns the unit of work
    does (see ``liftoff.db.transaction``).
    """
    model: type[T]

    def __init__(self, db: Session, backend: StorageBackend):
        self.db = db
        self.backend = backend

    def get(self, entity_id: str) -> T | None:
        return self.db.get(self.model, entity_id)

    def insert(self, **values: Any) -> T:
        """Insert one row with a caller-generated id and return it loaded."""
        now = utcnow()
        values.setdefault("id", new_id())
        values.setdefault("created_at", now)
        if hasattr(self.model, "updated_at"):
            values.setdefault("updated_at", values["created_at"])
        return self.backend.insert_row(self.db, self.model, values)

    def delete(self, entity: T) -> None:
        self.db.delete(entity)
        self.db.flush()
