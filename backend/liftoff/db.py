from __future__ import annotations

import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from liftoff.errors import StorageError
from liftoff.settings import Settings
from liftoff.storage import StorageBackend, select_backend

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass

def new_id() -> str:
    """Random 128-bit identifier, generated here rather than by either backend."""
    return str(uuid.uuid4())

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

@dataclass
class Database:
    """Everything that depends on the backend chosen at start-up.

    Built once by ``connect`` and passed around explicitly; there is no
    module-level engine.
    """
    backend: StorageBackend
    engine: Engine
    session_factory: sessionmaker

    @classmethod
    def connect(cls, settings: Settings) -> "Database":
        from liftoff import models  # noqa: F401  # registers every table on Base

        backend, engine = select_backend(settings)
        try:
            backend.prepare(engine, Base.metadata)
        except SQLAlchemyError as exc:
            engine.dispose()
            raise StorageError(f"could not prepare {backend.name} schema") from exc
        factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
        return cls(backend=backend, engine=engine, session_factory=factory)

    def session(self) -> Session:
        return self.session_factory()

    def ping(self) -> None:
        self.backend.ping(self.engine)

    def close(self) -> None:
        self.engine.dispose()

@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit on success, roll back on any failure.

    Driver errors come out as ``StorageError``; ``IntegrityError`` is re-raised
    as-is so the caller can turn a constraint hit into a domain error.
    """
    try:
        yield db
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(f"storage failure: {exc.__class__.__name__}") from exc
    except BaseException:
        db.rollback()
        raise

# Dependencies for FastAPI routes
def get_database(request: Request) -> Database:
    return request.app.state.database

def get_db(request: Request) -> Iterator[Session]:
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
