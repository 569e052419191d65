"""Storage backends.

The service runs against either a PostgreSQL server or an embedded SQLite file.
Which one is decided once, at start-up, by ``select_backend``; everything above
this module talks to a ``StorageBackend`` and never branches on the dialect.

What differs between the two lives here:

- engine/connection options (timeouts, the SQLite foreign-key pragma)
- "insert and hand back the row": PostgreSQL uses ``INSERT ... RETURNING``,
  SQLite inserts and reads the row back by its (caller-generated) id
- the SQL expression for "UTC calendar day of a timestamp"
- row locking for read-then-write sequences

Placeholder syntax and boolean encoding are SQLAlchemy dialect concerns and need
no help from us.
"""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, TypeVar

from sqlalchemy import Date, MetaData, cast, create_engine, event, func, insert, literal_column, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from liftoff.errors import StorageError
from liftoff.settings import Settings

log = logging.getLogger("uvicorn")

T = TypeVar("T")

BACKEND_CHOICES = ("auto", "postgres", "sqlite")


class StorageBackend:
    name: str = "abstract"
    supports_returning: bool = False

    def __init__(self, settings: Settings):
        self.settings = settings

    # engine lifecycle
    def url(self) -> str:
        raise NotImplementedError

    def engine_options(self) -> dict[str, Any]:
        return {}

    def create_engine(self) -> Engine:
        return create_engine(self.url(), **self.engine_options())

    def ping(self, engine: Engine) -> None:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def prepare(self, engine: Engine, metadata: MetaData) -> None:
        """Create any missing tables and indexes (no-op when they exist)."""
        metadata.create_all(engine, checkfirst=True)

    def describe(self, engine: Engine) -> str:
        return engine.url.render_as_string(hide_password=True)

    # dialect seams used by repositories
    def insert_row(self, db: Session, model: type[T], values: dict[str, Any]) -> T:
        raise NotImplementedError

    def day_bucket(self, column):
        raise NotImplementedError

    def to_date(self, value) -> date:
        if isinstance(value, date):
            return value
        return date.fromisoformat(str(value)[:10])

    def lock_for_update(self, stmt):
        return stmt


class PostgresBackend(StorageBackend):
    name = "postgres"
    supports_returning = True

    def url(self) -> str:
        return self.settings.DATABASE_URL

    def engine_options(self) -> dict[str, Any]:
        s = self.settings
        return {
            "pool_pre_ping": True,
            "connect_args": {
                "connect_timeout": s.DB_CONNECT_TIMEOUT,
                # every statement is bounded and day arithmetic is done in UTC
                "options": f"-c statement_timeout={s.DB_STATEMENT_TIMEOUT_MS} -c timezone=UTC",
            },
        }

    def insert_row(self, db: Session, model: type[T], values: dict[str, Any]) -> T:
        return db.scalars(insert(model).values(**values).returning(model)).one()

    def day_bucket(self, column):
        return cast(func.timezone(literal_column("'UTC'"), column), Date)

    def lock_for_update(self, stmt):
        return stmt.with_for_update()


class SQLiteBackend(StorageBackend):
    name = "sqlite"
    supports_returning = False

    def url(self) -> str:
        return self.settings.SQLITE_URL

    def engine_options(self) -> dict[str, Any]:
        opts: dict[str, Any] = {
            "connect_args": {
                "check_same_thread": False,
                "timeout": self.settings.DB_CONNECT_TIMEOUT,
            },
        }
        if self.settings.SQLITE_PATH == ":memory:":
            opts["poolclass"] = StaticPool
        return opts

    def create_engine(self) -> Engine:
        path = self.settings.SQLITE_PATH
        if path != ":memory:":
            Path(path).expanduser().parent.mkdir(parents=True, exist_ok=True)
        engine = super().create_engine()

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

        return engine

    def insert_row(self, db: Session, model: type[T], values: dict[str, Any]) -> T:
        db.execute(insert(model).values(**values))
        row = db.get(model, values["id"])
        if row is None:
            raise StorageError(f"inserted {model.__tablename__} row could not be read back")
        return row

    def day_bucket(self, column):
        # timestamps are stored as UTC text, date() yields 'YYYY-MM-DD'
        return func.date(column)


def select_backend(settings: Settings) -> tuple[StorageBackend, Engine]:
    """Pick the backend for this process and return it with a live engine.

    ``auto`` tries PostgreSQL first and falls back to SQLite on any connection or
    liveness failure. ``postgres`` never falls back. ``sqlite`` skips the probe.
    """
    choice = settings.DB_BACKEND.lower()
    if choice not in BACKEND_CHOICES:
        raise StorageError(f"unknown DB_BACKEND {settings.DB_BACKEND!r}")

    if choice in ("auto", "postgres"):
        backend: StorageBackend = PostgresBackend(settings)
        engine = None
        try:
            # a bad URL or a missing driver fails here, before any connection
            engine = backend.create_engine()
            backend.ping(engine)
        except (SQLAlchemyError, ArgumentError, ImportError, OSError) as exc:
            if engine is not None:
                engine.dispose()
            if choice == "postgres":
                raise StorageError("PostgreSQL is unreachable") from exc
            log.warning("PostgreSQL unavailable (%s); falling back to SQLite at %s",
                        exc.__class__.__name__, settings.SQLITE_PATH)
        else:
            log.info("storage backend=postgres url=%s", backend.describe(engine))
            return backend, engine

    backend = SQLiteBackend(settings)
    engine = backend.create_engine()
    try:
        backend.ping(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise StorageError(f"SQLite database at {settings.SQLITE_PATH} is unusable") from exc
    log.info("storage backend=sqlite url=%s", backend.describe(engine))
    return backend, engine
