from logging.config import fileConfig
from alembic import context
from sqlalchemy import engine_from_config, pool
import os

from liftoff.db import Base
from liftoff import models  # noqa: F401  # registers every table on Base
from liftoff.settings import Settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

def get_url() -> str:
    """DATABASE_URL wins; otherwise the same keys the app reads.

    ``auto`` cannot probe here, so it migrates PostgreSQL; point DB_BACKEND at
    ``sqlite`` to migrate the embedded file instead.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    settings = Settings()
    if settings.DB_BACKEND.lower() == "sqlite":
        return settings.SQLITE_URL
    return settings.DATABASE_URL

def run_migrations_offline():
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = engine_from_config({"sqlalchemy.url": get_url()}, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        # SQLite cannot ALTER most constraints in place
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
