"""
Alembic Migration Environment
===============================

What:  Runs the migrations in alembic/versions against the notes database.
How:   Resolves the database URL, opens an unpooled async engine and hands
       a sync connection to Alembic via connection.run_sync().
Who:   `alembic upgrade head` on deploy; the migration tests.

URL precedence:
    1. `alembic -x db_url=...` on the command line
    2. `sqlalchemy.url` set programmatically on the Config (tests)
    3. DATABASE_URL through notesapi.config.settings
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from notesapi.config import settings
from notesapi.database import Base

# Alembic only sees models that are imported and registered with Base
from notesapi.models.note import Note  # noqa: F401

config = context.config

# Embedding callers (the test suite) keep their own logging setup
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def database_url() -> str:
    x_args = context.get_x_argument(as_dictionary=True)
    return x_args.get("db_url") or config.get_main_option("sqlalchemy.url") or settings.database_url


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting to the database."""
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    # SQLite cannot ALTER most constraints in place; batch mode copies the table
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    engine = create_async_engine(database_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
