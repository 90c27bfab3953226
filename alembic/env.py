"""Alembic environment for the FarmHub schema.

The connection URL comes from ``DATABASE_URL`` (read through
``app.config``), never from ``alembic.ini``, so migrations and the API always
target the same database.  The target metadata covers the seven FarmHub
tables (users through fertilizations) and the ``gender``, ``crop_status`` and
``equipment_condition`` enum types.  Type and server-default comparison stay
on because booleans and crop status rely on server defaults.
"""

import asyncio
from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine

from app.config import get_settings

# app.models, not app.models.base: importing the package registers every table.
from app.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(**options: Any) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        **options,
    )


def run_migrations_offline() -> None:
    """Write the FarmHub DDL as SQL for a DBA to apply."""
    _configure(
        url=get_settings().database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):  # type: ignore[no-untyped-def]
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply pending revisions over asyncpg, the driver the API uses."""
    connectable = create_async_engine(get_settings().database_url)
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
