"""Alembic environment for the case registry schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

from alembic import context
from sqlalchemy import create_engine, pool

from guardianbee.adapters.sqlalchemy.mappings import mapper_registry, start_mappers
from guardianbee.common.storage import get_database_uri

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config

start_mappers()


def _migrate(**options: object) -> None:
    # SQLite cannot ALTER most constraints in place, hence batch mode.
    context.configure(
        target_metadata=mapper_registry.metadata,
        render_as_batch=True,
        compare_type=True,
        **options,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate_online() -> None:
    # upgrade_head(engine=...) hands over a connection inside its own transaction.
    shared: Connection | None = config.attributes.get("connection")
    if shared is not None:
        _migrate(connection=shared)
        return

    url = config.get_main_option("sqlalchemy.url") or get_database_uri()
    engine = create_engine(url, poolclass=pool.NullPool, future=True)
    try:
        with engine.connect() as connection:
            _migrate(connection=connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    _migrate(
        url=config.get_main_option("sqlalchemy.url") or get_database_uri(),
        literal_binds=True,
    )
else:
    _migrate_online()
