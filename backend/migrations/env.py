from __future__ import annotations
import asyncio
from logging.config import fileConfig
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context
from captionboard.config import settings
from captionboard.db import Base
import captionboard.models.image  # registers images
import captionboard.models.caption  # captions, humor_flavors, caption_likes
import captionboard.models.vote  # caption_votes

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def database_url() -> str:
    # `alembic -x dburl=...` wins over DATABASE_URL, handy for one-off runs against a copy
    return context.get_x_argument(as_dictionary=True).get("dburl") or settings.database_url


def _configure(**kwargs) -> None:
    url = database_url()
    opts = dict(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        # autogenerated revisions use batch_alter_table on SQLite, which cannot ALTER constraints
        render_as_batch=url.startswith("sqlite"),
    )
    if "connection" not in kwargs:
        opts["url"] = url
    context.configure(**opts, **kwargs)


def run_migrations_offline() -> None:
    _configure(literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    connectable = create_async_engine(database_url(), poolclass=pool.NullPool)
    try:
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
