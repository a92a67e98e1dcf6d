"""Alembic environment for the redpacket SQL backend.

Migrations run synchronously, so async driver suffixes are stripped from the url.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from redpacket.sql.models import Base

config = context.config

# Only the alembic command line configures logging here
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _get_sync_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    for suffix in ("+aiosqlite", "+asyncpg"):
        url = url.replace(suffix, "")
    return url


def run_migrations_offline() -> None:
    context.configure(
        url=_get_sync_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _get_sync_url()
    connectable = engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
