"""
Alembic migration environment.
Supports both online (connected to DB) and offline (SQL script generation) modes.

The two services keep separate databases. Pick one with `-x service=main`
(default) or `-x service=stats` and upgrade the matching branch:

    alembic -x service=main upgrade main@head
    alembic -x service=stats upgrade stats@head
"""

from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from explorewithme.db.base import Base, StatsBase
from explorewithme.main_service import models  # noqa: F401 - Import models for autogenerate
from explorewithme.stats_service import models as stats_models  # noqa: F401
from explorewithme.core.config import get_settings

config = context.config
settings = get_settings()

service = context.get_x_argument(as_dictionary=True).get("service", "main")
if service not in ("main", "stats"):
    raise ValueError(f"Unknown service '{service}', expected 'main' or 'stats'")

if service == "stats":
    config.set_main_option("sqlalchemy.url", settings.STATS_DATABASE_URL_SYNC)
    target_metadata = StatsBase.metadata
else:
    config.set_main_option("sqlalchemy.url", settings.DATABASE_URL_SYNC)
    target_metadata = Base.metadata

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def run_migrations_offline() -> None:
    """Generate SQL script without connecting to the database."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live database connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
