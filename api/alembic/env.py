from logging.config import fileConfig

from alembic import context
from sqlmodel import SQLModel
from ivrit.core.database import db_url, engine

# Registers every ivrit table on SQLModel.metadata
from ivrit.models import models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# DATABASE_URL, already normalized to postgresql://
config.set_main_option("sqlalchemy.url", db_url)

target_metadata = SQLModel.metadata

# SQLite cannot ALTER most constraints in place
render_as_batch = db_url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit SQL for the review schema without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=render_as_batch,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Migrate through the application engine."""
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=render_as_batch,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
