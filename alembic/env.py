"""Alembic environment: migrates the database the app is configured for."""

from logging.config import fileConfig

from alembic import context
from post_api.db.base import Base
from post_api.db.engine import engine
from post_api.models.post_record import PostRecord  # noqa: F401
from post_api.models.user_record import UserRecord  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name, disable_existing_loggers=False)

if context.is_offline_mode():
    # `alembic upgrade head --sql`: print DDL for the configured URL
    context.configure(
        url=str(engine.url),
        target_metadata=Base.metadata,
        literal_binds=True,
    )
    with context.begin_transaction():
        context.run_migrations()
else:
    with engine.connect() as connection:
        # batch mode: SQLite cannot ALTER most column/constraint changes
        context.configure(
            connection=connection,
            target_metadata=Base.metadata,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()
