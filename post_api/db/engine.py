"""SQLite engine shared by the app, Alembic and the startup check.

The database directory is created when settings load, so the engine only
needs the URL.
"""

import logging
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from post_api.core.logging import log_event
from post_api.core.settings import settings

logger = logging.getLogger(__name__)


class DatabaseInitError(Exception):
    """The configured posts database cannot be opened."""


# check_same_thread: FastAPI runs sync routes in a worker thread pool
engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    connect_args={"check_same_thread": False},
)


def get_resolved_db_path() -> Path:
    return Path(settings.app_db_path).resolve()


def init_db() -> None:
    """Open one connection so a bad ``APP_DB_PATH`` fails at startup, not on the first request."""
    db_path = get_resolved_db_path()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise DatabaseInitError(
            f"Cannot open posts database '{db_path}': {exc}. "
            f"Set APP_DB_PATH to a writable location."
        ) from exc
    log_event(logger, "info", "db_initialized", path=db_path)
