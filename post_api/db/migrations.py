"""Bring the posts schema to the latest Alembic revision at startup."""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from post_api.core.logging import log_event, setup_logging
from post_api.db.engine import engine

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


class MigrationError(Exception):
    """``alembic upgrade head`` failed; the message names both revisions."""


def _alembic_config() -> Config:
    cfg = Config(str(_PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(_PROJECT_ROOT / "alembic"))
    return cfg


def get_current_revision() -> str | None:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def get_head_revision() -> str | None:
    return ScriptDirectory.from_config(_alembic_config()).get_current_head()


def run_migrations() -> None:
    """Upgrade to head unless the database is already there.

    env.py calls ``fileConfig()``, which replaces the root handlers, so
    logging is reinstalled afterwards.
    """
    current = get_current_revision()
    head = get_head_revision()
    log_event(logger, "info", "db_migration_started", current=current, head=head)
    if current == head:
        log_event(logger, "info", "db_migration_succeeded", head=head, upgraded=False)
        return
    try:
        command.upgrade(_alembic_config(), "head")
    except Exception as exc:
        log_event(logger, "exception", "db_migration_failed", current=current, head=head)
        raise MigrationError(
            f"Upgrade from {current} to {head} failed: {exc}. "
            f"Inspect the revision under alembic/versions/."
        ) from exc
    finally:
        setup_logging()
    log_event(logger, "info", "db_migration_succeeded", head=head, upgraded=True)
