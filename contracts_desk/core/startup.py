"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from contracts_desk.core.config import get_config
from contracts_desk.core.exceptions import StartupError
from contracts_desk.core.logging_config import configure_logging
from contracts_desk.core.notifications import LoggingNotifier, NotificationKind, Notifier
from contracts_desk.database.db import Database
from contracts_desk.database.locator import Prompt, resolve_db_path, save_path

logger = logging.getLogger(__name__)

NO_DATABASE_MESSAGE = "Файл базы данных не выбран. Приложение будет закрыто."


def resolve_database_path(db_path: str | Path | None = None, prompt: Prompt | None = None) -> Path | None:
    """Explicit path first, then CONTRACTS_DB_PATH, then file discovery."""
    config = get_config()
    locator_config = Path(config.LOCATOR_CONFIG_PATH)

    explicit = db_path or config.DATABASE_PATH
    if explicit:
        path = Path(explicit)
        save_path(locator_config, path)
        return path

    return resolve_db_path(locator_config, config.database_candidates, prompt=prompt)


def bootstrap(
    db_path: str | Path | None = None,
    prompt: Prompt | None = None,
    notifier: Notifier | None = None,
) -> Database:
    """Initialize logging and open the resolved database file."""
    configure_logging()
    config = get_config()
    notifier = notifier or LoggingNotifier()

    path = resolve_database_path(db_path, prompt=prompt)
    if path is None:
        notifier.notify(NotificationKind.INFO, NO_DATABASE_MESSAGE, "Уведомление")
        raise StartupError(NO_DATABASE_MESSAGE)

    database = Database.from_config(config, path)
    logger.info(
        "startup.database.resolved",
        extra={"event": "startup.database.resolved", "db_path": str(path), "env": config.ENV},
    )
    return database
