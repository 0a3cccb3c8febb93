"""Database file discovery: saved location, default candidates, then a prompt."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

PROMPT_TITLE = "Укажите файл базы данных contracts.db"

Prompt = Callable[[str], "str | Path | None"]


def read_saved_path(config_path: Path) -> Path | None:
    """Previously chosen database file, if it still exists."""
    if not config_path.is_file():
        return None
    saved = config_path.read_text(encoding="utf-8").strip()
    if saved and Path(saved).is_file():
        return Path(saved)
    return None


def save_path(config_path: Path, db_path: Path) -> None:
    """Remember the chosen database file for the next launch."""
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(str(db_path), encoding="utf-8")
    except OSError as exc:
        logger.error(
            "locator.save_failed: %s",
            exc,
            extra={"event": "locator.save_failed", "config_path": str(config_path)},
        )


def resolve_db_path(
    config_path: Path,
    candidates: Iterable[Path],
    prompt: Prompt | None = None,
) -> Path | None:
    """Return the database file to open, or None when nothing was resolved."""
    saved = read_saved_path(config_path)
    if saved is not None:
        logger.info("locator.saved_path", extra={"event": "locator.saved_path", "db_path": str(saved)})
        return saved

    for candidate in candidates:
        if candidate.is_file():
            save_path(config_path, candidate)
            logger.info("locator.candidate", extra={"event": "locator.candidate", "db_path": str(candidate)})
            return candidate

    if prompt is None:
        return None

    chosen = prompt(PROMPT_TITLE)
    if not chosen:
        logger.warning("locator.prompt.cancelled", extra={"event": "locator.prompt.cancelled"})
        return None

    chosen_path = Path(chosen)
    if not chosen_path.is_file():
        logger.warning(
            "locator.prompt.missing_file",
            extra={"event": "locator.prompt.missing_file", "db_path": str(chosen_path)},
        )
        return None

    save_path(config_path, chosen_path)
    return chosen_path
