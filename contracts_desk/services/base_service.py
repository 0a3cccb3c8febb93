"""Shared manager base: database handle, notifier, filtering and change callbacks."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from contracts_desk.core.notifications import LoggingNotifier, NotificationKind, Notifier
from contracts_desk.database.db import Database
from contracts_desk.utils.validators import normalize_search

logger = logging.getLogger(__name__)

T = TypeVar("T")

Observer = Callable[[Any, str], None]

SAVED_MESSAGE = "Сохранено."


class BaseService(ABC, Generic[T]):
    """Base class for managers that keep a working list of rows in memory."""

    def __init__(self, database: Database, notifier: Notifier | None = None) -> None:
        self.database = database
        self.notifier = notifier or LoggingNotifier()
        self.items: list[T] = []
        self.selected: T | None = None
        self._search_text: str | None = None
        self._observers: list[Observer] = []

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """Register ``callback(manager, event)``; returns an unsubscribe function."""
        self._observers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return _unsubscribe

    def _changed(self, event: str) -> None:
        for callback in list(self._observers):
            callback(self, event)

    def select(self, item: T | None) -> None:
        self.selected = item
        self._changed("selected")

    @property
    def search_text(self) -> str | None:
        return self._search_text

    @search_text.setter
    def search_text(self, value: str | None) -> None:
        self._search_text = value
        self._changed("filtered")

    @property
    def visible_items(self) -> list[T]:
        """Items passing the current search text; ``items`` itself is never touched."""
        needle = normalize_search(self._search_text)
        if needle is None:
            return list(self.items)
        return [item for item in self.items if self.matches(item, needle)]

    @abstractmethod
    def load(self) -> list[T]:
        """Replace ``items`` with the stored rows."""
        raise NotImplementedError

    @abstractmethod
    def matches(self, item: T, needle: str) -> bool:
        """True when ``item`` contains the normalized search text."""
        raise NotImplementedError

    def _forget(self, item: T) -> None:
        if item in self.items:
            self.items.remove(item)
        if self.selected is item:
            self.selected = None

    def _report_conflict(self, message: str, title: str = "Удаление запрещено") -> None:
        self.notifier.notify(NotificationKind.CONFLICT, message, title)

    def _report_error(self, exc: SQLAlchemyError, title: str = "Ошибка") -> None:
        logger.error(
            "persistence.error: %s",
            exc,
            extra={"event": "persistence.error", "manager": type(self).__name__},
        )
        message = str(getattr(exc, "orig", None) or exc)
        self.notifier.notify(NotificationKind.ERROR, f"Ошибка при сохранении: {message}", title)
