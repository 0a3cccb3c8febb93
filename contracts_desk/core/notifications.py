"""User-facing notification contract used by the managers."""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class NotificationKind(str, enum.Enum):
    CONFIRM = "confirm"
    SUCCESS = "success"
    CONFLICT = "conflict"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    """A single message raised towards the presentation layer."""

    kind: NotificationKind
    message: str
    title: str = ""


class Notifier(ABC):
    """Presentation hook for messages and destructive-action confirmations."""

    @abstractmethod
    def notify(self, kind: NotificationKind, message: str, title: str = "") -> None:
        """Show a message of the given kind."""
        raise NotImplementedError

    @abstractmethod
    def confirm(self, message: str, title: str = "") -> bool:
        """Ask the user to confirm a destructive action."""
        raise NotImplementedError


_LEVELS = {
    NotificationKind.SUCCESS: logging.INFO,
    NotificationKind.INFO: logging.INFO,
    NotificationKind.WARNING: logging.WARNING,
    NotificationKind.CONFLICT: logging.WARNING,
    NotificationKind.ERROR: logging.ERROR,
}


class LoggingNotifier(Notifier):
    """Headless notifier: logs every message and answers confirmations from a flag."""

    def __init__(self, auto_confirm: bool = False) -> None:
        self.auto_confirm = auto_confirm

    def notify(self, kind: NotificationKind, message: str, title: str = "") -> None:
        logger.log(
            _LEVELS.get(kind, logging.INFO),
            "notification.%s: %s",
            kind.value,
            message,
            extra={"event": f"notification.{kind.value}"},
        )

    def confirm(self, message: str, title: str = "") -> bool:
        logger.info(
            "notification.confirm: %s -> %s",
            message,
            self.auto_confirm,
            extra={"event": "notification.confirm"},
        )
        return self.auto_confirm
