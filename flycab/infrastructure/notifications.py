"""Notification collaborators (toast messages)."""

from __future__ import annotations

import logging

from flycab.domain.entities import Notification
from flycab.domain.enums import NotificationKind

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Writes every notification to the service log."""

    def notify(self, kind: NotificationKind, title: str, message: str) -> None:
        level = logging.INFO if kind is NotificationKind.SUCCESS else logging.WARNING
        logger.log(level, "[%s] %s: %s", kind.value, title, message)


class CollectingNotifier(LoggingNotifier):
    """Logs and also buffers notifications so a response can carry them."""

    def __init__(self):
        self.notifications: list[Notification] = []

    def notify(self, kind: NotificationKind, title: str, message: str) -> None:
        super().notify(kind, title, message)
        self.notifications.append(Notification(kind=kind, title=title, message=message))
