"""Notification sink shared by the workflow and its frontends."""

from __future__ import annotations

import logging
from collections import deque

from core.models import Notification
from core.ports import NotifierPort

LOGGER = logging.getLogger(__name__)


class NotificationSink:
    """Deliver notifications to every registered handler in emit order."""

    def __init__(self, history_size: int = 50) -> None:
        self._handlers: list[NotifierPort] = []
        self._history: deque[Notification] = deque(maxlen=history_size)

    def on_notify(self, handler: NotifierPort) -> None:
        self._handlers.append(handler)

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    def emit(self, notification: Notification) -> None:
        self._history.append(notification)
        LOGGER.debug("Notify %s: %s", notification.kind, notification.text)
        for handler in list(self._handlers):
            handler(notification)
