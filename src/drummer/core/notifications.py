# core/notifications.py
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from drummer.core.models import Notification

logger = logging.getLogger(__name__)

NOTIFICATION_LIFETIME_MS = 5000
SEVERITIES = ("error", "success", "info")


class NotificationCenter(QObject):
    """
    Single-slot message holder. Every show() bumps a generation counter and
    schedules its own expiry; an expiry only clears the slot if it still
    holds the notification that scheduled it.
    """

    changed = Signal(object)  # Notification | None

    def __init__(self, lifetime_ms: int = NOTIFICATION_LIFETIME_MS, parent=None):
        super().__init__(parent)
        self.lifetime_ms = int(lifetime_ms)
        self._generation = 0
        self._current: Optional[Notification] = None

    @property
    def current(self) -> Optional[Notification]:
        return self._current

    def show(self, text: str, severity: str = "info") -> Notification:
        severity = (severity or "info").lower()
        if severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {severity!r}")

        self._generation += 1
        n = Notification(text=text, severity=severity, generation=self._generation)
        self._current = n
        if severity == "error":
            logger.info("Notify [%s]: %s", severity, text)
        else:
            logger.debug("Notify [%s]: %s", severity, text)
        self.changed.emit(n)

        generation = n.generation
        QTimer.singleShot(self.lifetime_ms, self, lambda: self._expire(generation))
        return n

    def dismiss(self) -> None:
        if self._current is None:
            return
        self._current = None
        self.changed.emit(None)

    def _expire(self, generation: int) -> None:
        if self._current is None or self._current.generation != generation:
            return
        self._current = None
        self.changed.emit(None)
