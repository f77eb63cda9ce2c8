# api/worker.py
from __future__ import annotations

import itertools
import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, QThread, Qt, Signal, Slot

from drummer.api.client import DrummerApiError

logger = logging.getLogger(__name__)

Completion = Callable[[bool, Any], None]


class ApiCallWorker(QThread):
    """Runs one blocking backend call off the GUI thread."""

    finished_signal = Signal(int, bool, object)  # ticket, ok, result or exception

    def __init__(self, ticket: int, call: Callable[[], Any], parent=None):
        super().__init__(parent)
        self.ticket = ticket
        self.call = call

    def run(self):
        try:
            result = self.call()
        except DrummerApiError as e:
            self.finished_signal.emit(self.ticket, False, e)
        except Exception as e:
            logger.exception("Backend call failed unexpectedly")
            self.finished_signal.emit(self.ticket, False, e)
        else:
            self.finished_signal.emit(self.ticket, True, result)


class WorkerPool(QObject):
    """
    Owns running ApiCallWorkers until they are done and hands each result
    back to its completion callback on the thread this pool lives in.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._tickets = itertools.count(1)
        self._pending: dict[int, tuple[ApiCallWorker, Completion]] = {}

    @property
    def active_count(self) -> int:
        return len(self._pending)

    def start(self, call: Callable[[], Any], on_done: Completion) -> int:
        ticket = next(self._tickets)
        worker = ApiCallWorker(ticket, call)
        worker.finished_signal.connect(self._dispatch, Qt.ConnectionType.QueuedConnection)
        self._pending[ticket] = (worker, on_done)
        worker.start()
        return ticket

    def wait_all(self, ms: int = 5000) -> None:
        for worker, _cb in list(self._pending.values()):
            worker.wait(ms)

    @Slot(int, bool, object)
    def _dispatch(self, ticket: int, ok: bool, payload: object):
        entry = self._pending.pop(ticket, None)
        if entry is None:
            return
        worker, on_done = entry
        # run() has returned by the time its last signal is delivered
        worker.wait()
        worker.deleteLater()
        on_done(ok, payload)


def error_text(payload: object, fallback: str) -> str:
    if isinstance(payload, DrummerApiError) and payload.server_message:
        return payload.server_message
    return fallback
