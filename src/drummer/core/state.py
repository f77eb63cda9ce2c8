from __future__ import annotations

from PySide6.QtCore import QObject

from drummer.api.client import DrummerClient
from drummer.api.worker import WorkerPool
from drummer.core.catalog import CatalogController, SongCatalog
from drummer.core.edit_state import EditStateController
from drummer.core.notifications import NotificationCenter
from drummer.core.settings import Settings
from drummer.core.submission import SubmissionOrchestrator


class AppState(QObject):
    def __init__(self, settings: Settings | None = None, client=None):
        super().__init__()
        self.settings = settings or Settings()
        self.client = client or DrummerClient(
            base_url=self.settings.api_url,
            timeout_s=self.settings.request_timeout_s,
        )

        self.pool = WorkerPool(self)
        self.notifications = NotificationCenter(self.settings.notification_ms, self)
        self.catalog = SongCatalog(self)
        self.library = CatalogController(self.client, self.catalog, self.notifications, self.pool, self)
        self.edits = EditStateController(self.client, self.catalog, self.notifications, self.pool, self)
        self.submissions = SubmissionOrchestrator(self.client, self.catalog, self.notifications, self.pool, parent=self)

    def load(self) -> None:
        self.library.fetch_version()
        self.library.refresh()
