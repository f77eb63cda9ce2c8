# core/edit_state.py
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from drummer.api.worker import WorkerPool, error_text
from drummer.core.catalog import SongCatalog
from drummer.core.models import EditSession, Song
from drummer.core.notifications import NotificationCenter

logger = logging.getLogger(__name__)


class EditStateController(QObject):
    """
    Inline rename state: idle (session is None) or editing one song.
    A failed save keeps the session so the draft can be retried.
    """

    changed = Signal(object)  # EditSession | None

    def __init__(self, client, catalog: SongCatalog, notifications: NotificationCenter, pool: WorkerPool, parent=None):
        super().__init__(parent)
        self.client = client
        self.catalog = catalog
        self.notifications = notifications
        self.pool = pool
        self._session: Optional[EditSession] = None
        self._saving: Optional[EditSession] = None
        catalog.changed.connect(self._on_catalog_changed)

    @property
    def session(self) -> Optional[EditSession]:
        return self._session

    @property
    def editing(self) -> bool:
        return self._session is not None

    def is_editing(self, song_id: str) -> bool:
        return self._session is not None and self._session.song_id == song_id

    def start(self, song_id: str, current_name: str) -> None:
        # switching targets drops the previous draft
        self._set(EditSession(song_id=song_id, draft_name=current_name))

    def update_draft(self, text: str) -> bool:
        if self._session is None:
            logger.debug("Draft update ignored: no song is being edited")
            return False
        if text == self._session.draft_name:
            return True
        self._set(EditSession(song_id=self._session.song_id, draft_name=text))
        return True

    def cancel(self) -> None:
        self._set(None)

    def save(self) -> bool:
        session = self._session
        if session is None or self._saving is not None:
            return False

        name = session.draft_name.strip()
        if not name:
            self.notifications.show("Please enter a valid name", "error")
            return False

        self._saving = session
        self.pool.start(
            lambda: self.client.rename_song(session.song_id, name),
            lambda ok, payload: self._on_renamed(session, ok, payload),
        )
        return True

    def _on_renamed(self, session: EditSession, ok: bool, payload) -> None:
        self._saving = None
        if not ok:
            self.notifications.show(error_text(payload, "Failed to rename song"), "error")
            return

        song: Song = payload
        self.catalog.replace(session.song_id, song)
        # the user may have moved on to another song while the request ran
        if self._session is not None and self._session.song_id == session.song_id:
            self._set(None)
        self.notifications.show("Song renamed successfully", "success")

    def _on_catalog_changed(self) -> None:
        # a deleted song cannot stay the rename target
        if self._session is not None and self.catalog.get(self._session.song_id) is None:
            logger.debug("Song %s left the catalog, ending its edit", self._session.song_id)
            self._set(None)

    def _set(self, session: Optional[EditSession]) -> None:
        if session == self._session:
            return
        self._session = session
        self.changed.emit(session)
