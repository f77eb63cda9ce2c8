# core/catalog.py
from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, Optional

from PySide6.QtCore import QObject, Signal

from drummer.api.worker import WorkerPool, error_text
from drummer.core.models import Song
from drummer.core.notifications import NotificationCenter

logger = logging.getLogger(__name__)

PROCESSED_SUFFIX = "_no_drums"
ORIGINAL_SUFFIX = "_original"


class SongCatalog(QObject):
    """
    Client-side mirror of the server's songs. Every mutation here follows a
    successful server response; nothing is applied ahead of it.
    """

    changed = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._songs: list[Song] = []

    def list(self) -> list[Song]:
        return list(self._songs)

    def __len__(self) -> int:
        return len(self._songs)

    def get(self, song_id: str) -> Optional[Song]:
        for s in self._songs:
            if s.id == song_id:
                return s
        return None

    def reset(self, songs: Iterable[Song]) -> None:
        self._songs = list(songs)
        self.changed.emit()

    def add(self, song: Song) -> None:
        self._songs.append(song)
        self.changed.emit()

    def replace(self, song_id: str, song: Song) -> bool:
        for i, s in enumerate(self._songs):
            if s.id == song_id:
                self._songs[i] = song
                self.changed.emit()
                return True
        logger.warning("replace(): song %s is no longer in the catalog", song_id)
        return False

    def remove(self, song_id: str) -> bool:
        kept = [s for s in self._songs if s.id != song_id]
        if len(kept) == len(self._songs):
            return False
        self._songs = kept
        self.changed.emit()
        return True


def download_file_name(song: Song, original: bool = False) -> str:
    suffix = ORIGINAL_SUFFIX if original else PROCESSED_SUFFIX
    name = (song.name or song.id).replace("/", "-").replace("\\", "-")
    return f"{name}{suffix}.mp3"


class CatalogController(QObject):
    """Fetch, delete, download and version lookups against the backend."""

    version_changed = Signal(str)
    loaded = Signal(bool)

    def __init__(self, client, catalog: SongCatalog, notifications: NotificationCenter, pool: WorkerPool, parent=None):
        super().__init__(parent)
        self.client = client
        self.catalog = catalog
        self.notifications = notifications
        self.pool = pool
        self.version: Optional[str] = None
        self._deleting: set[str] = set()

    # -------------------------
    # Startup fetches
    # -------------------------
    def refresh(self) -> None:
        self.pool.start(self.client.list_songs, self._on_songs)

    def _on_songs(self, ok: bool, payload) -> None:
        if ok:
            self.catalog.reset(payload)
            logger.info("Loaded %d song(s)", len(payload))
        else:
            # all or nothing: a failed fetch never leaves a partial list
            self.catalog.reset([])
            self.notifications.show("Failed to fetch songs", "error")
        self.loaded.emit(ok)

    def fetch_version(self) -> None:
        self.pool.start(self.client.get_version, self._on_version)

    def _on_version(self, ok: bool, payload) -> None:
        if not ok:
            logger.warning("Could not read backend version: %s", payload)
            return
        self.version = str(payload)
        self.version_changed.emit(self.version)

    # -------------------------
    # Delete
    # -------------------------
    def request_delete(self, song_id: str, confirm: Callable[[Song], bool]) -> bool:
        song = self.catalog.get(song_id)
        if song is None or song_id in self._deleting:
            return False
        if not confirm(song):
            return False

        self._deleting.add(song_id)
        self.pool.start(
            lambda: self.client.delete_song(song_id),
            lambda ok, payload: self._on_deleted(song_id, ok, payload),
        )
        return True

    def _on_deleted(self, song_id: str, ok: bool, payload) -> None:
        self._deleting.discard(song_id)
        if ok:
            self.catalog.remove(song_id)
            self.notifications.show("Song deleted successfully", "success")
        else:
            self.notifications.show(error_text(payload, "Failed to delete song"), "error")

    # -------------------------
    # Download
    # -------------------------
    def download(self, song_id: str, destination: str, original: bool = False) -> bool:
        if not destination:
            return False
        self.pool.start(
            lambda: self.client.download_song(song_id, destination, original=original),
            lambda ok, payload: self._on_downloaded(destination, ok, payload),
        )
        return True

    def _on_downloaded(self, destination: str, ok: bool, payload) -> None:
        if ok:
            self.notifications.show(f"Saved {os.path.basename(destination)}", "success")
        else:
            self.notifications.show(error_text(payload, "Failed to download song"), "error")
