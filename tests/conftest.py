import os
import threading

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from drummer.api.client import DrummerApiError
from drummer.api.worker import WorkerPool
from drummer.core.catalog import CatalogController, SongCatalog
from drummer.core.edit_state import EditStateController
from drummer.core.models import Song
from drummer.core.notifications import NotificationCenter
from drummer.core.progress import PhaseScript
from drummer.core.submission import SubmissionOrchestrator


def make_song(song_id="1", name="Test Song 1", created_at="2024-05-01T10:00:00Z"):
    return Song(id=song_id, name=name, created_at=created_at)


class FakeClient:
    """
    Stand-in for DrummerClient. Each method records its call, optionally
    blocks on `gate` and then returns `results[name]` or raises it.
    """

    def __init__(self):
        self.calls = []
        self.results = {}
        self.gate = None
        self._lock = threading.Lock()

    def hold(self):
        self.gate = threading.Event()
        return self.gate

    def _answer(self, name, *args):
        with self._lock:
            self.calls.append((name, args))
        if self.gate is not None:
            self.gate.wait(5)
        result = self.results.get(name)
        if isinstance(result, Exception):
            raise result
        return result

    def called(self, name):
        return [args for n, args in self.calls if n == name]

    def list_songs(self):
        return self._answer("list_songs")

    def get_version(self):
        return self._answer("get_version")

    def upload_file(self, path):
        return self._answer("upload_file", path)

    def submit_youtube(self, url):
        return self._answer("submit_youtube", url)

    def rename_song(self, song_id, name):
        return self._answer("rename_song", song_id, name)

    def delete_song(self, song_id):
        return self._answer("delete_song", song_id)

    def download_song(self, song_id, destination, original=False):
        return self._answer("download_song", song_id, destination, original)


def server_error(message=None, status=500):
    return DrummerApiError("request failed", status_code=status, server_message=message)


@pytest.fixture
def client():
    c = FakeClient()
    yield c
    if c.gate is not None:
        c.gate.set()


@pytest.fixture
def pool(qtbot):
    p = WorkerPool()
    yield p
    p.wait_all()
    qtbot.waitUntil(lambda: p.active_count == 0, timeout=5000)


@pytest.fixture
def notifications(qtbot):
    return NotificationCenter(lifetime_ms=5000)


@pytest.fixture
def catalog(qtbot):
    return SongCatalog()


@pytest.fixture
def library(client, catalog, notifications, pool):
    return CatalogController(client, catalog, notifications, pool)


@pytest.fixture
def edits(client, catalog, notifications, pool):
    return EditStateController(client, catalog, notifications, pool)


FAST_FILE_SCRIPT = PhaseScript(
    initial_message="Uploading file...",
    steps=((10, "Uploading file..."), (40, "Removing drums..."), (95, "Finalizing...")),
    interval_ms=20,
)

FAST_REMOTE_SCRIPT = PhaseScript(
    initial_message="Fetching video info...",
    steps=((5, "Fetching video info..."), (30, "Downloading audio..."), (60, "Removing drums..."), (95, "Finalizing...")),
    interval_ms=30,
)


@pytest.fixture
def orchestrator(client, catalog, notifications, pool):
    return SubmissionOrchestrator(
        client, catalog, notifications, pool,
        file_script=FAST_FILE_SCRIPT,
        remote_script=FAST_REMOTE_SCRIPT,
    )
