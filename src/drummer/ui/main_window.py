import logging
import os

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QMessageBox, QFileDialog
)
from PySide6.QtCore import QStandardPaths

from drummer.core.catalog import download_file_name
from drummer.ui.widgets.song_list_widget import SongListWidget
from drummer.ui.widgets.toast import ToastOverlay
from drummer.ui.widgets.upload_panel import UploadPanel

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("Drummer")
        self.resize(900, 640)
        self.app_state = app_state

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)
        self.layout.setContentsMargins(16, 16, 16, 16)
        self.layout.setSpacing(14)

        # --- Header ---
        header = QHBoxLayout()
        title = QLabel("Drummer")
        title.setObjectName("AppTitle")
        self.version_label = QLabel("")
        self.version_label.setObjectName("VersionLabel")
        header.addWidget(title)
        header.addWidget(self.version_label)
        header.addStretch(1)
        self.layout.addLayout(header)

        subtitle = QLabel("Upload your favorite songs and practice without drums")
        subtitle.setObjectName("Subtitle")
        self.layout.addWidget(subtitle)

        # --- Upload ---
        self.upload_panel = UploadPanel()
        self.layout.addWidget(self.upload_panel)

        # --- Songs ---
        songs_title = QLabel("Your Songs")
        songs_title.setObjectName("SectionTitle")
        self.layout.addWidget(songs_title)

        self.song_list = SongListWidget(self.app_state)
        self.layout.addWidget(self.song_list, 1)

        self.toasts = ToastOverlay(self, self.app_state.notifications)

        # --- Wiring ---
        submissions = self.app_state.submissions
        self.upload_panel.fileChosen.connect(submissions.submit_file)
        self.upload_panel.urlSubmitted.connect(submissions.submit_url)
        submissions.job_changed.connect(self.upload_panel.set_job)
        submissions.progress_changed.connect(self.upload_panel.set_progress)
        submissions.url_accepted.connect(self.upload_panel.clear_url)

        self.song_list.actionRequested.connect(self._on_song_action)
        self.app_state.library.version_changed.connect(self._on_version)

        self.setStyleSheet(self.styleSheet() + """
            QMainWindow, QWidget {
                background: #030712;
                color: #e5e7eb;
            }
            QLabel#AppTitle {
                font-size: 22px;
                font-weight: 700;
            }
            QLabel#VersionLabel, QLabel#Subtitle {
                color: #9ca3af;
                font-size: 11px;
            }
            QLabel#SectionTitle {
                font-size: 14px;
                font-weight: 600;
            }
            """)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.toasts.reposition()

    # ------------------ header ------------------
    def _on_version(self, version: str):
        self.version_label.setText(f"v{version}")

    # ------------------ song actions ------------------
    def _on_song_action(self, action: str, song_id: str):
        song = self.app_state.catalog.get(song_id)
        if song is None:
            return

        edits = self.app_state.edits
        if action == "rename":
            edits.start(song.id, song.name)
        elif action == "save":
            edits.save()
        elif action == "cancel":
            edits.cancel()
        elif action == "delete":
            self.app_state.library.request_delete(song.id, self._confirm_delete)
        elif action in ("download", "original"):
            self._download(song, original=(action == "original"))
        else:
            logger.warning("Unknown song action %r", action)

    def _confirm_delete(self, song) -> bool:
        res = QMessageBox.question(
            self,
            "Delete song",
            f"Are you sure you want to delete this song?\n\n{song.name}",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return res == QMessageBox.StandardButton.Yes

    def _download(self, song, original: bool):
        base = QStandardPaths.writableLocation(QStandardPaths.DownloadLocation)
        suggested = os.path.join(base, download_file_name(song, original=original))
        path, _ = QFileDialog.getSaveFileName(self, "Save song", suggested, "MP3 files (*.mp3)")
        if not path:
            return
        self.app_state.library.download(song.id, path, original=original)
