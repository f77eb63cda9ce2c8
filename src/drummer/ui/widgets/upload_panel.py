# ui/widgets/upload_panel.py
from __future__ import annotations

from PySide6.QtCore import Qt, Signal, QStandardPaths, QTimer
from PySide6.QtWidgets import (
    QFileDialog, QFrame, QHBoxLayout, QLabel, QLineEdit, QProgressBar, QPushButton, QVBoxLayout, QWidget
)

URL_PLACEHOLDER = "https://www.youtube.com/watch?v=..."
COMPLETE_HOLD_MS = 800


class DropArea(QFrame):
    fileDropped = Signal(str)
    clicked = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("DropArea")
        self.setAcceptDrops(True)

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event):
        urls = [u for u in event.mimeData().urls() if u.isLocalFile()]
        if not urls:
            event.ignore()
            return
        event.acceptProposedAction()
        # one file per submission
        self.fileDropped.emit(urls[0].toLocalFile())

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mouseReleaseEvent(event)


class UploadPanel(QWidget):
    fileChosen = Signal(str)
    urlSubmitted = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._busy = False

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(10)

        # --- File upload ---
        title = QLabel("Upload MP3 File")
        title.setObjectName("SectionTitle")
        root.addWidget(title)

        self.drop_area = DropArea()
        drop_layout = QVBoxLayout(self.drop_area)
        drop_layout.setContentsMargins(16, 16, 16, 16)
        hint = QLabel("Drag and drop an MP3 file here or click to select")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.btn_select = QPushButton("Select File")
        self.btn_select.clicked.connect(self.choose_file)
        drop_layout.addWidget(hint)
        drop_layout.addWidget(self.btn_select, 0, Qt.AlignmentFlag.AlignHCenter)
        self.drop_area.fileDropped.connect(self._on_file)
        self.drop_area.clicked.connect(self.choose_file)
        root.addWidget(self.drop_area)

        # --- YouTube ---
        yt_title = QLabel("Process YouTube Video")
        yt_title.setObjectName("SectionTitle")
        root.addWidget(yt_title)

        url_row = QHBoxLayout()
        self.url_input = QLineEdit()
        self.url_input.setPlaceholderText(URL_PLACEHOLDER)
        self.url_input.textChanged.connect(self._sync_enabled)
        self.url_input.returnPressed.connect(self._submit_url)
        self.btn_url = QPushButton("Process YouTube")
        self.btn_url.clicked.connect(self._submit_url)
        url_row.addWidget(self.url_input, 1)
        url_row.addWidget(self.btn_url)
        root.addLayout(url_row)

        # --- Progress (hidden when idle) ---
        self.progress_row = QWidget()
        self.progress_row.setObjectName("ProgressRow")
        progress_layout = QHBoxLayout(self.progress_row)
        progress_layout.setContentsMargins(8, 6, 8, 6)
        progress_layout.setSpacing(10)

        self.phase_label = QLabel("")
        self.phase_label.setObjectName("PhaseLabel")

        self.progress_bar = QProgressBar()
        self.progress_bar.setObjectName("JobProgress")
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setValue(0)

        progress_layout.addWidget(self.phase_label)
        progress_layout.addWidget(self.progress_bar, 1)
        root.addWidget(self.progress_row)
        self.progress_row.setVisible(False)

        # keeps a finished bar at 100% on screen for a moment
        self._hold_timer = QTimer(self)
        self._hold_timer.setSingleShot(True)
        self._hold_timer.setInterval(COMPLETE_HOLD_MS)
        self._hold_timer.timeout.connect(self._reset_progress)

        self._sync_enabled()
        self.setStyleSheet("""
            QLabel#SectionTitle {
                color: #e5e7eb;
                font-size: 14px;
                font-weight: 600;
            }
            QFrame#DropArea {
                border: 2px dashed #1f2937;
                border-radius: 12px;
                background: #020617;
            }
            QWidget#ProgressRow {
                background: #020617;
                border-top: 1px solid #111827;
            }
            QLabel#PhaseLabel {
                color: #9ca3af;
                font-size: 11px;
            }
            QProgressBar#JobProgress {
                background: #0b1222;
                border: 1px solid #1f2937;
                border-radius: 999px;
                height: 10px;
            }
            QProgressBar#JobProgress::chunk {
                border-radius: 999px;
                background: qlineargradient(
                    x1:0, y1:0, x2:1, y2:0,
                    stop:0 #38bdf8, stop:1 #22c55e
                );
            }
        """)

    # -------------------------
    # External API
    # -------------------------
    def set_job(self, job):
        self._busy = job is not None
        if job is not None:
            self._hold_timer.stop()
            self.progress_row.setVisible(True)
            self.btn_select.setText(f"Processing {job.label}...")
        else:
            self.btn_select.setText("Select File")
            if self.progress_bar.value() >= 100:
                self._hold_timer.start()
            else:
                self._reset_progress()
        self._sync_enabled()

    def set_progress(self, percent: int, message: str):
        if self._hold_timer.isActive():
            return
        percent = max(0, min(100, int(percent)))
        self.progress_bar.setValue(percent)
        self.phase_label.setText(f"{message} ({percent}%)" if message else "")

    def clear_url(self):
        self.url_input.clear()

    def choose_file(self):
        if self._busy:
            return
        start_dir = QStandardPaths.writableLocation(QStandardPaths.MusicLocation)
        path, _ = QFileDialog.getOpenFileName(self, "Select MP3 File", start_dir, "MP3 files (*.mp3)")
        if path:
            self._on_file(path)

    # -------------------------
    # Internals
    # -------------------------
    def _on_file(self, path: str):
        if self._busy:
            return
        self.fileChosen.emit(path)

    def _submit_url(self):
        if not self.btn_url.isEnabled():
            return
        self.urlSubmitted.emit(self.url_input.text())

    def _reset_progress(self):
        self.progress_bar.setValue(0)
        self.phase_label.setText("")
        self.progress_row.setVisible(False)

    def _sync_enabled(self):
        self.btn_select.setEnabled(not self._busy)
        self.drop_area.setAcceptDrops(not self._busy)
        self.url_input.setEnabled(not self._busy)
        self.btn_url.setEnabled(not self._busy and bool(self.url_input.text().strip()))
