# core/submission.py
from __future__ import annotations

import logging
import os
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, Signal

from drummer.api.worker import WorkerPool, error_text
from drummer.core.catalog import SongCatalog
from drummer.core.models import Song, SubmissionJob
from drummer.core.notifications import NotificationCenter
from drummer.core.progress import (
    FILE_UPLOAD_SCRIPT,
    REMOTE_EXTRACTION_SCRIPT,
    PhaseScript,
    ProgressSimulator,
)
from drummer.core.validation import is_accepted_audio_file, is_remote_video_url

logger = logging.getLogger(__name__)

REMOTE_JOB_LABEL = "YouTube video"


class SubmissionOrchestrator(QObject):
    """
    Runs at most one upload / remote extraction at a time.

    Each job owns its ProgressSimulator. The real request's completion stops
    that simulator before touching any state, and simulator steps are dropped
    unless they belong to the job that is still active.
    """

    job_changed = Signal(object)        # SubmissionJob | None
    progress_changed = Signal(int, str)  # percent, phase message
    url_accepted = Signal()             # remote extraction succeeded, clear the URL field

    def __init__(
        self,
        client,
        catalog: SongCatalog,
        notifications: NotificationCenter,
        pool: WorkerPool,
        file_script: PhaseScript = FILE_UPLOAD_SCRIPT,
        remote_script: PhaseScript = REMOTE_EXTRACTION_SCRIPT,
        parent=None,
    ):
        super().__init__(parent)
        self.client = client
        self.catalog = catalog
        self.notifications = notifications
        self.pool = pool
        self.file_script = file_script
        self.remote_script = remote_script

        self._job: Optional[SubmissionJob] = None
        self._simulator: Optional[ProgressSimulator] = None

    # -------------------------
    # State
    # -------------------------
    @property
    def job(self) -> Optional[SubmissionJob]:
        return self._job

    @property
    def busy(self) -> bool:
        return self._job is not None

    @property
    def progress(self) -> int:
        return self._job.progress if self._job else 0

    @property
    def phase_message(self) -> str:
        return self._job.phase_message if self._job else ""

    # -------------------------
    # Entry points
    # -------------------------
    def submit_file(self, path: str) -> bool:
        if not path:
            return False
        if self.busy:
            logger.warning("Ignoring file submission while job %s is running", self._job.job_id)
            return False
        if not is_accepted_audio_file(path):
            self.notifications.show("Please upload an MP3 file", "error")
            return False

        return self._start(
            kind="file",
            label=os.path.basename(path),
            script=self.file_script,
            call=lambda: self.client.upload_file(path),
            success_message="Song uploaded and processed successfully!",
            failure_message="Upload failed",
        )

    def submit_url(self, url: str) -> bool:
        if self.busy:
            logger.warning("Ignoring URL submission while job %s is running", self._job.job_id)
            return False
        url = (url or "").strip()
        if not url:
            self.notifications.show("Please enter a YouTube URL", "error")
            return False
        if not is_remote_video_url(url):
            self.notifications.show("Please enter a valid YouTube URL", "error")
            return False

        return self._start(
            kind="remote-url",
            label=REMOTE_JOB_LABEL,
            script=self.remote_script,
            call=lambda: self.client.submit_youtube(url),
            success_message="YouTube video processed successfully!",
            failure_message="Failed to process YouTube video",
            on_success=self.url_accepted.emit,
        )

    # -------------------------
    # Job lifecycle
    # -------------------------
    def _start(
        self,
        kind: str,
        label: str,
        script: PhaseScript,
        call: Callable[[], Any],
        success_message: str,
        failure_message: str,
        on_success: Optional[Callable[[], None]] = None,
    ) -> bool:
        job = SubmissionJob(kind=kind, label=label, phase_message=script.initial_message)
        simulator = ProgressSimulator(script, parent=self)
        simulator.step.connect(lambda percent, message: self._on_step(job, percent, message))

        self._job = job
        self._simulator = simulator
        logger.info("Job %s started: %s %s", job.job_id, kind, label)
        self.job_changed.emit(job)
        self.progress_changed.emit(job.progress, job.phase_message)

        simulator.start()
        self.pool.start(
            call,
            lambda ok, payload: self._on_finished(
                job, simulator, ok, payload, success_message, failure_message, on_success
            ),
        )
        return True

    def _on_step(self, job: SubmissionJob, percent: int, message: str) -> None:
        if job is not self._job:
            return
        job.progress = max(job.progress, min(int(percent), 99))
        job.phase_message = message
        self.progress_changed.emit(job.progress, job.phase_message)

    def _on_finished(
        self,
        job: SubmissionJob,
        simulator: ProgressSimulator,
        ok: bool,
        payload,
        success_message: str,
        failure_message: str,
        on_success: Optional[Callable[[], None]],
    ) -> None:
        simulator.stop()
        try:
            if job is not self._job:
                logger.warning("Dropping result of stale job %s", job.job_id)
                return

            if ok:
                song: Song = payload
                job.progress = 100
                job.phase_message = "Done"
                self.progress_changed.emit(job.progress, job.phase_message)
                self.catalog.add(song)
                self.notifications.show(success_message, "success")
                if on_success is not None:
                    on_success()
                logger.info("Job %s finished in %.1fs: %s", job.job_id, job.elapsed_s(), song.id)
            else:
                self.notifications.show(error_text(payload, failure_message), "error")
                logger.info("Job %s failed after %.1fs: %s", job.job_id, job.elapsed_s(), payload)
        finally:
            if job is self._job:
                self._job = None
                self._simulator = None
                self.job_changed.emit(None)
                self.progress_changed.emit(0, "")
            simulator.deleteLater()
