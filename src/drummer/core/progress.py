# core/progress.py
from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QObject, QTimer, Signal


@dataclass(frozen=True)
class PhaseScript:
    initial_message: str
    steps: tuple[tuple[int, str], ...]
    interval_ms: int

    def __post_init__(self):
        if self.interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        last = 0
        for percent, _message in self.steps:
            # 100 belongs to the real completion, never to the simulation
            if not (last < percent < 100):
                raise ValueError(f"Step percents must increase and stay below 100, got {percent}")
            last = percent


FILE_UPLOAD_SCRIPT = PhaseScript(
    initial_message="Uploading file...",
    steps=(
        (10, "Uploading file..."),
        (30, "Separating stems..."),
        (55, "Removing drums..."),
        (80, "Mixing remaining stems..."),
        (95, "Finalizing..."),
    ),
    interval_ms=2000,
)

REMOTE_EXTRACTION_SCRIPT = PhaseScript(
    initial_message="Fetching video info...",
    steps=(
        (5, "Fetching video info..."),
        (15, "Downloading audio..."),
        (30, "Converting to MP3..."),
        (45, "Separating stems..."),
        (65, "Removing drums..."),
        (85, "Mixing remaining stems..."),
        (95, "Finalizing..."),
    ),
    interval_ms=3000,
)


class ProgressSimulator(QObject):
    """
    Cosmetic progress for a single job. Walks the script on its own timer
    until stop() is called or the steps run out. Nothing is emitted after stop().
    """

    step = Signal(int, str)  # percent, phase message

    def __init__(self, script: PhaseScript, parent=None):
        super().__init__(parent)
        self.script = script
        self._index = 0
        self._alive = False

        self._timer = QTimer(self)
        self._timer.setInterval(script.interval_ms)
        self._timer.timeout.connect(self._advance)

    @property
    def active(self) -> bool:
        return self._alive and self._timer.isActive()

    def start(self) -> None:
        if self._alive:
            return
        self._alive = True
        if self.script.steps:
            self._timer.start()

    def stop(self) -> None:
        self._alive = False
        self._timer.stop()

    def _advance(self) -> None:
        if not self._alive:
            return
        if self._index >= len(self.script.steps):
            self._timer.stop()
            return

        percent, message = self.script.steps[self._index]
        self._index += 1
        if self._index >= len(self.script.steps):
            # last step stays on screen until the real request resolves
            self._timer.stop()
        self.step.emit(percent, message)
