# core/models.py
from __future__ import annotations

import itertools
import re
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

_job_ids = itertools.count(1)


@dataclass(frozen=True)
class Song:
    id: str
    name: str
    created_at: str  # ISO-8601 as sent by the server

    @classmethod
    def from_json(cls, data: Any) -> "Song":
        if not isinstance(data, dict):
            raise ValueError(f"Expected a song object, got {type(data).__name__}")
        try:
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                created_at=str(data.get("created_at") or ""),
            )
        except KeyError as e:
            raise ValueError(f"Song object is missing {e}") from e

    def created_datetime(self) -> Optional[datetime]:
        raw = (self.created_at or "").strip()
        if not raw:
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        # Go sends nanoseconds
        raw = re.sub(r"(\.\d{6})\d+", r"\1", raw)
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return None

    def created_date_label(self) -> str:
        dt = self.created_datetime()
        if dt is None:
            return self.created_at
        if dt.tzinfo is not None:
            dt = dt.astimezone()
        return dt.strftime("%x")


@dataclass(frozen=True)
class Notification:
    text: str
    severity: str = "info"  # "error" | "success" | "info"
    generation: int = 0


@dataclass(frozen=True)
class EditSession:
    song_id: str
    draft_name: str


@dataclass
class SubmissionJob:
    kind: str  # "file" | "remote-url"
    label: str
    progress: int = 0
    phase_message: str = ""
    job_id: int = field(default_factory=lambda: next(_job_ids))
    started: float = field(default_factory=time.monotonic)

    def elapsed_s(self) -> float:
        return time.monotonic() - self.started
