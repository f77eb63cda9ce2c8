from __future__ import annotations

import logging
import os
from typing import Any, Optional

import requests

from drummer.core.models import Song

logger = logging.getLogger(__name__)


class DrummerApiError(Exception):
    """Raised for transport failures and non-2xx answers from the Drummer backend."""

    def __init__(self, message: str, status_code: Optional[int] = None, server_message: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.server_message = server_message


class DrummerClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout_s: float = 15.0,
        user_agent: str = "drummer-pyside6/0.3",
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    # -------------------------
    # Songs
    # -------------------------
    def list_songs(self) -> list[Song]:
        data = self._json(self._request("GET", "/api/songs", timeout=self.timeout_s))
        # the server sends null for an empty table
        if data is None:
            return []
        if not isinstance(data, list):
            raise DrummerApiError(f"Unexpected songs payload: {type(data).__name__}")
        return [self._song(item) for item in data]

    def get_version(self) -> str:
        data = self._json(self._request("GET", "/api/version", timeout=self.timeout_s))
        if not isinstance(data, dict) or not data.get("version"):
            raise DrummerApiError("Version missing from response")
        return str(data["version"])

    def upload_file(self, path: str) -> Song:
        # no timeout: separation can take minutes and the server answers only when done
        with open(path, "rb") as fh:
            files = {"file": (os.path.basename(path), fh, "audio/mpeg")}
            r = self._request("POST", "/api/upload", files=files, timeout=None)
        return self._song(self._json(r))

    def submit_youtube(self, url: str) -> Song:
        r = self._request("POST", "/api/youtube", json={"url": url}, timeout=None)
        return self._song(self._json(r))

    def rename_song(self, song_id: str, name: str) -> Song:
        r = self._request("PUT", f"/api/songs/{song_id}", json={"name": name}, timeout=self.timeout_s)
        return self._song(self._json(r))

    def delete_song(self, song_id: str) -> None:
        self._request("DELETE", f"/api/songs/{song_id}", timeout=self.timeout_s)

    def download_song(self, song_id: str, destination: str, original: bool = False) -> str:
        path = f"/api/download/{song_id}/original" if original else f"/api/download/{song_id}"
        r = self._request("GET", path, stream=True, timeout=self.timeout_s)
        try:
            with open(destination, "wb") as out:
                for chunk in r.iter_content(chunk_size=64 * 1024):
                    if chunk:
                        out.write(chunk)
        except (OSError, requests.RequestException) as e:
            if os.path.exists(destination):
                os.remove(destination)
            raise DrummerApiError(f"Download of {song_id} failed: {e}") from e
        finally:
            r.close()
        return destination

    # -------------------------
    # Helpers
    # -------------------------
    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise DrummerApiError(f"{method} {path} failed: {e}") from e

        if not r.ok:
            server_message = _error_field(r)
            r.close()
            logger.warning("%s %s -> %s %s", method, url, r.status_code, server_message or "")
            raise DrummerApiError(
                f"{method} {path} returned {r.status_code}",
                status_code=r.status_code,
                server_message=server_message,
            )
        return r

    @staticmethod
    def _json(r: requests.Response) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise DrummerApiError(f"Invalid JSON from {r.url}", status_code=r.status_code) from e

    @staticmethod
    def _song(data: Any) -> Song:
        try:
            return Song.from_json(data)
        except ValueError as e:
            raise DrummerApiError(str(e)) from e


def _error_field(r: requests.Response) -> Optional[str]:
    try:
        data = r.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        msg = (str(data.get("error") or "")).strip()
        return msg or None
    return None
