"""
Update Sources
Fetch remote update files into a local path chosen by the caller
"""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urljoin

import requests

from config import APP_USER_AGENT, SCRIPT_DOWNLOAD_CHUNK_SIZE, SCRIPT_DOWNLOAD_TIMEOUT_S
from utils.core.logging import get_named_logger

updater_log = get_named_logger("updater", prefix="log_updater")

ProgressCallback = Callable[[int, Optional[int]], None]


class UpdateSource(ABC):
    """Where update files come from"""

    @abstractmethod
    def get_data(
        self,
        remote_name: str,
        base_url: str,
        on_progress: Optional[ProgressCallback],
        dest_path: Path,
    ) -> bool:
        """Write the remote file to ``dest_path``

        Args:
            remote_name: File name relative to the source root
            base_url: Base URL of the update feed (may be ignored)
            on_progress: Optional callback receiving (bytes_done, total_or_None)
            dest_path: Local file to create

        Returns:
            True if the file was written completely, False otherwise
        """


class HttpSource(UpdateSource):
    """Downloads files over HTTP(S) with a streamed GET"""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        chunk_size: int = SCRIPT_DOWNLOAD_CHUNK_SIZE,
        timeout: float = SCRIPT_DOWNLOAD_TIMEOUT_S,
    ):
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", APP_USER_AGENT)
        self.chunk_size = chunk_size
        self.timeout = timeout

    @staticmethod
    def build_url(remote_name: str, base_url: str) -> str:
        if not base_url:
            return remote_name
        if not base_url.endswith("/"):
            base_url += "/"
        return urljoin(base_url, remote_name)

    def get_data(self, remote_name, base_url, on_progress, dest_path) -> bool:
        url = self.build_url(remote_name, base_url)
        dest_path = Path(dest_path)
        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            with self.session.get(url, stream=True, timeout=self.timeout) as r:
                r.raise_for_status()
                total_size = int(r.headers.get("Content-Length") or 0) or None
                bytes_read = 0
                with open(dest_path, "wb") as fh:
                    for chunk in r.iter_content(self.chunk_size):
                        if not chunk:
                            continue
                        fh.write(chunk)
                        bytes_read += len(chunk)
                        if on_progress:
                            on_progress(bytes_read, total_size)
            return True
        except (requests.RequestException, OSError) as exc:
            updater_log.error(f"Download of {url} failed: {exc}")
            dest_path.unlink(missing_ok=True)
            return False


class LocalFolderSource(UpdateSource):
    """Serves update files from a local directory; base_url is ignored"""

    def __init__(self, folder: Path):
        self.folder = Path(folder)

    def get_data(self, remote_name, base_url, on_progress, dest_path) -> bool:
        source_path = self.folder / remote_name
        if not source_path.is_file():
            updater_log.error(f"Update file {source_path} not found")
            return False
        try:
            Path(dest_path).parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source_path, dest_path)
        except OSError as exc:
            updater_log.error(f"Copy of {source_path} failed: {exc}")
            return False
        if on_progress:
            size = Path(dest_path).stat().st_size
            on_progress(size, size)
        return True
