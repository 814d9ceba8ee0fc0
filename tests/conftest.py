import hashlib
import os
import sqlite3
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep updater logs out of the real user data dir; set before project modules import
os.environ["XDG_DATA_HOME"] = tempfile.mkdtemp(prefix="dbscript_data_")
os.environ["LOCALAPPDATA"] = os.environ["XDG_DATA_HOME"]

from database import SQLiteDriver  # noqa: E402
from launcher.update.context import UpdateContext  # noqa: E402
from launcher.update.sources import UpdateSource  # noqa: E402


class DictSource(UpdateSource):
    """Serves files from memory and records every request"""

    def __init__(self, files=None, fail=False):
        self.files = dict(files or {})
        self.fail = fail
        self.calls = []

    def get_data(self, remote_name, base_url, on_progress, dest_path):
        self.calls.append((remote_name, base_url, Path(dest_path)))
        if self.fail or remote_name not in self.files:
            return False
        data = self.files[remote_name]
        if isinstance(data, str):
            data = data.encode("utf-8")
        Path(dest_path).write_bytes(data)
        if on_progress:
            on_progress(len(data), len(data))
        return True


class RecordingDriver(SQLiteDriver):
    """SQLite driver that remembers every connection it opened"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.opened = []
        self.probes = 0

    def open(self, connection_string, create=True):
        conn = super().open(connection_string, create)
        self.opened.append(conn)
        return conn

    def probe(self, connection_string):
        self.probes += 1
        return super().probe(connection_string)


def script(*lines):
    return "\n".join(lines) + "\n"


def sha256_of(text):
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def dump_db(path):
    conn = sqlite3.connect(str(path))
    try:
        return list(conn.iterdump())
    finally:
        conn.close()


def table_names(path):
    conn = sqlite3.connect(str(path))
    try:
        return {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    finally:
        conn.close()


@pytest.fixture
def install_dir(tmp_path):
    p = tmp_path / "app"
    p.mkdir()
    return p


@pytest.fixture
def context(install_dir, tmp_path):
    return UpdateContext(install_dir=install_dir, temp_folder=tmp_path / "staging", base_url="https://updates.example/feed")


@pytest.fixture
def driver():
    return RecordingDriver()
