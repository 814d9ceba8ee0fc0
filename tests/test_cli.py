import pytest

import main as entry
from config import EXIT_OK, EXIT_PREPARE_FAILED, EXIT_TASK_FAILED
from main.setup import setup_arguments, task_attributes

from conftest import script, sha256_of, table_names

INIT_SQL = script("CREATE TABLE t(x INT);", "INSERT INTO t VALUES (1);")


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(entry, "setup_logging_and_cleanup", lambda args: "customer")


@pytest.fixture
def feed(tmp_path):
    d = tmp_path / "feed"
    d.mkdir()
    (d / "init.sql").write_text(INIT_SQL, encoding="utf-8")
    (d / "broken.sql").write_text(script("CREATE TABLE t(x INT);", "BROKEN;"), encoding="utf-8")
    return d


def run(feed, install_dir, tmp_path, *extra):
    return entry.main([
        "--source-dir", str(feed),
        "--install-dir", str(install_dir),
        "--temp-dir", str(tmp_path / "staging"),
        *extra,
    ])


def test_applies_script(feed, install_dir, tmp_path):
    code = run(feed, install_dir, tmp_path, "--script-file", "init.sql", "--db-file", "app.db",
               "--sha256", sha256_of(INIT_SQL))
    assert code == EXIT_OK
    assert table_names(install_dir / "app.db") == {"t"}


def test_failed_statement_exit_code(feed, install_dir, tmp_path):
    code = run(feed, install_dir, tmp_path, "--script-file", "broken.sql", "--db-file", "app.db")
    assert code == EXIT_TASK_FAILED
    assert table_names(install_dir / "app.db") == set()


def test_checksum_mismatch_exit_code(feed, install_dir, tmp_path):
    code = run(feed, install_dir, tmp_path, "--script-file", "init.sql", "--db-file", "app.db",
               "--sha256", "0" * 64)
    assert code == EXIT_PREPARE_FAILED


def test_malformed_checksum_exit_code(feed, install_dir, tmp_path):
    code = run(feed, install_dir, tmp_path, "--script-file", "init.sql", "--db-file", "app.db", "--sha256", "xyz")
    assert code == EXIT_PREPARE_FAILED


def test_missing_script_in_feed_exit_code(feed, install_dir, tmp_path):
    code = run(feed, install_dir, tmp_path, "--script-file", "nope.sql", "--db-file", "app.db")
    assert code == EXIT_PREPARE_FAILED


def test_noop_when_db_file_missing(feed, install_dir, tmp_path):
    assert run(feed, install_dir, tmp_path, "--script-file", "init.sql") == EXIT_OK
    assert list(install_dir.iterdir()) == []


def test_source_is_required():
    with pytest.raises(SystemExit):
        setup_arguments(["--script-file", "init.sql"])


def test_task_attributes_use_manifest_names():
    args = setup_arguments(["--base-url", "https://x", "--script-file", "s.sql", "--db-file", "d.db",
                            "--pwd", "pw", "--sha256", "a" * 64])
    assert task_attributes(args) == {
        "scriptFile": "s.sql", "dbFile": "d.db", "pwd": "pw", "sha256-checksum": "a" * 64,
    }
