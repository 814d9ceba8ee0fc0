import logging
import sqlite3

import pytest

from database import ConnectionString, DatabaseError, SQLiteDriver

from conftest import table_names


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "app.db"


def test_probe_creates_and_accepts_new_database(db_path):
    assert SQLiteDriver().probe(ConnectionString(db_path))
    assert db_path.exists()


def test_probe_rejects_directory(tmp_path):
    folder = tmp_path / "not_a_db"
    folder.mkdir()
    assert SQLiteDriver().probe(ConnectionString(folder)) is False


def test_probe_rejects_garbage_file(tmp_path):
    junk = tmp_path / "junk.db"
    junk.write_bytes(b"this is definitely not a sqlite database file" * 100)
    assert SQLiteDriver().probe(ConnectionString(junk)) is False


def test_open_failure_raises_database_error(tmp_path):
    with pytest.raises(DatabaseError):
        SQLiteDriver().open(ConnectionString(tmp_path / "missing_dir" / "app.db"))


def test_commit_persists_ddl_and_dml(db_path):
    with SQLiteDriver().open(ConnectionString(db_path)) as conn:
        conn.begin()
        conn.execute("CREATE TABLE t(x INT);")
        conn.execute("INSERT INTO t VALUES (1);")
        conn.commit()
    assert table_names(db_path) == {"t"}


def test_rollback_discards_ddl(db_path):
    with SQLiteDriver().open(ConnectionString(db_path)) as conn:
        conn.begin()
        conn.execute("CREATE TABLE t(x INT);")
        with pytest.raises(DatabaseError):
            conn.execute("INSERT INTO nonexistent_table VALUES (1);")
        conn.rollback()
    assert table_names(db_path) == set()


def test_error_carries_sqlite_details(db_path):
    with SQLiteDriver().open(ConnectionString(db_path)) as conn:
        conn.begin()
        with pytest.raises(DatabaseError) as info:
            conn.execute("THIS IS NOT SQL")
        conn.rollback()
    assert "syntax error" in str(info.value)
    assert isinstance(info.value.__cause__, sqlite3.Error)


def test_timeout_budget_interrupts_runaway_statement(db_path):
    runaway = "WITH RECURSIVE c(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM c) SELECT count(*) FROM c;"
    with SQLiteDriver().open(ConnectionString(db_path)) as conn:
        conn.begin(timeout_s=0.2)
        with pytest.raises(DatabaseError):
            conn.execute(runaway)
        conn.rollback()


def test_close_is_idempotent(db_path):
    conn = SQLiteDriver().open(ConnectionString(db_path))
    conn.close()
    conn.close()
    assert conn.closed


def test_context_manager_closes_on_error(db_path):
    driver = SQLiteDriver()
    with pytest.raises(RuntimeError):
        with driver.open(ConnectionString(db_path)) as conn:
            raise RuntimeError("boom")
    assert conn.closed


class _RecordingModule:
    """Minimal DB-API stand-in that records statements"""

    Error = sqlite3.Error

    def __init__(self):
        self.statements = []

    def connect(self, path, timeout, isolation_level):
        module = self

        class _Conn:
            in_transaction = False

            def execute(self, sql):
                module.statements.append(sql)

            def set_progress_handler(self, handler, n):
                pass

            def close(self):
                pass

        return _Conn()


def test_password_applied_as_pragma_key(db_path):
    module = _RecordingModule()
    with SQLiteDriver(module=module).open(ConnectionString(db_path, "it's")) as conn:
        conn.check_schema()
    assert module.statements[0] == "PRAGMA key = 'it''s'"


def test_open_without_create_rejects_missing_file(db_path):
    with pytest.raises(DatabaseError):
        SQLiteDriver().open(ConnectionString(db_path), create=False)
    assert not db_path.exists()


def test_open_without_create_uses_existing_file(db_path):
    SQLiteDriver().probe(ConnectionString(db_path))
    with SQLiteDriver().open(ConnectionString(db_path), create=False) as conn:
        conn.begin()
        conn.execute("CREATE TABLE t(x INT);")
        conn.commit()
    assert table_names(db_path) == {"t"}


def test_password_with_plain_sqlite3_warns_once(db_path, caplog):
    driver = SQLiteDriver()
    with caplog.at_level(logging.WARNING):
        driver.probe(ConnectionString(db_path, "s3cret"))
        driver.probe(ConnectionString(db_path, "s3cret"))
    warnings = [r for r in caplog.records if "no encryption support" in r.getMessage()]
    assert len(warnings) == 1
    assert "s3cret" not in caplog.text


def test_password_with_sqlcipher_module_does_not_warn(db_path, caplog):
    with caplog.at_level(logging.WARNING):
        with SQLiteDriver(module=_RecordingModule()).open(ConnectionString(db_path, "pw")):
            pass
    assert "no encryption support" not in caplog.text
