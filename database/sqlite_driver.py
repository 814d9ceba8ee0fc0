"""
SQLite driver
DB-API backed implementation of the driver abstraction.

Connections are opened in autocommit mode (``isolation_level=None``) and
transactions are issued explicitly, so DDL such as ``CREATE TABLE`` is
rolled back together with the rest of a failed script.

``open(create=False)`` fails on a missing file instead of creating an empty one.

Encrypted databases need a SQLCipher build of the module (for example
``sqlcipher3``) passed as ``module``; the password is applied with
``PRAGMA key``.
"""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path
from typing import Optional

from config import SQL_CONNECT_TIMEOUT_S, SQL_PROGRESS_HANDLER_OPS
from utils.core.logging import get_logger

from .connection_string import ConnectionString
from .driver import DatabaseConnection, DatabaseDriver, DatabaseError

log = get_logger()


def _wrap_error(exc: Exception) -> DatabaseError:
    return DatabaseError(
        str(exc),
        code=getattr(exc, "sqlite_errorcode", None),
        name=getattr(exc, "sqlite_errorname", None),
    )


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class SQLiteConnection(DatabaseConnection):
    """Wraps one DB-API connection and its transaction timeout budget"""

    def __init__(self, raw, module=sqlite3):
        self._raw = raw
        self._module = module
        self._deadline: Optional[float] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def in_transaction(self) -> bool:
        return bool(getattr(self._raw, "in_transaction", False))

    def apply_key(self, password: str) -> None:
        self._run(f"PRAGMA key = {_quote_literal(password)}")

    def check_schema(self) -> None:
        """Read the schema table; fails on files that are not databases"""
        self._run("SELECT count(*) FROM sqlite_master")

    def begin(self, timeout_s: Optional[float] = None) -> None:
        if timeout_s:
            self._deadline = time.monotonic() + timeout_s
            # A non-zero return interrupts the running statement
            self._raw.set_progress_handler(self._deadline_passed, SQL_PROGRESS_HANDLER_OPS)
        self._run("BEGIN")

    def _deadline_passed(self) -> int:
        return 1 if self._deadline is not None and time.monotonic() > self._deadline else 0

    def execute(self, sql: str) -> None:
        if self._deadline_passed():
            raise DatabaseError("script timeout exceeded", name="SQLITE_INTERRUPT")
        self._run(sql)

    def commit(self) -> None:
        self._run("COMMIT")
        self._clear_deadline()

    def rollback(self) -> None:
        self._clear_deadline()
        # Some errors (e.g. SQLITE_FULL) already end the transaction
        if self.in_transaction:
            self._run("ROLLBACK")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._clear_deadline()
        try:
            self._raw.close()
        except self._module.Error as exc:
            log.warning(f"SQLite close failed: {exc}")

    def _clear_deadline(self) -> None:
        if self._deadline is not None:
            self._deadline = None
            self._raw.set_progress_handler(None, 0)

    def _run(self, sql: str) -> None:
        try:
            self._raw.execute(sql)
        except self._module.Error as exc:
            raise _wrap_error(exc) from exc


class SQLiteDriver(DatabaseDriver):
    """Opens SQLite databases through a DB-API module (sqlite3 by default)"""

    def __init__(self, module=sqlite3, connect_timeout: float = SQL_CONNECT_TIMEOUT_S):
        self.module = module
        self.connect_timeout = connect_timeout
        self._warned_unencrypted = False

    def _connect(self, data_source: Path, create: bool):
        if create:
            return self.module.connect(str(data_source), timeout=self.connect_timeout, isolation_level=None)
        # mode=rw fails on a missing file instead of creating an empty database
        uri = f"{Path(data_source).resolve().as_uri()}?mode=rw"
        return self.module.connect(uri, timeout=self.connect_timeout, isolation_level=None, uri=True)

    def open(self, connection_string: ConnectionString, create: bool = True) -> SQLiteConnection:
        try:
            raw = self._connect(connection_string.data_source, create)
        except self.module.Error as exc:
            raise _wrap_error(exc) from exc

        conn = SQLiteConnection(raw, self.module)
        if connection_string.has_password:
            if self.module is sqlite3 and not self._warned_unencrypted:
                self._warned_unencrypted = True
                log.warning(
                    f"A password is set for {connection_string.data_source} but the sqlite3 module "
                    "has no encryption support; PRAGMA key is ignored"
                )
            try:
                conn.apply_key(connection_string.password)
            except DatabaseError:
                conn.close()
                raise
        return conn

    def probe(self, connection_string: ConnectionString) -> bool:
        try:
            with self.open(connection_string) as conn:
                conn.check_schema()
        except DatabaseError as exc:
            log.debug(f"SQLite probe failed for {connection_string}: {exc}")
            return False
        return True
