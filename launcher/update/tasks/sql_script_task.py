"""
SQLite Script Task
Downloads a line-oriented SQL script and applies it to a local database
in a single transaction
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any, List, Mapping, Optional

from config import SQL_SCRIPT_TIMEOUT_S
from database import ConnectionString, DatabaseDriver, DatabaseError, SQLiteDriver
from utils.core.checksum import ChecksumComputationError, compute_sha256
from utils.core.logging import get_named_logger

from ..context import UpdateContext
from ..exceptions import (
    ChecksumMismatchError,
    DatabaseOpenError,
    FetchFailedError,
    TaskStateError,
    UpdateProcessFailedException,
)
from ..sources import UpdateSource
from ..task_config import SQLiteScriptTaskConfig
from . import update_task_alias
from .base import TaskExecutionStatus, UpdateTask

updater_log = get_named_logger("updater", prefix="log_updater")


def read_script_lines(path: Path) -> List[str]:
    """Return the statements of a script file, one per non-blank line, in file order

    Raises OSError if the file cannot be read and UnicodeDecodeError if it is not UTF-8.
    """
    with open(path, "r", encoding="utf-8-sig", newline=None) as fh:
        return [line.rstrip("\r\n") for line in fh if line.strip()]


@update_task_alias("sqliteScript")
class SQLiteScriptTask(UpdateTask):
    """Apply a downloaded SQL script to a SQLite database.

    Prepare checks the database can be opened, downloads the script to a
    fresh temp file and verifies its checksum. Execute runs every line of
    the script as one statement inside a single transaction: either all
    of them are committed or none are. Rollback cannot undo committed SQL
    and always reports success.
    """

    def __init__(
        self,
        context: UpdateContext,
        config: SQLiteScriptTaskConfig,
        driver: Optional[DatabaseDriver] = None,
        script_timeout: float = SQL_SCRIPT_TIMEOUT_S,
        description: str = "",
    ):
        super().__init__(context, description)
        self.config = config
        self.driver = driver or SQLiteDriver()
        self.script_timeout = script_timeout
        self.resolved_db_path: Optional[Path] = None
        self.staged_script_path: Optional[Path] = None
        self.connection_string: Optional[ConnectionString] = None

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any], context: UpdateContext, **kwargs) -> "SQLiteScriptTask":
        return cls(context, SQLiteScriptTaskConfig.from_attributes(attributes), **kwargs)

    @property
    def script_file(self) -> str:
        return self.config.script_file

    @property
    def db_file(self) -> str:
        return self.config.db_file

    def _missing_field(self) -> Optional[str]:
        if not self.script_file:
            return "ScriptFile"
        if not self.db_file:
            return "DbFile"
        return None

    def prepare(self, source: UpdateSource) -> None:
        if self.execution_status != TaskExecutionStatus.NOT_PREPARED:
            raise TaskStateError(f"{self.name}: prepare called in state {self.execution_status.value}")

        missing = self._missing_field()
        if missing:
            updater_log.warning(f"{self.name}: {missing} is empty, task is a noop")
            self._set_status(TaskExecutionStatus.FAILED_TO_PREPARE)
            return

        self.resolved_db_path = self.context.install_dir / self.db_file
        self.connection_string = ConnectionString(self.resolved_db_path, self.config.password)

        # Fail fast before paying for the download
        if not self.driver.probe(self.connection_string):
            raise DatabaseOpenError(self.resolved_db_path, self.name)

        temp_local = self.context.ensure_temp_folder() / uuid.uuid4().hex
        updater_log.info(
            f"{self.name}: Downloading {self.script_file} with BaseUrl of {self.context.base_url} to {temp_local}"
        )
        if not source.get_data(self.script_file, self.context.base_url, self.on_progress, temp_local):
            self._set_status(TaskExecutionStatus.FAILED_TO_PREPARE)
            raise FetchFailedError(self.script_file, self.name)

        if self.config.sha256_checksum:
            self._verify_checksum(temp_local)

        self.staged_script_path = temp_local
        updater_log.info(f"{self.name}: Prepared successfully; database to patch: {self.resolved_db_path}")
        self._set_status(TaskExecutionStatus.PREPARED)

    def _verify_checksum(self, path: Path) -> None:
        expected = self.config.sha256_checksum
        try:
            actual = compute_sha256(path)
        except ChecksumComputationError as exc:
            path.unlink(missing_ok=True)
            raise UpdateProcessFailedException(f"{self.name}: {exc}", self.name) from exc
        if actual != expected:
            path.unlink(missing_ok=True)
            raise ChecksumMismatchError(expected, actual, self.name)

    def execute(self, cold_run: bool = False) -> TaskExecutionStatus:
        missing = self._missing_field()
        if missing:
            updater_log.warning(f"{self.name}: {missing} is empty, task is a noop")
            if not self.execution_status.is_terminal:
                self._set_status(TaskExecutionStatus.SUCCESSFUL)
            return TaskExecutionStatus.SUCCESSFUL

        if self.execution_status not in (TaskExecutionStatus.NOT_PREPARED, TaskExecutionStatus.PREPARED):
            raise TaskStateError(f"{self.name}: execute called in state {self.execution_status.value}")

        if cold_run:
            updater_log.debug(f"{self.name}: cold run requested; applying script normally")

        try:
            status = self._apply_script()
        finally:
            self._discard_staged_script()
        self._set_status(status)
        return status

    def _apply_script(self) -> TaskExecutionStatus:
        if self.connection_string is None or self.staged_script_path is None:
            updater_log.error(f"{self.name}: Execute called before a successful Prepare")
            return TaskExecutionStatus.FAILED

        try:
            commands = read_script_lines(self.staged_script_path)
        except (OSError, UnicodeDecodeError) as exc:
            updater_log.error(f"{self.name}: Failed to read staged script {self.staged_script_path}: {exc}")
            return TaskExecutionStatus.FAILED

        try:
            connection = self.driver.open(self.connection_string, create=False)
        except DatabaseError as exc:
            updater_log.error(f"{self.name}: Failed to open sqlite database {self.resolved_db_path}: {exc}")
            return TaskExecutionStatus.FAILED

        with connection:
            command_text = ""
            try:
                connection.begin(self.script_timeout)
                self._set_status(TaskExecutionStatus.PENDING)
                for command_text in commands:
                    connection.execute(command_text)
                connection.commit()
            except DatabaseError as exc:
                updater_log.error(
                    f"{self.name}: Execute; Commands execution failed with code {exc.code}. "
                    f"Command: {command_text} ({exc})"
                )
                self._safe_rollback(connection)
                return TaskExecutionStatus.FAILED

        updater_log.info(f"{self.name}: Applied {len(commands)} statement(s) to {self.resolved_db_path}")
        return TaskExecutionStatus.SUCCESSFUL

    def _safe_rollback(self, connection) -> None:
        try:
            connection.rollback()
        except DatabaseError as exc:
            # The connection is closed right after; SQLite discards the open transaction
            updater_log.error(f"{self.name}: Rollback failed: {exc}")

    def _discard_staged_script(self) -> None:
        if self.staged_script_path is None:
            return
        try:
            self.staged_script_path.unlink(missing_ok=True)
        except OSError as exc:
            updater_log.warning(f"{self.name}: Could not remove staged script {self.staged_script_path}: {exc}")
        self.staged_script_path = None

    def rollback(self) -> bool:
        # Committed SQL has no generic inverse; compensating statements belong in the script
        return True
