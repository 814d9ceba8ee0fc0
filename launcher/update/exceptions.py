"""
Update exceptions
Fatal prepare-time failures and task configuration/state errors
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class UpdateProcessFailedException(Exception):
    """Fatal update failure; the orchestrator aborts the whole batch.

    Raised from prepare when proceeding would mean applying an
    unverified or unreachable update.
    """

    def __init__(self, message: str, task_name: Optional[str] = None):
        super().__init__(message)
        self.task_name = task_name


class DatabaseOpenError(UpdateProcessFailedException):
    """The target database could not be opened during the pre-flight check"""

    def __init__(self, db_path: Path, task_name: Optional[str] = None):
        super().__init__(f"{task_name or 'UpdateTask'}: Failed to open sqlite database {db_path}", task_name)
        self.db_path = db_path


class FetchFailedError(UpdateProcessFailedException):
    """The update source did not deliver the requested file"""

    def __init__(self, remote_name: str, task_name: Optional[str] = None):
        super().__init__(f"{task_name or 'UpdateTask'}: Failed to get file {remote_name} from source", task_name)
        self.remote_name = remote_name


class ChecksumMismatchError(UpdateProcessFailedException):
    """The staged file does not match the configured digest"""

    def __init__(self, expected: str, actual: str, task_name: Optional[str] = None):
        super().__init__(
            f"{task_name or 'UpdateTask'}: Checksums do not match; expected {expected} but got {actual}",
            task_name,
        )
        self.expected = expected
        self.actual = actual


class TaskConfigError(ValueError):
    """Declarative task attributes are malformed or name an unknown task"""


class TaskStateError(RuntimeError):
    """A lifecycle phase was invoked from a state that does not allow it"""
