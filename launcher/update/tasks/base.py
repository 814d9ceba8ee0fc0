"""
Update task base
Execution status and the prepare / execute / rollback contract
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, FrozenSet, Optional

from ..context import UpdateContext
from ..exceptions import TaskStateError
from ..sources import UpdateSource


class TaskExecutionStatus(str, Enum):
    NOT_PREPARED = "NotPrepared"
    PREPARED = "Prepared"
    FAILED_TO_PREPARE = "FailedToPrepare"
    PENDING = "Pending"
    SUCCESSFUL = "Successful"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES: FrozenSet[TaskExecutionStatus] = frozenset({
    TaskExecutionStatus.SUCCESSFUL,
    TaskExecutionStatus.FAILED,
    TaskExecutionStatus.FAILED_TO_PREPARE,
})

# Status only moves forward; anything missing here is illegal
_ALLOWED: Dict[TaskExecutionStatus, FrozenSet[TaskExecutionStatus]] = {
    TaskExecutionStatus.NOT_PREPARED: frozenset({
        TaskExecutionStatus.PREPARED,
        TaskExecutionStatus.FAILED_TO_PREPARE,
        TaskExecutionStatus.FAILED,
        TaskExecutionStatus.SUCCESSFUL,
    }),
    TaskExecutionStatus.PREPARED: frozenset({
        TaskExecutionStatus.PENDING,
        TaskExecutionStatus.FAILED,
        TaskExecutionStatus.SUCCESSFUL,
    }),
    TaskExecutionStatus.PENDING: frozenset({
        TaskExecutionStatus.SUCCESSFUL,
        TaskExecutionStatus.FAILED,
    }),
}


class UpdateTask(ABC):
    """One unit of an application update.

    The orchestrator calls prepare() for every task of a batch, then
    execute(), and rollback() on tasks that already succeeded when a
    later one fails.
    """

    alias: str = ""

    def __init__(self, context: UpdateContext, description: str = ""):
        self.context = context
        self.description = description
        self._status = TaskExecutionStatus.NOT_PREPARED

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def execution_status(self) -> TaskExecutionStatus:
        return self._status

    def _set_status(self, status: TaskExecutionStatus) -> None:
        if status == self._status:
            return
        if status not in _ALLOWED.get(self._status, frozenset()):
            raise TaskStateError(f"{self.name}: illegal status transition {self._status.value} -> {status.value}")
        self._status = status

    def on_progress(self, downloaded: int, total: Optional[int]) -> None:
        if self.context.progress_callback:
            self.context.progress_callback(downloaded, total)

    @abstractmethod
    def prepare(self, source: UpdateSource) -> None:
        ...

    @abstractmethod
    def execute(self, cold_run: bool = False) -> TaskExecutionStatus:
        ...

    @abstractmethod
    def rollback(self) -> bool:
        ...

    def __repr__(self) -> str:
        return f"<{self.name} status={self._status.value}>"
