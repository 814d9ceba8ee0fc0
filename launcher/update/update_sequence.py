"""
Update Sequence
Runs a batch of update tasks through prepare, execute and rollback
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from utils.core.logging import get_logger, get_named_logger, log_section

from .context import UpdateContext
from .exceptions import UpdateProcessFailedException
from .sources import UpdateSource
from .tasks.base import TaskExecutionStatus, UpdateTask

log = get_logger()
updater_log = get_named_logger("updater", prefix="log_updater")


def _noop_status(_message: str) -> None:
    pass


class UpdateSequence:
    """Handles the prepare / execute / rollback sequence for one batch"""

    def __init__(self, context: UpdateContext, source: UpdateSource):
        self.context = context
        self.source = source

    def perform_update(
        self,
        tasks: Sequence[UpdateTask],
        status_callback: Optional[Callable[[str], None]] = None,
    ) -> bool:
        """Prepare and execute every task in order

        Args:
            tasks: Tasks of the batch, in execution order
            status_callback: Callback for status updates

        Returns:
            True if every runnable task succeeded, False if one failed
            (earlier successful tasks have been rolled back)

        Raises:
            UpdateProcessFailedException: A task could not be prepared; nothing was executed
        """
        status_callback = status_callback or _noop_status
        log_section(updater_log, "Update batch", {"Tasks": len(tasks), "BaseUrl": self.context.base_url or "-"})

        status_callback("Preparing update")
        for task in tasks:
            try:
                task.prepare(self.source)
            except UpdateProcessFailedException as exc:
                updater_log.error(f"Update aborted while preparing {task.name}: {exc}")
                status_callback(f"Update failed: {exc}")
                raise

        runnable = [t for t in tasks if t.execution_status != TaskExecutionStatus.FAILED_TO_PREPARE]
        skipped = len(tasks) - len(runnable)
        if skipped:
            updater_log.warning(f"{skipped} task(s) skipped after failing to prepare")

        status_callback("Applying update")
        completed: List[UpdateTask] = []
        for task in runnable:
            status = task.execute(cold_run=False)
            if status != TaskExecutionStatus.SUCCESSFUL:
                updater_log.error(f"{task.name} finished with status {status.value}; rolling back batch")
                status_callback("Update failed")
                self._rollback(completed)
                return False
            completed.append(task)

        status_callback("Update installed")
        updater_log.info(f"Update batch completed. Tasks applied: {len(completed)}")
        return True

    def _rollback(self, completed: List[UpdateTask]) -> None:
        for task in reversed(completed):
            try:
                if not task.rollback():
                    updater_log.warning(f"{task.name} could not be rolled back")
            except Exception as exc:  # noqa: BLE001
                # Keep rolling back the remaining tasks
                log.error(f"Rollback of {task.name} raised: {exc}")
                updater_log.exception(f"Rollback of {task.name} raised", exc_info=True)
