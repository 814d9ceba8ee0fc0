"""Database script update entry point.

Builds a sqliteScript task from declarative attributes and runs it as a
one-task batch.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from .update.context import UpdateContext
from .update.sources import UpdateSource
from .update.tasks import create_task
from .update.update_sequence import UpdateSequence


def apply_sql_script(
    attributes: Mapping[str, Any],
    source: UpdateSource,
    context: UpdateContext,
    status_callback: Optional[Callable[[str], None]] = None,
) -> bool:
    """Download, verify and apply one SQL script.

    Returns True when the script was applied (or the task was a no-op),
    False when a statement failed and the transaction was rolled back.
    Raises UpdateProcessFailedException on fatal prepare errors.
    """
    task = create_task("sqliteScript", attributes, context)
    sequence = UpdateSequence(context, source)
    return sequence.perform_update([task], status_callback)
