#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Update management package
Handles fetching, verifying and applying update tasks
"""

from .context import UpdateContext
from .exceptions import (
    ChecksumMismatchError,
    DatabaseOpenError,
    FetchFailedError,
    TaskConfigError,
    TaskStateError,
    UpdateProcessFailedException,
)
from .sources import HttpSource, LocalFolderSource, UpdateSource
from .task_config import SQLiteScriptTaskConfig
from .tasks import SQLiteScriptTask, TaskExecutionStatus, UpdateTask, create_task
from .update_sequence import UpdateSequence

__all__ = [
    'ChecksumMismatchError',
    'DatabaseOpenError',
    'FetchFailedError',
    'HttpSource',
    'LocalFolderSource',
    'SQLiteScriptTask',
    'SQLiteScriptTaskConfig',
    'TaskConfigError',
    'TaskExecutionStatus',
    'TaskStateError',
    'UpdateContext',
    'UpdateProcessFailedException',
    'UpdateSequence',
    'UpdateSource',
    'UpdateTask',
    'create_task',
]
