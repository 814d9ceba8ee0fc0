"""
Update tasks
Registry of task kinds by manifest alias
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Type

from ..context import UpdateContext
from ..exceptions import TaskConfigError

TASK_REGISTRY: Dict[str, Type] = {}


def update_task_alias(alias: str):
    """Class decorator registering a task class under its manifest alias"""
    def register(cls):
        if alias in TASK_REGISTRY and TASK_REGISTRY[alias] is not cls:
            raise TaskConfigError(f"Task alias {alias!r} already registered by {TASK_REGISTRY[alias].__name__}")
        cls.alias = alias
        TASK_REGISTRY[alias] = cls
        return cls
    return register


def create_task(alias: str, attributes: Mapping[str, Any], context: UpdateContext, **kwargs):
    """Build a task from its alias and declarative attributes"""
    try:
        task_cls = TASK_REGISTRY[alias]
    except KeyError:
        raise TaskConfigError(f"Unknown update task alias {alias!r}") from None
    return task_cls.from_attributes(attributes, context, **kwargs)


# Imported last so the decorator above is defined when task modules load
from .base import TaskExecutionStatus, UpdateTask  # noqa: E402
from .sql_script_task import SQLiteScriptTask  # noqa: E402

__all__ = [
    'TASK_REGISTRY',
    'SQLiteScriptTask',
    'TaskExecutionStatus',
    'UpdateTask',
    'create_task',
    'update_task_alias',
]
