"""
Task list (prd.json) model, persistence and story selection.
"""

from ralph.tasks.models import TaskItem, TaskList
from ralph.tasks.store import (
    TaskListError,
    TaskListNotFound,
    load_task_list,
    save_task_list,
    append_items,
)
from ralph.tasks.selector import select_next_item, count_remaining, count_completed

__all__ = [
    "TaskItem",
    "TaskList",
    "TaskListError",
    "TaskListNotFound",
    "load_task_list",
    "save_task_list",
    "append_items",
    "select_next_item",
    "count_remaining",
    "count_completed",
]
