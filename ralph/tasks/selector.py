"""Next-story selection. Pure functions of the loaded task list."""

from ralph.tasks.models import TaskItem, TaskList


def select_next_item(task_list: TaskList) -> TaskItem | None:
    """Incomplete story with the lowest id, or None when nothing is left."""
    pending = [item for item in task_list.items if not item.passes]
    if not pending:
        return None
    return min(pending, key=lambda item: item.id)


def count_remaining(task_list: TaskList) -> int:
    return sum(1 for item in task_list.items if not item.passes)


def count_completed(task_list: TaskList) -> int:
    return sum(1 for item in task_list.items if item.passes)
