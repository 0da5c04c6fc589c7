"""
Task list persistence.

prd.json is the single source of truth for loop progress. Reads are never
cached; writes go through a temp file and os.replace so a crash can leave
either the old or the new document on disk, never a torn one.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from ralph.lib.validate import ValidationError, validate, validate_before_write
from ralph.tasks.models import TaskItem, TaskList

logger = logging.getLogger(__name__)

SCHEMA_NAME = "prd"


class TaskListError(Exception):
    """Task list document unreadable or invalid."""
    pass


class TaskListNotFound(TaskListError):
    """Task list document does not exist."""
    pass


def load_task_list(path: Path) -> TaskList:
    """Read and validate the task list.

    Raises:
        TaskListNotFound: if the document is absent
        TaskListError: if it is not valid JSON or fails the schema
    """
    if not path.exists():
        raise TaskListNotFound(f"{path.name} not found in {path.parent}")

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise TaskListError(f"Invalid JSON in {path}: {e}") from None
    except UnicodeDecodeError as e:
        raise TaskListError(f"{path.name} is not valid UTF-8: {e}") from None
    except OSError as e:
        raise TaskListError(f"Could not read {path}: {e}") from e

    try:
        validate(document, SCHEMA_NAME)
    except ValidationError as e:
        raise TaskListError(f"{path.name} failed validation: {e}") from None

    task_list = TaskList(document)
    ids = [raw["id"] for raw in task_list.raw_items]
    if len(ids) != len(set(ids)):
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        raise TaskListError(f"{path.name} has duplicate story ids: {duplicates}")

    return task_list


def _write_text_atomic(path: Path, text: str) -> None:
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.unlink(tmp)


def save_task_list(path: Path, task_list: TaskList) -> None:
    """Validate and atomically rewrite the whole document.

    Raises:
        TaskListError: if the document would be invalid (nothing is written)
        OSError: if the write itself fails (the previous document survives)
    """
    try:
        validate_before_write(task_list.document, SCHEMA_NAME, path)
    except ValidationError as e:
        raise TaskListError(str(e)) from None

    _write_text_atomic(path, json.dumps(task_list.document, indent=2, ensure_ascii=False) + "\n")


def append_items(path: Path, new_items: list[TaskItem]) -> list[TaskItem]:
    """Append stories to the persisted task list, returning them with their assigned ids."""
    task_list = load_task_list(path)
    appended = task_list.append(new_items)
    if appended:
        save_task_list(path, task_list)
        logger.info(
            f"Appended {len(appended)} stories to {path.name} "
            f"(ids {appended[0].id}-{appended[-1].id})"
        )
    return appended
