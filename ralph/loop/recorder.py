"""
Durable story completion.

Marking a story done rewrites prd.json atomically and then records that
rewrite as its own commit, separate from the implementation commit.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ralph import git
from ralph.loop.committer import publish
from ralph.tasks.models import TaskItem
from ralph.tasks.store import load_task_list, save_task_list

logger = logging.getLogger(__name__)


@dataclass
class RecordOutcome:
    marked: bool
    committed: bool = False
    pushed: bool = False


def mark_item_complete(task_list_path: Path, item_id: int) -> bool:
    """Set passes=true on one story and persist.

    Idempotent: an already-complete story is left as is. Returns False if
    the id is not in the document.

    Raises:
        TaskListError: if the document cannot be read or would be invalid
        OSError: if the write fails (the previous document survives)
    """
    task_list = load_task_list(task_list_path)
    item = task_list.get_item(item_id)
    if item is None:
        logger.warning(f"Story #{item_id} not found in {task_list_path.name}")
        return False
    if item.passes:
        logger.debug(f"Story #{item_id} already marked complete")
        return True

    task_list.mark_passed(item_id)
    save_task_list(task_list_path, task_list)
    return True


def _pathspec(project_dir: Path, task_list_path: Path) -> str:
    """Task list path as git sees it from project_dir; absolute if it lies outside."""
    resolved = task_list_path.resolve()
    try:
        return str(resolved.relative_to(project_dir.resolve()))
    except ValueError:
        return str(resolved)


def record_progress(project_dir: Path, task_list_path: Path, item: TaskItem,
                    remote: str, branch: str) -> RecordOutcome:
    rel_path = _pathspec(project_dir, task_list_path)

    logger.info(f"Marking story #{item.id} as complete in {task_list_path.name}...")
    if not mark_item_complete(task_list_path, item.id):
        return RecordOutcome(marked=False)

    staged = git.stage_files(project_dir, [rel_path])
    if not staged.success:
        logger.warning(f"Could not stage {rel_path}: {staged.output}")
        return RecordOutcome(marked=True)

    result = git.commit_paths(project_dir, f"chore: Mark story #{item.id} as complete", [rel_path])
    if not result.success:
        if git.is_nothing_to_commit(result):
            logger.info(f"{rel_path} already committed for story #{item.id}")
        else:
            logger.warning(f"Progress commit failed for story #{item.id}: {result.output}")
        return RecordOutcome(marked=True)

    pushed = publish(project_dir, remote, branch)
    return RecordOutcome(marked=True, committed=True, pushed=pushed)
