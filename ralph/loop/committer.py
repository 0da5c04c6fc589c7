"""
Commit and publish the changes an agent made for one story.

Publishing is best effort: a failed push leaves the commit local and the
loop moves on. A clean working tree is a valid outcome, not an error.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ralph import git
from ralph.tasks.models import TaskItem

logger = logging.getLogger(__name__)


@dataclass
class CommitOutcome:
    changes_detected: bool
    committed: bool = False
    pushed: bool = False
    sha: Optional[str] = None


def build_commit_message(item: TaskItem, iteration: int) -> str:
    return (
        f"feat: Implement story #{item.id} - {item.title}\n"
        f"\n"
        f"Implemented via Ralph loop iteration {iteration}\n"
        f"Acceptance criteria: {item.criteria_text}"
    )


def publish(project_dir: Path, remote: str, branch: str) -> bool:
    """Push, logging a warning on failure. Returns True if pushed."""
    result = git.push(project_dir, remote, branch)
    if result.success:
        logger.info(f"Pushed to {remote}/{branch}")
        return True
    logger.warning(f"Push to {remote}/{branch} failed - continuing anyway: {result.output}")
    return False


def commit_story_changes(project_dir: Path, item: TaskItem, iteration: int,
                         remote: str, branch: str) -> CommitOutcome:
    if not git.has_uncommitted_changes(project_dir):
        logger.warning(f"No changes detected for story #{item.id} - marking complete anyway")
        return CommitOutcome(changes_detected=False)

    changed = git.get_changed_files(project_dir)
    logger.info(f"Committing {len(changed)} changed files for story #{item.id}")

    staged = git.stage_all(project_dir)
    if not staged.success:
        logger.warning(f"git add failed for story #{item.id}: {staged.output}")
        return CommitOutcome(changes_detected=True)

    result = git.commit(project_dir, build_commit_message(item, iteration))
    if not result.success:
        if git.is_nothing_to_commit(result):
            # Only ignored files changed
            logger.warning(f"Nothing to commit for story #{item.id} after staging")
        else:
            logger.warning(f"git commit failed for story #{item.id}: {result.output}")
        return CommitOutcome(changes_detected=True)

    sha = git.get_head_sha(project_dir)
    pushed = publish(project_dir, remote, branch)
    return CommitOutcome(changes_detected=True, committed=True, pushed=pushed, sha=sha)
