"""
Git bootstrap and publishing for project setup.

The token-bearing push URL is set on the remote only for the duration of a
push; the clean URL is always restored afterwards so the token never stays
in .git/config.
"""

import logging
from pathlib import Path

from ralph import git
from ralph.lib.config import BuilderConfig
from ralph.lib.constants import DEFAULT_BRANCH, DEFAULT_REMOTE

logger = logging.getLogger(__name__)


def _commit_all(project_dir: Path, message: str) -> bool:
    """Stage everything and commit. Returns True if a commit was made."""
    staged = git.stage_all(project_dir)
    if not staged.success:
        logger.warning(f"git add failed: {staged.output}")
        return False

    result = git.commit(project_dir, message)
    if result.success:
        return True
    if git.is_nothing_to_commit(result):
        logger.info("No changes to commit")
    else:
        logger.warning(f"Commit failed: {result.output}")
    return False


def init_commit_and_push(
    project_dir: Path,
    name: str,
    config: BuilderConfig,
    message: str,
    remote: str = DEFAULT_REMOTE,
    branch: str = DEFAULT_BRANCH,
) -> bool:
    """
    Initialise (or update) the project repository, commit everything and push.

    An existing repository is rebased onto the remote first. Returns True if
    the push succeeded; every failure here is logged and tolerated.
    """
    repo_url = config.repo_url(name)

    if git.is_git_repo(project_dir):
        logger.info("Already a git repo - pulling latest before commit...")
        pulled = git.pull_rebase(project_dir, remote, branch)
        if not pulled.success:
            logger.warning(f"Pull failed, continuing with local state: {pulled.output}")
    else:
        git.init_repo(project_dir)
        git.add_remote(project_dir, repo_url, remote)

    git.set_remote_url(project_dir, config.push_url(name), remote)
    try:
        _commit_all(project_dir, message)
        git.rename_branch(project_dir, branch)

        pushed = git.push_set_upstream(project_dir, remote, branch)
        if not pushed.success:
            pushed = git.push(project_dir, remote, branch)
        if not pushed.success:
            logger.warning(f"Push to {remote}/{branch} failed: {pushed.output}")
        return pushed.success
    finally:
        git.set_remote_url(project_dir, repo_url, remote)


def commit_and_push(
    project_dir: Path,
    message: str,
    paths: list[str],
    remote: str = DEFAULT_REMOTE,
    branch: str = DEFAULT_BRANCH,
) -> bool:
    """Commit only the given paths and push. Returns True if the push succeeded."""
    staged = git.stage_files(project_dir, paths)
    if not staged.success:
        logger.warning(f"git add failed: {staged.output}")
        return False

    result = git.commit_paths(project_dir, message, paths)
    if not result.success:
        if git.is_nothing_to_commit(result):
            logger.info("No changes to commit")
        else:
            logger.warning(f"Commit failed: {result.output}")
        return False

    pushed = git.push(project_dir, remote, branch)
    if not pushed.success:
        logger.warning(f"Push to {remote}/{branch} failed: {pushed.output}")
    return pushed.success
