"""Git commit operations."""

from pathlib import Path

from ralph.git.runner import run_git, GitResult

NOTHING_TO_COMMIT_MARKERS = ("nothing to commit", "nothing added to commit", "no changes added to commit")


def stage_files(project_dir: Path, files: list[str]) -> GitResult:
    """Stage specific files."""
    return run_git(["add", "--"] + files, project_dir)


def stage_all(project_dir: Path) -> GitResult:
    """Stage all changes (new, modified, deleted)."""
    return run_git(["add", "-A"], project_dir)


def commit(project_dir: Path, message: str) -> GitResult:
    """Create a commit with the given message."""
    return run_git(["commit", "-m", message], project_dir)


def is_nothing_to_commit(result: GitResult) -> bool:
    """True when a failed commit only means the index was clean."""
    if result.success:
        return False
    text = result.output.lower()
    return any(marker in text for marker in NOTHING_TO_COMMIT_MARKERS)


def commit_paths(project_dir: Path, message: str, paths: list[str]) -> GitResult:
    """Commit only the given paths, leaving anything else in the index alone."""
    return run_git(["commit", "-m", message, "--"] + paths, project_dir)
