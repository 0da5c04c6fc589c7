"""Repository bootstrap operations used during project setup."""

from pathlib import Path

from ralph.git.runner import run_git, GitResult


def init_repo(project_dir: Path) -> GitResult:
    return run_git(["init"], project_dir)


def rename_branch(project_dir: Path, branch: str = "main") -> GitResult:
    """Force-rename the current branch (git branch -M)."""
    return run_git(["branch", "-M", branch], project_dir)
