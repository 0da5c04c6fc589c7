"""Git remote operations."""

from pathlib import Path

from ralph.git.runner import run_git, GitResult, REMOTE_TIMEOUT


def has_remote(project_dir: Path, remote: str = "origin") -> bool:
    """Check if the named remote is configured."""
    result = run_git(["remote"], project_dir)
    return remote in result.stdout.split()


def add_remote(project_dir: Path, url: str, remote: str = "origin") -> GitResult:
    return run_git(["remote", "add", remote, url], project_dir)


def set_remote_url(project_dir: Path, url: str, remote: str = "origin") -> GitResult:
    return run_git(["remote", "set-url", remote, url], project_dir)


def push(project_dir: Path, remote: str = "origin", branch: str = "main") -> GitResult:
    """Push branch to remote."""
    return run_git(["push", remote, branch], project_dir, timeout=REMOTE_TIMEOUT)


def push_set_upstream(project_dir: Path, remote: str = "origin", branch: str = "main") -> GitResult:
    """Push and set upstream tracking."""
    return run_git(["push", "-u", remote, branch], project_dir, timeout=REMOTE_TIMEOUT)


def pull_rebase(project_dir: Path, remote: str = "origin", branch: str = "main") -> GitResult:
    """Pull with rebase so local story commits stay linear."""
    return run_git(["pull", remote, branch, "--rebase"], project_dir, timeout=REMOTE_TIMEOUT)
