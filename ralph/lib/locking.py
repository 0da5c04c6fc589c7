"""
Project lock for ralph.

One loop per project: the working tree and prd.json are mutated in place, so
a second controller on the same project is refused rather than queued.
"""

import fcntl
import os
from contextlib import contextmanager
from pathlib import Path

LOCK_FILENAME = "ralph.lock"


class LockHeld(Exception):
    """Another process holds the project lock."""
    pass


def get_lock_path(project_dir: Path) -> Path:
    """Lock lives inside .git so it never shows up as a working-tree change."""
    git_dir = project_dir / ".git"
    if git_dir.is_dir():
        return git_dir / LOCK_FILENAME
    return project_dir / f".{LOCK_FILENAME}"


@contextmanager
def project_lock(project_dir: Path):
    """
    Acquire the project lock without waiting, yield, release on exit.

    Raises:
        LockHeld: if another loop is running against this project
    """
    lock_file = get_lock_path(project_dir)
    fd = open(lock_file, 'w')
    try:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            raise LockHeld(f"Another ralph loop is running in {project_dir}") from None

        fd.write(f"{os.getpid()}\n")
        fd.flush()
        try:
            yield lock_file
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
    finally:
        fd.close()
