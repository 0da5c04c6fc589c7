"""Git status operations."""

from pathlib import Path

from ralph.git.runner import run_git


def is_git_repo(project_dir: Path) -> bool:
    """Check if project_dir is inside a git work tree."""
    result = run_git(["rev-parse", "--is-inside-work-tree"], project_dir)
    return result.success and result.stdout.strip() == "true"


def has_uncommitted_changes(project_dir: Path) -> bool:
    """Check for staged, unstaged, or untracked changes."""
    result = run_git(["status", "--porcelain"], project_dir)
    return bool(result.stdout.strip())


def get_changed_files(project_dir: Path) -> list[str]:
    """Get list of changed files (staged + unstaged + untracked).

    Uses -z for null-separated output to handle filenames with spaces.
    Returns empty list on git failure (e.g., not a repo).
    """
    result = run_git(["status", "--porcelain", "-z"], project_dir)
    if not result.success or not result.stdout:
        return []

    files = []
    # -z format: "XY filename\0" or "XY new\0old\0" for renames
    entries = result.stdout.split('\0')
    i = 0
    while i < len(entries):
        entry = entries[i]
        if len(entry) < 4:
            i += 1
            continue

        status, filename = entry[:2], entry[3:]
        files.append(filename)
        # Renames and copies carry the source path as an extra entry
        i += 2 if status[0] in ('R', 'C') else 1

    return files


def get_head_sha(project_dir: Path) -> str | None:
    """Return HEAD commit sha, or None before the first commit."""
    result = run_git(["rev-parse", "HEAD"], project_dir)
    if not result.success:
        return None
    return result.stdout.strip() or None
