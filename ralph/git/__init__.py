"""Git operations for ralph.

Every function takes the project directory explicitly; nothing here changes
the process working directory.

Return type conventions:
- Functions returning GitResult: Caller must check .success before using output.
  Examples: stage_all(), commit(), push(), pull_rebase()
- Functions returning bool: True on success/condition met, False otherwise.
  Examples: has_uncommitted_changes(), is_git_repo(), has_remote()
- Functions returning parsed values (str, list): Return empty/None on failure.
  Examples: get_changed_files() -> [], get_head_sha() -> None
"""

from ralph.git.runner import GitResult, run_git
from ralph.git.status import (
    is_git_repo,
    has_uncommitted_changes,
    get_changed_files,
    get_head_sha,
)
from ralph.git.commit import (
    stage_files,
    stage_all,
    commit,
    commit_paths,
    is_nothing_to_commit,
)
from ralph.git.remote import (
    has_remote,
    add_remote,
    set_remote_url,
    push,
    push_set_upstream,
    pull_rebase,
)
from ralph.git.repo import (
    init_repo,
    rename_branch,
)

__all__ = [
    "GitResult",
    "run_git",
    # status
    "is_git_repo",
    "has_uncommitted_changes",
    "get_changed_files",
    "get_head_sha",
    # commit
    "stage_files",
    "stage_all",
    "commit",
    "commit_paths",
    "is_nothing_to_commit",
    # remote
    "has_remote",
    "add_remote",
    "set_remote_url",
    "push",
    "push_set_upstream",
    "pull_rebase",
    # repo
    "init_repo",
    "rename_branch",
]
