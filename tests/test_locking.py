"""Tests for ralph.lib.locking."""

import pytest

from ralph.lib.locking import LockHeld, get_lock_path, project_lock


class TestGetLockPath:

    def test_inside_git_dir(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert get_lock_path(tmp_path) == tmp_path / ".git" / "ralph.lock"

    def test_outside_git(self, tmp_path):
        assert get_lock_path(tmp_path) == tmp_path / ".ralph.lock"


class TestProjectLock:

    def test_writes_pid(self, tmp_path):
        with project_lock(tmp_path) as lock_file:
            assert lock_file.read_text().strip().isdigit()

    def test_second_holder_refused(self, tmp_path):
        with project_lock(tmp_path):
            with pytest.raises(LockHeld, match="Another ralph loop"):
                with project_lock(tmp_path):
                    pass

    def test_released_on_exit(self, tmp_path):
        with project_lock(tmp_path):
            pass
        with project_lock(tmp_path):
            pass

    def test_released_on_exception(self, tmp_path):
        with pytest.raises(RuntimeError):
            with project_lock(tmp_path):
                raise RuntimeError("boom")
        with project_lock(tmp_path):
            pass
