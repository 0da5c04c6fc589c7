"""Shared fixtures: a real temporary git project with a prd.json."""

import json
import shutil
import subprocess

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def git(project_dir, *args) -> str:
    result = subprocess.run(
        ["git", "-C", str(project_dir)] + list(args),
        capture_output=True, text=True, check=True,
    )
    return result.stdout


def make_prd(count: int, passed: tuple = ()) -> dict:
    return {
        "title": "Shop",
        "overview": "Sell things",
        "techStack": {"framework": "Angular"},
        "userStories": [
            {
                "id": i,
                "title": f"Story {i}",
                "description": f"As a user, I want feature {i}",
                "acceptance": [f"criterion {i}a", f"criterion {i}b"],
                "passes": i in passed,
            }
            for i in range(1, count + 1)
        ],
    }


def write_prd(project_dir, document: dict) -> None:
    (project_dir / "prd.json").write_text(json.dumps(document, indent=2) + "\n")


def read_prd(project_dir) -> dict:
    return json.loads((project_dir / "prd.json").read_text())


def commit_subjects(project_dir) -> list[str]:
    """Commit subjects, oldest first."""
    return git(project_dir, "log", "--reverse", "--format=%s").splitlines()


@pytest.fixture
def git_project(tmp_path):
    """Factory: a committed git repo holding prd.json with `count` stories."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    def _make(count: int = 2, passed: tuple = ()):
        project_dir = tmp_path / "app"
        project_dir.mkdir()
        git(project_dir, "init", "-q")
        git(project_dir, "config", "user.name", "Test")
        git(project_dir, "config", "user.email", "test@example.com")
        git(project_dir, "config", "commit.gpgsign", "false")
        (project_dir / "README.md").write_text("# app\n")
        write_prd(project_dir, make_prd(count, passed))
        git(project_dir, "add", "-A")
        git(project_dir, "commit", "-q", "-m", "Initial scaffold")
        return project_dir

    return _make
