"""
Project scaffolding for ralph new.

Runs the framework CLI (Angular or Ionic, via npx) inside the apps directory.
Scaffolder output streams to the terminal; only the exit code is checked.
"""

import logging
import subprocess
from pathlib import Path

from ralph.lib.constants import FRAMEWORK_ANGULAR, FRAMEWORK_IONIC, FRAMEWORKS, PROJECT_NAME_PATTERN

logger = logging.getLogger(__name__)

SCAFFOLD_TIMEOUT_SECONDS = 900


class ScaffoldError(Exception):
    """An external setup command (gh, npx, firebase, git) failed."""
    pass


def validate_project_name(name: str) -> str | None:
    """Return an error message, or None if the name is usable."""
    if not name:
        return "Project name is required"
    if not PROJECT_NAME_PATTERN.match(name):
        return "Use lowercase letters, numbers and hyphens only (kebab-case)"
    return None


def project_exists(apps_dir: Path, name: str) -> bool:
    """True when apps/<name> is already a git checkout."""
    return (apps_dir / name / ".git").exists()


def scaffold_command(framework: str, name: str) -> list[str]:
    if framework == FRAMEWORK_IONIC:
        return ["npx", "ionic", "start", name, "blank", "--type=angular", "--capacitor",
                "--no-interactive", "--no-git"]
    if framework == FRAMEWORK_ANGULAR:
        return ["npx", "ng", "new", name, "--style=scss", "--routing", "--skip-git",
                "--defaults", "--no-interactive"]
    raise ValueError(f"Unknown framework '{framework}' (expected one of {', '.join(FRAMEWORKS)})")


def scaffold_project(framework: str, name: str, apps_dir: Path) -> Path:
    """
    Generate a new app at apps_dir/name and return its path.

    Raises:
        ScaffoldError: if the folder already exists or the scaffolder fails
    """
    apps_dir.mkdir(parents=True, exist_ok=True)
    project_dir = apps_dir / name
    if project_dir.exists():
        raise ScaffoldError(f"Folder already exists: {project_dir}")

    cmd = scaffold_command(framework, name)
    logger.info(f"Scaffolding {framework} app: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, cwd=str(apps_dir), timeout=SCAFFOLD_TIMEOUT_SECONDS)
    except subprocess.TimeoutExpired:
        raise ScaffoldError(f"Scaffolding timed out after {SCAFFOLD_TIMEOUT_SECONDS}s") from None
    except FileNotFoundError:
        raise ScaffoldError("npx not found. Install Node.js: https://nodejs.org") from None

    if result.returncode != 0:
        raise ScaffoldError(f"Scaffolding failed (exit {result.returncode})")

    return project_dir
