"""
Configuration loaders for ralph.

Loop settings come from an optional ralph.env in the project directory.
Builder settings (GitHub credentials, apps directory) come from .env at the
builder root, with the process environment taking precedence.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from . import constants
from . import envparse

logger = logging.getLogger(__name__)

LOOP_ENV_FILENAME = "ralph.env"
BUILDER_ENV_FILENAME = ".env"


class ConfigError(Exception):
    """Configuration file present but unusable."""
    pass


@dataclass
class LoopSettings:
    """Tunables for the story loop."""
    max_iterations: int = constants.MAX_ITERATIONS
    agent_timeout: int = constants.AGENT_TIMEOUT
    iteration_delay: float = constants.ITERATION_DELAY
    remote: str = constants.DEFAULT_REMOTE
    branch: str = constants.DEFAULT_BRANCH


@dataclass
class BuilderConfig:
    """Settings for project setup and feature-add."""
    github_pat: str
    github_username: str
    apps_dir: Path

    def repo_url(self, project_name: str) -> str:
        return f"https://github.com/{self.github_username}/{project_name}.git"

    def push_url(self, project_name: str) -> str:
        """Clone URL with the token embedded, used only for the duration of a push."""
        return (
            f"https://{self.github_username}:{self.github_pat}"
            f"@github.com/{self.github_username}/{project_name}.git"
        )


def _int_setting(env: dict, key: str, default: int, minimum: int = 0) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got '{raw}'") from None
    if value < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {value}")
    return value


def load_loop_settings(project_dir: Path) -> LoopSettings:
    """Load ralph.env from the project directory, or defaults if absent."""
    path = project_dir / LOOP_ENV_FILENAME
    try:
        env = envparse.load_env_optional(path)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    if env:
        logger.debug(f"Loaded loop settings from {path}")

    return LoopSettings(
        max_iterations=_int_setting(env, "MAX_ITERATIONS", constants.MAX_ITERATIONS, minimum=1),
        agent_timeout=_int_setting(env, "AGENT_TIMEOUT", constants.AGENT_TIMEOUT, minimum=1),
        iteration_delay=_int_setting(env, "ITERATION_DELAY", constants.ITERATION_DELAY),
        remote=env.get("GIT_REMOTE", constants.DEFAULT_REMOTE),
        branch=env.get("GIT_BRANCH", constants.DEFAULT_BRANCH),
    )


def load_builder_config(root_dir: Path) -> BuilderConfig:
    """Load .env from root_dir merged with os.environ.

    Raises:
        ConfigError: if GITHUB_PAT is not set anywhere
    """
    try:
        env = envparse.load_env_optional(root_dir / BUILDER_ENV_FILENAME)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    for key in ("GITHUB_PAT", "GITHUB_USERNAME", "APPS_DIR"):
        if os.environ.get(key):
            env[key] = os.environ[key]

    pat = env.get("GITHUB_PAT", "")
    if not pat:
        raise ConfigError("GITHUB_PAT not set in .env")

    username = env.get("GITHUB_USERNAME", "")
    if not username:
        raise ConfigError("GITHUB_USERNAME not set in .env")

    return BuilderConfig(
        github_pat=pat,
        github_username=username,
        apps_dir=root_dir / env.get("APPS_DIR", "apps"),
    )
