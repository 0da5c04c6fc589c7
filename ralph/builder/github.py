"""
GitHub repository creation via the gh CLI.

The personal access token from .env is handed to gh through GH_TOKEN, so no
prior `gh auth login` is needed.
"""

import logging
import os
import subprocess

from ralph.builder.scaffold import ScaffoldError
from ralph.lib.config import BuilderConfig

logger = logging.getLogger(__name__)

GH_TIMEOUT_SECONDS = 60


def repo_description(description: str) -> str:
    return f"AI-generated: {description}"


def create_repo(name: str, description: str, config: BuilderConfig) -> str:
    """
    Create a public repository and return its clean clone URL.

    Raises:
        ScaffoldError: if gh is missing or the API call fails
    """
    cmd = [
        "gh", "repo", "create", name,
        "--public",
        "--description", repo_description(description),
    ]
    env = {**os.environ, "GH_TOKEN": config.github_pat}

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, env=env, timeout=GH_TIMEOUT_SECONDS)
    except subprocess.TimeoutExpired:
        raise ScaffoldError(f"gh repo create timed out after {GH_TIMEOUT_SECONDS}s") from None
    except FileNotFoundError:
        raise ScaffoldError("gh CLI not found. Install: https://cli.github.com") from None

    if result.returncode != 0:
        error = result.stderr.strip() or result.stdout.strip()
        raise ScaffoldError(f"Failed to create GitHub repo '{name}': {error}")

    url = config.repo_url(name)
    logger.info(f"Repo created: {url}")
    return url
