"""Shared constants for ralph."""

import re

# Task list documents, relative to the project directory
TASK_LIST_FILENAME = "prd.json"
PRD_MARKDOWN_FILENAME = "prd.md"

# Loop bounds
MAX_ITERATIONS = 50
AGENT_TIMEOUT = 1800  # seconds per story
ITERATION_DELAY = 2  # seconds between iterations (throttle only)

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"

# Project names passed to scaffolders and GitHub
PROJECT_NAME_PATTERN = re.compile(r'^[a-z0-9-]+$')

FRAMEWORK_ANGULAR = "Angular"
FRAMEWORK_IONIC = "Angular/Ionic"
FRAMEWORKS = (FRAMEWORK_ANGULAR, FRAMEWORK_IONIC)

# CLI exit codes
EXIT_OK = 0
EXIT_MISSING_INPUT = 1
EXIT_INVALID_INPUT = 2
EXIT_LOCKED = 3
EXIT_SETUP_FAILED = 1
