"""
ralph add-feature - Generate stories for new features of an existing app and
append them to its prd.json.
"""

import logging
from pathlib import Path
from typing import Optional

from ralph import git
from ralph.builder.features import generate_new_stories
from ralph.builder.publish import commit_and_push
from ralph.builder.scaffold import validate_project_name
from ralph.commands.loop import offer_loop
from ralph.lib.agents_config import AgentsConfig, load_agents_config
from ralph.lib.config import ConfigError, load_builder_config, load_loop_settings
from ralph.lib.constants import EXIT_INVALID_INPUT, EXIT_MISSING_INPUT, EXIT_OK, TASK_LIST_FILENAME
from ralph.lib.interactive import prompt
from ralph.tasks.store import TaskListError, TaskListNotFound, append_items, load_task_list

logger = logging.getLogger(__name__)


def add_feature(project_dir: Path, description: Optional[str], agents_config: AgentsConfig) -> int:
    """Feature-add flow for an existing checkout. Returns the exit code."""
    print(f"\nFeature-add mode for: {project_dir.name}")

    try:
        settings = load_loop_settings(project_dir)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return EXIT_INVALID_INPUT

    logger.info("Pulling latest changes...")
    pulled = git.pull_rebase(project_dir, settings.remote, settings.branch)
    if not pulled.success:
        logger.warning("Could not pull - continuing with local state")

    task_list_path = project_dir / TASK_LIST_FILENAME
    try:
        task_list = load_task_list(task_list_path)
    except TaskListNotFound:
        print(f"ERROR: No {TASK_LIST_FILENAME} found in project. Cannot add features.")
        return EXIT_MISSING_INPUT
    except TaskListError as e:
        print(f"ERROR: {e}")
        return EXIT_INVALID_INPUT

    print(f"\nExisting PRD: {task_list.title}")
    print(f"Current stories: {len(task_list.items)}")

    description = description or prompt("\nDescribe the new features to add")
    if not description:
        print("ERROR: A feature description is required")
        return EXIT_INVALID_INPUT

    stories = generate_new_stories(task_list, description, project_dir, agents_config)
    if not stories:
        print("No new stories generated. Exiting.")
        return EXIT_OK

    try:
        appended = append_items(task_list_path, stories)
    except TaskListError as e:
        print(f"ERROR: {e}")
        return EXIT_INVALID_INPUT

    print(f"\nUpdated {TASK_LIST_FILENAME} with {len(appended)} new stories")
    for item in appended:
        print(f"  #{item.id} {item.title}")

    commit_and_push(
        project_dir,
        f"feat: Added {len(appended)} new feature stories to PRD",
        [TASK_LIST_FILENAME],
        settings.remote,
        settings.branch,
    )

    return offer_loop(project_dir)


def cmd_add_feature(args, root_dir: Path) -> int:
    try:
        config = load_builder_config(root_dir)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return EXIT_INVALID_INPUT

    error = validate_project_name(args.name)
    if error:
        print(f"ERROR: Invalid project name '{args.name}': {error}")
        return EXIT_INVALID_INPUT

    project_dir = config.apps_dir / args.name
    if not project_dir.is_dir():
        print(f"ERROR: Project not found: {project_dir}")
        return EXIT_MISSING_INPUT

    return add_feature(project_dir, args.description, load_agents_config(root_dir))
