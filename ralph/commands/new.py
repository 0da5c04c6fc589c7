"""
ralph new - Create a new app: GitHub repo, scaffold, Firebase project, PRD.

Creates (in apps/<name>):
- Framework scaffold (Angular or Angular/Ionic), pushed as "Initial scaffold"
- Firebase placeholders (.firebaserc, firebase.json, firestore.*)
- prd.md and prd.json, pushed as "Added PRD + Firebase placeholders"
"""

import logging
from pathlib import Path

from ralph.builder.firebase import create_firebase_project, write_placeholders
from ralph.builder.github import create_repo
from ralph.builder.prd import generate_prd
from ralph.builder.publish import init_commit_and_push
from ralph.builder.scaffold import ScaffoldError, project_exists, scaffold_project, validate_project_name
from ralph.commands.add_feature import add_feature
from ralph.commands.loop import offer_loop
from ralph.lib.agents_config import load_agents_config
from ralph.lib.config import ConfigError, load_builder_config
from ralph.lib.constants import EXIT_INVALID_INPUT, EXIT_OK, EXIT_SETUP_FAILED, FRAMEWORKS
from ralph.lib.interactive import prompt, prompt_bool, prompt_choice

logger = logging.getLogger(__name__)


def cmd_new(args, root_dir: Path) -> int:
    """Create a new project."""
    try:
        config = load_builder_config(root_dir)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return EXIT_INVALID_INPUT
    agents_config = load_agents_config(root_dir)

    framework = args.framework or prompt_choice("Select framework:", list(FRAMEWORKS))
    if framework not in FRAMEWORKS:
        print(f"ERROR: Unknown framework '{framework}'")
        print(f"  Must be one of: {', '.join(FRAMEWORKS)}")
        return EXIT_INVALID_INPUT

    name = args.name or prompt("Project name (kebab-case)")
    error = validate_project_name(name)
    if error:
        print(f"ERROR: Invalid project name '{name}': {error}")
        return EXIT_INVALID_INPUT

    if project_exists(config.apps_dir, name):
        print(f"\nProject apps/{name} already exists.")
        if prompt_bool("Add new features to it instead?", default=True):
            return add_feature(config.apps_dir / name, args.description, agents_config)
        print("Cancelled")
        return EXIT_OK

    description = args.description or prompt("Describe the app")
    if not description:
        print("ERROR: A description is required")
        return EXIT_INVALID_INPUT

    try:
        repo_url = create_repo(name, description, config)
        project_dir = scaffold_project(framework, name, config.apps_dir)
        init_commit_and_push(project_dir, name, config, "Initial scaffold")

        firebase_project_id = create_firebase_project(name, project_dir)
        write_placeholders(project_dir, name, firebase_project_id)
    except ScaffoldError as e:
        print(f"ERROR: {e}")
        return EXIT_SETUP_FAILED

    task_list = generate_prd(project_dir, description, framework, firebase_project_id, agents_config)
    init_commit_and_push(project_dir, name, config, "Added PRD + Firebase placeholders")

    print("\nProject setup complete!")
    print(f"  Repo: {repo_url}")
    print(f"  Path: {project_dir}")
    print(f"  Firebase: {firebase_project_id}")

    if task_list is None:
        print("\nNo PRD was generated. Write prd.json, then run: ralph loop")
        return EXIT_OK

    print(f"\nPRD: {task_list.title}")
    print(f"Stories: {len(task_list.items)}")
    return offer_loop(project_dir)
