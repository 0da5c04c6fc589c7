"""
Feature-add: generate new stories for an existing project and append them
to its task list.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ralph.agents.claude import generate
from ralph.builder.prd import GenerationError, extract_json
from ralph.lib.agents_config import AgentsConfig
from ralph.lib.prompts import PromptError, render_prompt
from ralph.lib.validate import ValidationError, validate
from ralph.tasks.models import ACCEPTANCE_KEYS, TaskItem, TaskList

logger = logging.getLogger(__name__)

FEATURE_STORIES_TIMEOUT = 90


def parse_stories(data) -> list[TaskItem]:
    """Turn the agent's story array into TaskItems. Ids are assigned on append.

    Raises:
        GenerationError: if the array fails the schema
    """
    try:
        validate(data, "stories")
    except ValidationError as e:
        raise GenerationError(f"Generated stories are invalid: {e}") from None

    stories = []
    for raw in data:
        criteria = next((raw[k] for k in ACCEPTANCE_KEYS if k in raw), [])
        stories.append(TaskItem(
            id=0,
            title=raw["title"],
            description=raw.get("description", ""),
            acceptance_criteria=list(criteria),
        ))
    return stories


def generate_new_stories(
    task_list: TaskList,
    feature_description: str,
    project_dir: Path,
    config: Optional[AgentsConfig] = None,
) -> list[TaskItem]:
    """Ask the agent for 3-6 stories covering the feature. Returns [] on failure."""
    config = config or AgentsConfig()
    logger.info("Generating new user stories...")

    try:
        prompt = render_prompt(
            "feature_stories",
            title=task_list.title,
            overview=task_list.overview,
            tech_stack=json.dumps(task_list.document.get("techStack", {})),
            existing_titles=", ".join(item.title for item in task_list.items),
            feature_description=feature_description,
            next_id=task_list.max_id + 1,
        )
        ok, response = generate(config, "feature_stories", prompt, project_dir,
                                timeout=FEATURE_STORIES_TIMEOUT)
        if not ok:
            raise GenerationError(response)
        stories = parse_stories(extract_json(response))
    except (GenerationError, PromptError, ValueError) as e:
        logger.error(f"Failed to generate new stories: {e}")
        return []

    logger.info(f"Generated {len(stories)} new stories")
    return stories

