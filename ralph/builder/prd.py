"""
PRD generation for new projects.

Two agent passes: a Markdown PRD (saved as prd.md, read by the loop as
context) and its conversion to the prd.json task list. Generation is best
effort: any failure is logged and the project is set up without a PRD.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from ralph.agents.claude import generate
from ralph.lib.agents_config import AgentsConfig
from ralph.lib.constants import FRAMEWORK_IONIC, PRD_MARKDOWN_FILENAME, TASK_LIST_FILENAME
from ralph.lib.prompts import PromptError, render_prompt
from ralph.lib.validate import ValidationError, validate
from ralph.tasks.models import ITEMS_KEYS, TaskList
from ralph.tasks.store import TaskListError, save_task_list

logger = logging.getLogger(__name__)

PRD_MARKDOWN_TIMEOUT = 120
PRD_JSON_TIMEOUT = 90

TECH_STACKS = {
    FRAMEWORK_IONIC: "Angular with Ionic, Capacitor for mobile, TailwindCSS, Firebase",
}
DEFAULT_TECH_STACK = "Angular, PrimeNG components, TailwindCSS, Firebase"

UI_LIBRARIES = {
    FRAMEWORK_IONIC: "Ionic",
}
DEFAULT_UI_LIBRARY = "PrimeNG"

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


class GenerationError(Exception):
    """Agent output could not be turned into a usable document."""
    pass


def extract_json(text: str) -> Any:
    """Parse JSON from an agent response, preferring a fenced block if present.

    Raises:
        GenerationError: if no valid JSON is found
    """
    json_str = text.strip()
    match = _FENCE_PATTERN.search(json_str)
    if match:
        json_str = match.group(1).strip()

    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        raise GenerationError(f"Agent did not return valid JSON: {e}") from None


def normalize_prd(document: Any) -> TaskList:
    """Validate a generated task list and reset its progress.

    Every story starts failing and ids run 1..n in document order, whatever
    the agent produced.

    Raises:
        GenerationError: if the document fails the schema
    """
    if isinstance(document, dict):
        for key in ITEMS_KEYS:
            stories = document.get(key)
            if not isinstance(stories, list):
                continue
            for index, raw in enumerate(stories, start=1):
                if isinstance(raw, dict):
                    raw["id"] = index
                    raw["passes"] = False

    try:
        validate(document, "prd")
    except ValidationError as e:
        raise GenerationError(f"Generated PRD is invalid: {e}") from None

    return TaskList(document)


def _generate(config: AgentsConfig, stage: str, prompt: str, cwd: Path, timeout: int) -> str:
    ok, text = generate(config, stage, prompt, cwd, timeout=timeout)
    if not ok:
        raise GenerationError(text)
    return text


def generate_prd(
    project_dir: Path,
    description: str,
    framework: str,
    firebase_project_id: str,
    config: Optional[AgentsConfig] = None,
) -> Optional[TaskList]:
    """
    Write prd.md and prd.json into project_dir.

    Returns the generated TaskList, or None if generation failed (prd.md may
    still have been written).
    """
    config = config or AgentsConfig()
    logger.info("Generating PRD...")

    try:
        markdown = _generate(
            config, "prd_markdown",
            render_prompt(
                "prd_markdown",
                description=description,
                framework=framework,
                tech_stack=TECH_STACKS.get(framework, DEFAULT_TECH_STACK),
                firebase_project_id=firebase_project_id,
            ),
            project_dir, PRD_MARKDOWN_TIMEOUT,
        )
        (project_dir / PRD_MARKDOWN_FILENAME).write_text(markdown + "\n")
        logger.info(f"{PRD_MARKDOWN_FILENAME} created")

        response = _generate(
            config, "prd_json",
            render_prompt(
                "prd_json",
                prd_markdown=markdown,
                framework=framework,
                ui_library=UI_LIBRARIES.get(framework, DEFAULT_UI_LIBRARY),
                firebase_project_id=firebase_project_id,
            ),
            project_dir, PRD_JSON_TIMEOUT,
        )
        task_list = normalize_prd(extract_json(response))
        save_task_list(project_dir / TASK_LIST_FILENAME, task_list)
    except (GenerationError, PromptError, TaskListError, ValueError) as e:
        logger.error(f"PRD generation failed: {e}")
        return None

    logger.info(f"{TASK_LIST_FILENAME} created with {len(task_list.items)} stories")
    return task_list
