"""Instruction payload sent to the agent for one story."""

import logging
from pathlib import Path

from ralph.lib.constants import PRD_MARKDOWN_FILENAME
from ralph.lib.prompts import build_section, render_prompt
from ralph.tasks.models import TaskItem, TaskList

logger = logging.getLogger(__name__)


def read_prd_markdown(project_dir: Path) -> str | None:
    """Human-readable PRD, if the project has one."""
    path = project_dir / PRD_MARKDOWN_FILENAME
    if not path.exists():
        return None
    try:
        return path.read_text().strip() or None
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return None


def build_story_payload(task_list: TaskList, item: TaskItem, prd_markdown: str | None) -> str:
    criteria = "\n".join(f"  - {c}" for c in item.acceptance_criteria) or "  - (none listed)"
    return render_prompt(
        "implement_story",
        project_title=task_list.title,
        project_overview=task_list.overview,
        story_id=item.id,
        story_title=item.title,
        story_description=item.description,
        acceptance_criteria=criteria,
        prd_section=build_section(prd_markdown, "FULL PRD FOR REFERENCE:"),
    )
