"""
Agent prompt templates.

Templates live in ralph/prompts/<name>.md and are filled with str.format(),
so literal braces (JSON examples) are written doubled. HTML comments are
notes for maintainers and are removed before anything reaches an agent.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

_COMMENT_RE = re.compile(r'<!--.*?-->\s*', re.DOTALL)


class PromptError(Exception):
    """A template is missing or could not be filled."""
    pass


@lru_cache(maxsize=32)
def load_prompt(name: str) -> str:
    path = PROMPTS_DIR / f"{name}.md"
    try:
        raw = path.read_text()
    except FileNotFoundError:
        raise PromptError(f"Prompt template '{name}' not found (looked for {path})") from None

    logger.debug(f"Loaded prompt template {name}")
    return _COMMENT_RE.sub('', raw).lstrip()


def render_prompt(name: str, **values) -> str:
    """Fill template `name` with values.

    Raises:
        PromptError: if the template is absent or references a value that
            was not supplied
    """
    try:
        return load_prompt(name).format(**values)
    except KeyError as e:
        supplied = ", ".join(sorted(values)) or "nothing"
        raise PromptError(f"Missing required variable {e} in prompt '{name}' (got {supplied})") from None


def build_section(content: str | None, header: str, empty_msg: str | None = None) -> str:
    """Header plus body, the fallback message when there is no body, or ''."""
    body = content or empty_msg
    if body is None or body == "":
        return ""
    return f"{header}\n\n{body}\n"


def clear_cache() -> None:
    load_prompt.cache_clear()
