"""
Agent command configuration.

Loads agents.yaml to determine which CLI command runs for each stage.
If no config file exists, returns defaults that drive the Claude CLI.

STAGE COMMAND TEMPLATES
=======================

Each stage maps to a CLI command template. Templates support variable
substitution using {variable_name} syntax.

- {prompt}: The prompt text. If present in template, passed as a CLI arg.
  If absent, the prompt is passed via stdin.

Example agents.yaml (in the project directory, or the builder root for
setup stages):

    stages:
      implement: claude -p {prompt} --model opus --allowedTools Read,Write,Edit,Bash
      prd_json: claude -p {prompt} --model haiku
"""

import logging
import re
import shlex
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

AGENTS_CONFIG_FILENAME = "agents.yaml"

IMPLEMENT_TOOLS = "Read,Write,Edit,Bash,Glob,Grep"

DEFAULT_STAGE_COMMANDS = {
    # Story loop: the agent edits the project tree in place
    "implement": f"claude -p {{prompt}} --allowedTools {IMPLEMENT_TOOLS}",

    # Project setup: text-only generations, output captured from stdout
    "prd_markdown": "claude -p {prompt}",
    "prd_json": "claude -p {prompt}",
    "feature_stories": "claude -p {prompt}",
}

_PROMPT_PLACEHOLDER = "__PROMPT_PLACEHOLDER__"


@dataclass
class AgentsConfig:
    """Agent configuration from agents.yaml."""
    stages: dict[str, str] = field(default_factory=lambda: DEFAULT_STAGE_COMMANDS.copy())


def load_agents_config(config_dir: Optional[Path]) -> AgentsConfig:
    """Load agents.yaml from config_dir and return AgentsConfig.

    If config_dir is None, the file is missing, or it fails to parse,
    returns defaults.
    """
    if config_dir is None:
        return AgentsConfig()

    config_path = config_dir / AGENTS_CONFIG_FILENAME
    if not config_path.exists():
        return AgentsConfig()

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse {config_path}: {e}")
        return AgentsConfig()

    stages = DEFAULT_STAGE_COMMANDS.copy()
    if isinstance(data, dict) and isinstance(data.get("stages"), dict):
        for stage, template in data["stages"].items():
            if not isinstance(template, str) or not template.strip():
                logger.warning(f"Ignoring empty command for stage '{stage}' in {config_path}")
                continue
            stages[stage] = template
    elif data:
        logger.warning(f"{config_path} has no 'stages' mapping; using defaults")

    return AgentsConfig(stages=stages)


@dataclass
class StageCommand:
    """Result of building a stage command."""
    cmd: list[str]  # Command ready for subprocess
    prompt_via_stdin: bool  # True if prompt should be passed via stdin

    def get_stdin_input(self, prompt: str) -> str | None:
        """Return prompt if it should be passed via stdin, else None."""
        return prompt if self.prompt_via_stdin else None


def get_stage_command(
    config: AgentsConfig,
    stage: str,
    prompt: str,
) -> StageCommand:
    """Build the command list for a stage.

    Raises:
        ValueError: If stage is unknown or the template has unknown variables.

    Example:
        >>> result = get_stage_command(AgentsConfig(), "prd_json", "convert this")
        >>> result.cmd
        ['claude', '-p', 'convert this']
    """
    if stage not in config.stages:
        raise ValueError(f"Unknown stage: {stage}")

    cmd_template = config.stages[stage]
    prompt_via_stdin = "{prompt}" not in cmd_template

    # The prompt is swapped in after shlex parsing so quotes in it survive
    cmd_template = cmd_template.replace("{prompt}", _PROMPT_PLACEHOLDER)

    remaining_vars = re.findall(r'\{(\w+)\}', cmd_template)
    if remaining_vars:
        raise ValueError(
            f"Stage '{stage}' has unsupported variables {remaining_vars} "
            f"in template: {config.stages[stage]}"
        )

    cmd = [prompt if arg == _PROMPT_PLACEHOLDER else arg for arg in shlex.split(cmd_template)]

    return StageCommand(cmd=cmd, prompt_via_stdin=prompt_via_stdin)


def get_stage_binary(config: AgentsConfig, stage: str) -> str:
    """Get the binary name for a stage (first element of command)."""
    if stage not in config.stages:
        raise ValueError(f"Unknown stage: {stage}")

    parts = shlex.split(config.stages[stage])
    return parts[0] if parts else ""


def check_binary_available(binary: str) -> bool:
    """Check if a binary is available in PATH."""
    return shutil.which(binary) is not None
