"""
Claude agent integration for ralph.

Claude implements stories in the loop (invoke) and produces text for project
setup (generate). Commands come from agents.yaml stage templates.
"""

import logging
import subprocess
import time
from pathlib import Path
from typing import Optional

from ralph.agents.base import AgentResult
from ralph.lib.agents_config import AgentsConfig, get_stage_command

logger = logging.getLogger(__name__)

INSTALL_HINT = "Claude CLI not found. Install: https://claude.ai/claude-code"


class ClaudeAgent:
    def __init__(self, config: Optional[AgentsConfig] = None, stage: str = "implement",
                 log_file: Optional[Path] = None):
        self.config = config or AgentsConfig()
        self.stage = stage
        self.log_file = log_file

    def invoke(self, payload: str, cwd: Path, timeout: int) -> AgentResult:
        """
        Run the agent against the project tree.

        Output streams to the terminal unless a log file was configured.
        The files the agent writes are not inspected here.
        """
        stage_cmd = get_stage_command(self.config, self.stage, payload)
        capture = self.log_file is not None
        start = time.time()

        try:
            result = subprocess.run(
                stage_cmd.cmd,
                cwd=str(cwd),
                input=stage_cmd.get_stdin_input(payload),
                capture_output=capture,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return AgentResult(success=False, exit_code=-1, duration=time.time() - start, timed_out=True)
        except FileNotFoundError:
            return AgentResult(success=False, exit_code=127, duration=time.time() - start, error=INSTALL_HINT)
        except OSError as e:
            return AgentResult(success=False, exit_code=-1, duration=time.time() - start, error=str(e))

        duration = time.time() - start
        if capture:
            self._write_log(stage_cmd.cmd[0], result)

        return AgentResult(
            success=result.returncode == 0,
            exit_code=result.returncode,
            duration=duration,
        )

    def _write_log(self, binary: str, result: subprocess.CompletedProcess) -> None:
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            self.log_file.write_text(
                f"=== COMMAND ===\n{binary} ({self.stage})\n\n"
                f"=== EXIT CODE ===\n{result.returncode}\n\n"
                f"=== STDOUT ===\n{result.stdout}\n\n"
                f"=== STDERR ===\n{result.stderr}\n"
            )
        except OSError as e:
            logger.warning(f"Failed to write agent log {self.log_file}: {e}")


def generate(config: AgentsConfig, stage: str, prompt: str, cwd: Path,
             timeout: int = 120) -> tuple[bool, str]:
    """Run a text-only stage and return (success, response_text).

    On failure the text is an error description instead of a response.
    """
    stage_cmd = get_stage_command(config, stage, prompt)

    try:
        result = subprocess.run(
            stage_cmd.cmd,
            cwd=str(cwd),
            input=stage_cmd.get_stdin_input(prompt),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return False, f"{stage} timed out after {timeout}s"
    except FileNotFoundError:
        return False, INSTALL_HINT

    if result.returncode != 0:
        error_msg = result.stderr.strip() or result.stdout.strip()
        if not error_msg:
            error_msg = "(no output - check 'claude --version' and auth status)"
        return False, f"{stage} failed (exit {result.returncode}): {error_msg}"

    return True, result.stdout.strip()
