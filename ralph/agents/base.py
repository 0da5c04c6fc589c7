"""
Agent interface.

The loop only ever talks to an agent through invoke(); anything with that
method (the Claude CLI wrapper, a scripted fake in tests) can drive stories.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol


@dataclass
class AgentResult:
    success: bool
    exit_code: int
    duration: float = 0.0
    timed_out: bool = False
    error: Optional[str] = None  # Transport problem (missing binary, OSError, timeout)

    def describe(self) -> str:
        """Short failure description for logs."""
        if self.success:
            return "ok"
        if self.timed_out:
            return f"timed out after {self.duration:.0f}s"
        if self.error:
            return self.error
        return f"exit code {self.exit_code}"


class Agent(Protocol):
    def invoke(self, payload: str, cwd: Path, timeout: int) -> AgentResult:
        """Run the agent synchronously in cwd, bounded by timeout seconds."""
        ...
