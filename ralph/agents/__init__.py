"""Implementation agents the loop can delegate stories to."""

from ralph.agents.base import Agent, AgentResult
from ralph.agents.claude import ClaudeAgent, generate

__all__ = ["Agent", "AgentResult", "ClaudeAgent", "generate"]
