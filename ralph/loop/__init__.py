"""The story loop: select, invoke, commit, record, repeat."""

from ralph.loop.controller import IterationRecord, LoopController, LoopSummary
from ralph.loop.fsm import LoopFSM

__all__ = ["IterationRecord", "LoopController", "LoopSummary", "LoopFSM"]
