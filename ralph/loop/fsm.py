"""Loop state machine using transitions library.

One pass through the machine is one iteration:

    selecting -> invoking -> committing -> recording -> selecting

A failed invocation goes straight back to selecting (same story, iteration
consumed). The machine ends in done (no incomplete stories) or aborted
(iteration cap reached).

Usage:
    from ralph.loop.fsm import LoopFSM

    fsm = LoopFSM()
    fsm.select_item()           # selecting -> invoking
    fsm.invocation_succeeded()  # invoking -> committing
"""

import logging
from typing import Callable

from transitions import Machine

logger = logging.getLogger(__name__)

SELECTING = "selecting"
INVOKING = "invoking"
COMMITTING = "committing"
RECORDING = "recording"
DONE = "done"
ABORTED = "aborted"

STATES = [SELECTING, INVOKING, COMMITTING, RECORDING, DONE, ABORTED]
TERMINAL_STATES = (DONE, ABORTED)

# Each trigger becomes a method on the FSM
TRANSITIONS = [
    {"trigger": "select_item", "source": SELECTING, "dest": INVOKING},
    {"trigger": "finish", "source": SELECTING, "dest": DONE},
    {"trigger": "abort", "source": SELECTING, "dest": ABORTED},
    # Task list could not be read this pass; try again next iteration
    {"trigger": "selection_failed", "source": SELECTING, "dest": SELECTING},

    {"trigger": "invocation_failed", "source": INVOKING, "dest": SELECTING},
    {"trigger": "invocation_succeeded", "source": INVOKING, "dest": COMMITTING},

    {"trigger": "changes_committed", "source": COMMITTING, "dest": RECORDING},
    {"trigger": "progress_recorded", "source": RECORDING, "dest": SELECTING},
]


class LoopFSM:
    """State machine for one run of the story loop.

    Not persisted: on restart the loop begins in selecting and prd.json
    decides what happens next.
    """

    def __init__(self, on_transition: Callable[[str, str, str], None] | None = None):
        """
        Args:
            on_transition: Optional callback(from_state, to_state, trigger) called after transitions
        """
        self.on_transition = on_transition
        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial=SELECTING,
            auto_transitions=False,
            send_event=True,
            after_state_change="on_state_change",
        )

    def on_state_change(self, event) -> None:
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name

        logger.debug(f"[FSM] {from_state} -> {to_state} ({trigger})")

        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def can(self, trigger: str) -> bool:
        """Check if a trigger can be executed in current state."""
        return trigger in self.machine.get_triggers(self.state)

    def get_available_triggers(self) -> list[str]:
        return self.machine.get_triggers(self.state)
