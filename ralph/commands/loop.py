"""
ralph loop - Implement every pending story of the project in the current
directory, one agent run per iteration.
"""

import logging
from pathlib import Path

from ralph.agents.claude import ClaudeAgent
from ralph.lib.agents_config import check_binary_available, get_stage_binary, load_agents_config
from ralph.lib.config import ConfigError, load_loop_settings
from ralph.lib.constants import EXIT_INVALID_INPUT, EXIT_LOCKED, EXIT_MISSING_INPUT, EXIT_OK
from ralph.lib.interactive import prompt_bool
from ralph.lib.locking import LockHeld, project_lock
from ralph.lib.notifications import notify_loop_aborted, notify_loop_done
from ralph.loop.controller import LoopController, LoopSummary
from ralph.loop.fsm import DONE
from ralph.tasks.store import TaskListError, TaskListNotFound

logger = logging.getLogger(__name__)


def run_loop(project_dir: Path) -> int:
    """Run the story loop against project_dir and return the exit code."""
    project_dir = project_dir.resolve()

    try:
        settings = load_loop_settings(project_dir)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return EXIT_INVALID_INPUT

    agents_config = load_agents_config(project_dir)
    binary = get_stage_binary(agents_config, "implement")
    if not check_binary_available(binary):
        print(f"ERROR: '{binary}' not found in PATH (needed for the implement stage)")
        return EXIT_MISSING_INPUT

    controller = LoopController(project_dir, ClaudeAgent(agents_config), settings)

    try:
        with project_lock(project_dir):
            summary = controller.run()
    except LockHeld as e:
        print(f"ERROR: {e}")
        return EXIT_LOCKED
    except TaskListNotFound as e:
        print(f"ERROR: {e}")
        return EXIT_MISSING_INPUT
    except TaskListError as e:
        print(f"ERROR: {e}")
        return EXIT_INVALID_INPUT

    _notify(project_dir.name, summary)
    return EXIT_OK


def _notify(project: str, summary: LoopSummary) -> None:
    if summary.state == DONE:
        notify_loop_done(project, summary.completed, summary.total)
    else:
        notify_loop_aborted(project, summary.remaining)


def cmd_loop(args, project_dir: Path) -> int:
    return run_loop(project_dir)


def offer_loop(project_dir: Path) -> int:
    """Ask whether to start the loop now; print how to run it later if not."""
    if prompt_bool("\nRun Ralph loop now to implement stories?", default=True):
        return run_loop(project_dir)

    print("\nTo implement stories later, run:")
    print(f"  cd {project_dir} && ralph loop")
    return EXIT_OK
