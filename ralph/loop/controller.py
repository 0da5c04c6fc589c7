"""
Story loop controller.

Drives LoopFSM through select -> invoke -> commit -> record until every
story passes or the iteration budget runs out. prd.json is re-read at the
start of every iteration, so a restarted loop picks up exactly where the
last durable write left it, and stories appended while the loop runs are
seen on the next pass.

Each phase runs behind run_phase(): an exception inside a phase is logged
and turned into that phase's failure outcome, never raised out of run().
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ralph import git
from ralph.agents.base import Agent, AgentResult
from ralph.lib.config import LoopSettings
from ralph.lib.constants import TASK_LIST_FILENAME
from ralph.loop.committer import CommitOutcome, commit_story_changes
from ralph.loop.fsm import ABORTED, COMMITTING, DONE, INVOKING, RECORDING, SELECTING, LoopFSM
from ralph.loop.payload import build_story_payload, read_prd_markdown
from ralph.loop.recorder import RecordOutcome, record_progress
from ralph.tasks.models import TaskItem, TaskList
from ralph.tasks.selector import count_completed, count_remaining, select_next_item
from ralph.tasks.store import TaskListError, load_task_list

logger = logging.getLogger(__name__)

SEPARATOR = "─" * 48


@dataclass
class IterationRecord:
    """What happened to one story in one iteration. Not persisted."""
    iteration: int
    item_id: Optional[int] = None
    item_title: str = ""
    agent_result: Optional[AgentResult] = None
    commit: Optional[CommitOutcome] = None
    progress: Optional[RecordOutcome] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.progress is not None and self.progress.marked


@dataclass
class LoopSummary:
    state: str  # done or aborted
    iterations: int
    completed: int
    total: int
    remaining: int
    records: list[IterationRecord] = field(default_factory=list)

    @property
    def all_complete(self) -> bool:
        return self.remaining == 0


def run_phase(record: IterationRecord, phase: str, fn: Callable[[], object]):
    """Run one phase, converting an unexpected exception into a logged failure.

    Returns fn()'s value, or None if it raised.
    """
    try:
        return fn()
    except Exception as e:
        logger.exception(f"{phase} failed for story #{record.item_id}: {e}")
        record.error = f"{phase}: {e}"
        return None


class LoopController:
    def __init__(
        self,
        project_dir: Path,
        agent: Agent,
        settings: Optional[LoopSettings] = None,
        task_list_path: Optional[Path] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.project_dir = project_dir.resolve()
        self.agent = agent
        self.settings = settings or LoopSettings()
        self.task_list_path = (task_list_path or self.project_dir / TASK_LIST_FILENAME).resolve()
        self.sleep = sleep

        self.fsm = LoopFSM()
        self.iteration = 0
        self.records: list[IterationRecord] = []
        self.current: Optional[IterationRecord] = None
        self._task_list: Optional[TaskList] = None
        self._item: Optional[TaskItem] = None

    @property
    def state(self) -> str:
        return self.fsm.state

    def run(self) -> LoopSummary:
        """Run until done or aborted.

        Raises:
            TaskListNotFound: if prd.json is missing at start
            TaskListError: if prd.json is invalid at start
        """
        self._task_list = load_task_list(self.task_list_path)

        logger.info("Starting Ralph loop...")
        logger.info(f"Max iterations: {self.settings.max_iterations}")
        if read_prd_markdown(self.project_dir) is None:
            logger.warning("prd.md not found - continuing without it")
        if not git.is_git_repo(self.project_dir):
            logger.warning(f"{self.project_dir} is not a git repository - changes will not be committed")

        steps = {
            SELECTING: self._select,
            INVOKING: self._invoke,
            COMMITTING: self._commit,
            RECORDING: self._record,
        }
        while not self.fsm.is_terminal:
            steps[self.fsm.state]()

        return self._summary()

    # --- states ---

    def _select(self) -> None:
        try:
            task_list = load_task_list(self.task_list_path)
        except TaskListError as e:
            logger.error(f"Could not read task list: {e}")
            if self._budget_exhausted():
                self.fsm.abort()
                return
            self.iteration += 1
            self.records.append(IterationRecord(iteration=self.iteration, error=str(e)))
            self.fsm.selection_failed()
            self._pause()
            return

        self._task_list = task_list
        item = select_next_item(task_list)
        if item is None:
            logger.info("All stories complete! Exiting loop.")
            self.fsm.finish()
            return

        if self._budget_exhausted():
            logger.warning(
                f"Reached max iterations ({self.settings.max_iterations}) "
                f"with {count_remaining(task_list)} stories remaining"
            )
            self.fsm.abort()
            return

        self.iteration += 1
        self._item = item
        self.current = IterationRecord(iteration=self.iteration, item_id=item.id, item_title=item.title)
        self.records.append(self.current)

        logger.info(SEPARATOR)
        logger.info(f"Iteration {self.iteration}: Story #{item.id} - {item.title}")
        logger.info(SEPARATOR)
        self.fsm.select_item()

    def _invoke(self) -> None:
        item = self._item
        logger.info(f"Calling agent to implement story #{item.id}...")

        def invoke() -> AgentResult:
            payload = build_story_payload(self._task_list, item, read_prd_markdown(self.project_dir))
            return self.agent.invoke(payload, self.project_dir, self.settings.agent_timeout)

        result = run_phase(self.current, "invoke", invoke)
        self.current.agent_result = result

        if result is None or not result.success:
            reason = result.describe() if result else self.current.error
            logger.error(f"Agent failed on story #{item.id} ({reason}) - will retry on next iteration")
            self.fsm.invocation_failed()
            self._pause()
            return

        logger.info(f"Agent completed implementation for story #{item.id} ({result.duration:.0f}s)")
        self.fsm.invocation_succeeded()

    def _commit(self) -> None:
        self.current.commit = run_phase(
            self.current, "commit",
            lambda: commit_story_changes(
                self.project_dir, self._item, self.iteration,
                self.settings.remote, self.settings.branch,
            ),
        )
        self.fsm.changes_committed()

    def _record(self) -> None:
        item = self._item
        self.current.progress = run_phase(
            self.current, "record",
            lambda: record_progress(
                self.project_dir, self.task_list_path, item,
                self.settings.remote, self.settings.branch,
            ),
        )
        if self.current.succeeded:
            logger.info(f"Story #{item.id} complete!")
        else:
            logger.error(f"Story #{item.id} could not be marked complete - it will be selected again")
        self.fsm.progress_recorded()
        self._pause()

    # --- helpers ---

    def _budget_exhausted(self) -> bool:
        return self.iteration >= self.settings.max_iterations

    def _pause(self) -> None:
        if self.settings.iteration_delay > 0:
            self.sleep(self.settings.iteration_delay)

    def _summary(self) -> LoopSummary:
        try:
            task_list = load_task_list(self.task_list_path)
        except TaskListError as e:
            logger.warning(f"Could not re-read task list for summary: {e}")
            task_list = self._task_list

        completed = count_completed(task_list)
        total = len(task_list.items)
        summary = LoopSummary(
            state=self.fsm.state,
            iterations=self.iteration,
            completed=completed,
            total=total,
            remaining=total - completed,
            records=list(self.records),
        )

        logger.info(SEPARATOR)
        logger.info("Ralph loop finished!")
        logger.info(f"Total iterations: {summary.iterations}")
        logger.info(f"Stories completed: {summary.completed} / {summary.total}")
        if summary.state == DONE:
            logger.info("All stories implemented successfully!")
        elif summary.state == ABORTED:
            logger.warning("Some stories remain incomplete. Run ralph again to continue.")
        return summary
