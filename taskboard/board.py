"""
TASKBOARD - Board Controller
============================
Owns the task store, both ordered indices and the board clock.

Lifecycle per task: TO DO -> stage -> stage' -> ...
Only the first move out of TO DO has index effects: the task is stamped
with the current clock and inserted into the start-time index. Later moves
update stage and owner only.
"""

from typing import Any, Dict, List, Optional, Set, Tuple
import logging

from .errors import PreconditionViolated
from .index import OrderedIndex
from .schema import BoardSnapshot, MoveReport, SortKey, Task, STAGE_TODO
from .store import TaskStore

logger = logging.getLogger("taskboard")


class BoardController:
    """
    In-memory Kanban board.

    Indices:
    - by description: every task, strictly increasing description
    - by start time: started tasks, by (start, activation sequence)

    The start-time insertion search is restricted to the window of entries
    added since the last clock advance; older windows all have smaller start
    times and are never compared against.
    """

    def __init__(self, initial_stage: str = STAGE_TODO):
        self.initial_stage = initial_stage
        self.store = TaskStore()
        self._now: int = 0
        self._window_floor: int = 0
        self._started: int = 0
        self._activation_seq: Dict[int, int] = {}
        self._descriptions: Set[str] = set()

        self.by_description = OrderedIndex(self._description_key, name="by_description")
        self.by_start = OrderedIndex(self._start_key, name="by_start")

    # ========================================
    # SORT KEYS
    # ========================================

    def _description_key(self, task_id: int) -> str:
        return self.store.get(task_id).description

    def _start_key(self, task_id: int) -> Tuple[int, int]:
        return (self.store.get(task_id).start, self._activation_seq[task_id])

    # ========================================
    # STATE
    # ========================================

    @property
    def now(self) -> int:
        return self._now

    @property
    def window_floor(self) -> int:
        """Start-index position of the first task started at the current time"""
        return self._window_floor

    @property
    def started_count(self) -> int:
        return self._started

    def __len__(self) -> int:
        return len(self.store)

    def get(self, task_id: int) -> Task:
        return self.store.get(task_id)

    def has_description(self, description: str) -> bool:
        return description in self._descriptions

    # ========================================
    # OPERATIONS
    # ========================================

    def advance_time(self, delta: int) -> int:
        """Advance the clock and open a new stability window"""
        if delta < 0:
            raise PreconditionViolated(f"cannot move the clock back by {delta}")

        self._now += delta
        self._window_floor = self._started
        logger.info(f"⏱️ Clock at {self._now} (window opens at position {self._window_floor})")
        return self._now

    def create_task(self, description: str, duration: int) -> int:
        """Store a new task and index it by description"""
        task_id = self.store.create(description, duration, stage=self.initial_stage)
        self._descriptions.add(description)
        self.by_description.insert_sorted(task_id)

        logger.info(f"🆕 Created task {task_id}: {description}")
        return task_id

    def activate(self, task_id: int, user: Optional[str], stage: str) -> MoveReport:
        """Move a task to ``stage`` under ``user``.

        The first move out of the initial stage stamps the start time and
        indexes the task by start. Raises NotFound for unknown ids.
        """
        task = self.store.get(task_id)
        started_now = (
            task.stage == self.initial_stage
            and stage != self.initial_stage
            and task.start is None
        )

        if started_now:
            self.store.set_start(task_id, self._now)
            self._activation_seq[task_id] = self._started
            self.by_start.insert_sorted(
                task_id, self._window_floor, self._started - 1
            )
            self._started += 1
            logger.info(f"▶️ Started task {task_id} at {self._now}")

        self.store.set_stage_and_owner(task_id, stage, user)

        elapsed = self._now - task.start if task.start is not None else 0
        logger.debug(f"Moved task {task_id} to {stage!r} ({user})")
        return MoveReport(
            task_id=task_id,
            stage=stage,
            started_now=started_now,
            elapsed=elapsed,
            slack=elapsed - task.duration,
        )

    # ========================================
    # QUERIES
    # ========================================

    def _index(self, by: SortKey) -> OrderedIndex:
        if SortKey(by) == SortKey.DESCRIPTION:
            return self.by_description
        return self.by_start

    def ordered_view(self, by: SortKey, stage: Optional[str] = None) -> List[Task]:
        """Tasks in index order, optionally only those currently in ``stage``"""
        records = [self.store.get(task_id) for task_id in self._index(by)]
        if stage is None:
            return records
        return [t for t in records if t.stage == stage]

    def ordered_rows(self, by: SortKey, stage: Optional[str] = None) -> List[Tuple[Any, ...]]:
        """Primitive rows for ``ordered_view``.

        DESCRIPTION rows are (id, stage, duration, description); START_TIME
        rows are (id, start, description).
        """
        if SortKey(by) == SortKey.DESCRIPTION:
            return [
                (t.id, t.stage, t.duration, t.description)
                for t in self.ordered_view(by, stage)
            ]
        return [(t.id, t.start, t.description) for t in self.ordered_view(by, stage)]

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(now=self._now, tasks=[t.model_copy() for t in self.store])
