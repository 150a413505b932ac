"""
TASKBOARD - Task Store
======================
Append-only, authoritative collection of task records.

Ids are 1-based and equal to the record's position plus one, so lookup
by id is a single list index. Records are never removed or reordered.
"""

from typing import Iterator, List, Optional
import logging

from .errors import NotFound, PreconditionViolated
from .schema import Task, STAGE_TODO

logger = logging.getLogger("taskboard.store")


class TaskStore:
    """In-memory task records addressed by stable integer id"""

    def __init__(self):
        self._tasks: List[Task] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def create(self, description: str, duration: int, stage: str = STAGE_TODO) -> int:
        """Append a new task in the initial stage and return its id"""
        task = Task(
            id=len(self._tasks) + 1, description=description, duration=duration, stage=stage
        )
        self._tasks.append(task)
        logger.debug(f"Stored task {task.id}: {description!r} (duration={duration})")
        return task.id

    def get(self, task_id: int) -> Task:
        if not 1 <= task_id <= len(self._tasks):
            raise NotFound(task_id)
        return self._tasks[task_id - 1]

    def set_stage_and_owner(self, task_id: int, stage: str, user: Optional[str]) -> Task:
        task = self.get(task_id)
        task.stage = stage
        task.user = user
        return task

    def set_start(self, task_id: int, time: int) -> Task:
        task = self.get(task_id)
        if task.start is not None:
            raise PreconditionViolated(
                f"task {task_id} already started at {task.start}"
            )
        task.start = time
        return task
