"""
TASKBOARD - In-memory Kanban Task Board
=======================================

Tasks move through named stages ("activities"). Two secondary indices are
kept up to date as tasks are created and started: one by description, one
by start time.

Usage:
    from taskboard import BoardController, SortKey

    board = BoardController()
    board.create_task("write report", duration=3)
    board.activate(1, "alice", "IN PROGRESS")
    board.advance_time(5)

    for task in board.ordered_view(SortKey.START_TIME, stage="IN PROGRESS"):
        print(task.id, task.start, task.description)
"""

from .schema import (
    Task,
    MoveReport,
    BoardLimits,
    BoardSnapshot,
    SortKey,
    DEFAULT_STAGES,
    STAGE_TODO,
    STAGE_IN_PROGRESS,
    STAGE_DONE
)

from .errors import BoardError, NotFound, PreconditionViolated
from .index import OrderedIndex
from .store import TaskStore
from .board import BoardController
from .commands import CommandInterpreter

__version__ = "1.0.0"
__all__ = [
    "BoardController",
    "CommandInterpreter",
    "TaskStore",
    "OrderedIndex",
    "Task",
    "MoveReport",
    "BoardLimits",
    "BoardSnapshot",
    "SortKey",
    "DEFAULT_STAGES",
    "STAGE_TODO",
    "STAGE_IN_PROGRESS",
    "STAGE_DONE",
    "BoardError",
    "NotFound",
    "PreconditionViolated"
]
