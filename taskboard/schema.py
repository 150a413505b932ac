"""
TASKBOARD - Schema Definition
=============================
Task records, board limits and the default workflow stages for the
in-memory Kanban board.
"""

import os
from enum import Enum
from typing import Optional, List, Tuple
from pydantic import BaseModel, Field


# Initial stage: tasks are created here and leave it exactly once.
STAGE_TODO = "TO DO"
STAGE_IN_PROGRESS = "IN PROGRESS"
STAGE_DONE = "DONE"

DEFAULT_STAGES: Tuple[str, ...] = (STAGE_TODO, STAGE_IN_PROGRESS, STAGE_DONE)

ENV_PREFIX = "TASKBOARD"


class SortKey(str, Enum):
    """Orderings available through the board's secondary indices"""
    DESCRIPTION = "description"   # All tasks, by description text
    START_TIME = "start_time"     # Started tasks, by start time then activation order


class Task(BaseModel):
    """Individual task record"""
    id: int = Field(ge=1)
    description: str
    user: Optional[str] = None          # Owner, set on every move
    stage: str = STAGE_TODO
    duration: int = Field(gt=0)         # Expected duration in clock units

    # Set once, when the task first leaves the initial stage
    start: Optional[int] = None


class MoveReport(BaseModel):
    """Outcome of moving a task to a stage"""
    task_id: int
    stage: str
    started_now: bool = False   # True when this move stamped the start time
    elapsed: int = 0            # now - start
    slack: int = 0              # elapsed - expected duration


class BoardLimits(BaseModel):
    """Capacity and length limits enforced by the command layer"""
    max_tasks: int = Field(default=10000, gt=0)
    max_description_length: int = Field(default=50, gt=0)
    max_users: int = Field(default=50, gt=0)
    max_user_length: int = Field(default=20, gt=0)
    max_activities: int = Field(default=10, gt=0)
    max_activity_length: int = Field(default=20, gt=0)

    @classmethod
    def from_env(cls, **overrides: Optional[int]) -> "BoardLimits":
        """Build limits from TASKBOARD_* environment variables.

        Explicit keyword overrides win over the environment; ``None``
        overrides are ignored so argparse defaults can be passed straight in.
        """
        values = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{ENV_PREFIX}_{name.upper()}")
            if raw is None or raw.strip() == "":
                continue
            try:
                values[name] = int(raw)
            except ValueError:
                continue
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class BoardSnapshot(BaseModel):
    """Full board state, used for JSON dumps"""
    now: int = 0
    tasks: List[Task] = Field(default_factory=list)
