"""
TASKBOARD - Command Layer
=========================
Interprets the single-letter command stream, validates arguments against
the user/activity registries and board limits, and formats every message.
The board core only ever sees validated values.

Commands:
    q                           quit
    t <duration> <description>  new task
    l [<id> <id> ...]           list tasks
    n <delta>                   advance the clock
    u [<user>]                  add / list users
    m <id> <user> <activity>    move a task
    d <activity>                tasks in an activity
    a [<activity>]              add / list activities
"""

import re
import sys
from typing import Callable, Dict, Iterable, List, Optional, TextIO
import logging

from .board import BoardController
from .schema import (
    BoardLimits, SortKey, DEFAULT_STAGES, STAGE_TODO, STAGE_DONE
)

logger = logging.getLogger("taskboard.commands")

# ============================================================
# OUTPUT MESSAGES
# ============================================================

MSG_NEW_TASK = "task {id}"
MSG_TOO_MANY_TASKS = "too many tasks"
MSG_DUPLICATE_DESCRIPTION = "duplicate description"
MSG_INVALID_DURATION = "invalid duration"

MSG_TASK_ROW = "{id} {stage} #{duration} {description}"
MSG_NO_SUCH_TASK_ID = "{id}: no such task"

MSG_CLOCK = "{now}"
MSG_INVALID_TIME = "invalid time"

MSG_USER_EXISTS = "user already exists"
MSG_TOO_MANY_USERS = "too many users"

MSG_MOVED_TO_DONE = "duration={elapsed} slack={slack}"
MSG_NO_SUCH_TASK = "no such task"
MSG_TASK_ALREADY_STARTED = "task already started"
MSG_NO_SUCH_USER = "no such user"
MSG_NO_SUCH_ACTIVITY = "no such activity"

MSG_ACTIVITY_ROW = "{id} {start} {description}"

MSG_DUPLICATE_ACTIVITY = "duplicate activity"
MSG_INVALID_ACTIVITY = "invalid description"
MSG_TOO_MANY_ACTIVITIES = "too many activities"

# ============================================================
# ARGUMENT PATTERNS
# ============================================================

_NEW_TASK_RE = re.compile(r"\s*(?P<duration>[+-]?\d+)? *(?P<description>.*)")
_MOVE_RE = re.compile(r"\s*(?P<id>[+-]?\d+)\s+(?P<user>\S+) +(?P<activity>.+)")


def _parse_int(token: str) -> Optional[int]:
    try:
        return int(token)
    except ValueError:
        return None


class CommandInterpreter:
    """
    Runs command lines against a board.

    Users and activities live here, not in the board core: they are only
    needed to validate moves. Both keep registration order for listing.
    """

    def __init__(
        self,
        board: Optional[BoardController] = None,
        limits: Optional[BoardLimits] = None,
        out: Optional[TextIO] = None
    ):
        self.board = board if board is not None else BoardController()
        self.limits = limits if limits is not None else BoardLimits()
        self.out = out if out is not None else sys.stdout
        self.users: List[str] = []
        self.activities: List[str] = list(DEFAULT_STAGES)

        self._handlers: Dict[str, Callable[[str, bool], bool]] = {
            "t": self._cmd_new_task,
            "l": self._cmd_list_tasks,
            "n": self._cmd_advance_time,
            "u": self._cmd_users,
            "m": self._cmd_move_task,
            "d": self._cmd_display_activity,
            "a": self._cmd_activities,
        }

    def _emit(self, message: str) -> None:
        print(message, file=self.out)

    # ========================================
    # DISPATCH
    # ========================================

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the stream should stop."""
        line = line.rstrip("\r\n")
        if not line:
            return True

        code = line[0]
        if code == "q":
            return False

        handler = self._handlers.get(code)
        if handler is None:
            logger.debug(f"Ignoring unknown command {code!r}")
            return True

        # The character after the code is a separator; free text starts after it
        has_args = len(line) > 1
        return handler(line[2:], has_args)

    def run(self, lines: Iterable[str]) -> None:
        """Execute lines until quit or end of input"""
        for line in lines:
            if not self.execute(line):
                logger.info("👋 Quit requested")
                return
        logger.info("End of input")

    # ========================================
    # TASKS
    # ========================================

    def _cmd_new_task(self, args: str, has_args: bool) -> bool:
        if not has_args:
            logger.warning("⚠️ t: missing arguments, command ignored")
            return True

        match = _NEW_TASK_RE.match(args)
        raw_duration = match.group("duration")
        description = match.group("description")[:self.limits.max_description_length]

        if not description:
            logger.warning("⚠️ t: missing description, command ignored")
            return True

        if len(self.board) >= self.limits.max_tasks:
            self._emit(MSG_TOO_MANY_TASKS)
        elif self.board.has_description(description):
            self._emit(MSG_DUPLICATE_DESCRIPTION)
        elif raw_duration is None or int(raw_duration) <= 0:
            self._emit(MSG_INVALID_DURATION)
        else:
            task_id = self.board.create_task(description, int(raw_duration))
            self._emit(MSG_NEW_TASK.format(id=task_id))
        return True

    def _print_task(self, task_id: int) -> None:
        task = self.board.get(task_id)
        self._emit(MSG_TASK_ROW.format(
            id=task.id, stage=task.stage,
            duration=task.duration, description=task.description
        ))

    def _cmd_list_tasks(self, args: str, has_args: bool) -> bool:
        if not has_args:
            for task_id, stage, duration, description in self.board.ordered_rows(SortKey.DESCRIPTION):
                self._emit(MSG_TASK_ROW.format(
                    id=task_id, stage=stage, duration=duration, description=description
                ))
            return True

        for token in args.split():
            task_id = _parse_int(token)
            if task_id is None:
                break
            if 1 <= task_id <= len(self.board):
                self._print_task(task_id)
            else:
                self._emit(MSG_NO_SUCH_TASK_ID.format(id=task_id))
        return True

    def _cmd_move_task(self, args: str, has_args: bool) -> bool:
        if not has_args:
            logger.warning("⚠️ m: missing arguments, command ignored")
            return True

        match = _MOVE_RE.match(args)
        if match is None:
            logger.warning(f"⚠️ m: malformed arguments {args!r}, command ignored")
            return True

        task_id = int(match.group("id"))
        user = match.group("user")[:self.limits.max_user_length]
        activity = match.group("activity")[:self.limits.max_activity_length]

        if not 1 <= task_id <= len(self.board):
            self._emit(MSG_NO_SUCH_TASK)
            return True
        if self.board.get(task_id).stage == activity:
            return True
        if activity == STAGE_TODO:
            self._emit(MSG_TASK_ALREADY_STARTED)
        elif user not in self.users:
            self._emit(MSG_NO_SUCH_USER)
        elif activity not in self.activities:
            self._emit(MSG_NO_SUCH_ACTIVITY)
        else:
            report = self.board.activate(task_id, user, activity)
            if activity == STAGE_DONE:
                self._emit(MSG_MOVED_TO_DONE.format(elapsed=report.elapsed, slack=report.slack))
        return True

    # ========================================
    # CLOCK
    # ========================================

    def _cmd_advance_time(self, args: str, has_args: bool) -> bool:
        tokens = args.split() if has_args else []
        delta = _parse_int(tokens[0]) if tokens else None
        if delta is None or delta < 0:
            self._emit(MSG_INVALID_TIME)
            return True

        self._emit(MSG_CLOCK.format(now=self.board.advance_time(delta)))
        return True

    # ========================================
    # USERS
    # ========================================

    def _cmd_users(self, args: str, has_args: bool) -> bool:
        tokens = args.split()
        if not has_args or not tokens:
            for user in self.users:
                self._emit(user)
            return True

        user = tokens[0][:self.limits.max_user_length]
        if user in self.users:
            self._emit(MSG_USER_EXISTS)
        elif len(self.users) >= self.limits.max_users:
            self._emit(MSG_TOO_MANY_USERS)
        else:
            self.users.append(user)
            logger.info(f"👤 Added user {user}")
        return True

    # ========================================
    # ACTIVITIES
    # ========================================

    def _cmd_display_activity(self, args: str, has_args: bool) -> bool:
        if not has_args:
            logger.warning("⚠️ d: missing activity, command ignored")
            return True

        activity = args[:self.limits.max_activity_length]
        if activity not in self.activities:
            self._emit(MSG_NO_SUCH_ACTIVITY)
            return True

        # Unstarted tasks have no start time, so TO DO is listed by description
        by = SortKey.DESCRIPTION if activity == STAGE_TODO else SortKey.START_TIME
        for task in self.board.ordered_view(by, stage=activity):
            self._emit(MSG_ACTIVITY_ROW.format(
                id=task.id, start=task.start or 0, description=task.description
            ))
        return True

    def _cmd_activities(self, args: str, has_args: bool) -> bool:
        if not has_args or not args:
            for activity in self.activities:
                self._emit(activity)
            return True

        activity = args[:self.limits.max_activity_length]
        if activity in self.activities:
            self._emit(MSG_DUPLICATE_ACTIVITY)
        elif any(c.islower() for c in activity):
            self._emit(MSG_INVALID_ACTIVITY)
        elif len(self.activities) >= self.limits.max_activities:
            self._emit(MSG_TOO_MANY_ACTIVITIES)
        else:
            self.activities.append(activity)
            logger.info(f"🗂️ Added activity {activity}")
        return True
