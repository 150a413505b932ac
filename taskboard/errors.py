"""Board exceptions: lookup failures and broken controller invariants."""


class BoardError(Exception):
    """Base exception for task board errors."""

    pass


class NotFound(BoardError, LookupError):
    """Raised when a task id does not correspond to an existing task."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"no such task: {task_id}")


class PreconditionViolated(BoardError):
    """Raised when a caller breaks an invariant of the board core.

    These are programming errors (negative clock deltas, a second start
    stamp on the same task) and are never recovered from inside the core.
    """

    pass
