#!/usr/bin/env python3
"""
TASKBOARD - CLI Interface
=========================
Feeds a single-letter command stream to an in-memory Kanban board.

Usage:
    taskboard < commands.txt
    taskboard -i commands.txt
    taskboard -i commands.txt --dump
    taskboard --max-tasks 100 --log-level INFO
"""

import argparse
import io
import json
import logging
import sys

from pydantic import ValidationError

from .board import BoardController
from .commands import CommandInterpreter
from .schema import BoardLimits

logger = logging.getLogger("taskboard")


def positive_int(raw: str) -> int:
    """argparse type for capacity flags"""
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return value


def _pass_raw_bytes(stream) -> None:
    """Carry undecodable input bytes through to output as surrogate escapes"""
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors="surrogateescape")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="TASKBOARD - In-memory Kanban task board",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands (one per line):
  t <duration> <description>   Add a task
  l [<id> ...]                 List tasks (all, by description, or by id)
  n <delta>                    Advance the clock
  u [<user>]                   Add a user / list users
  m <id> <user> <activity>     Move a task
  d <activity>                 List tasks in an activity
  a [<activity>]               Add an activity / list activities
  q                            Quit
        """
    )

    parser.add_argument("-i", "--input", help="Read commands from file (default: stdin)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (logs go to stderr)")
    parser.add_argument("--max-tasks", type=positive_int, help="Task capacity")
    parser.add_argument("--max-users", type=positive_int, help="User capacity")
    parser.add_argument("--max-activities", type=positive_int, help="Activity capacity")
    parser.add_argument("--dump", action="store_true", help="Print final board state as JSON")

    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), stream=sys.stderr)

    try:
        limits = BoardLimits.from_env(
            max_tasks=args.max_tasks,
            max_users=args.max_users,
            max_activities=args.max_activities
        )
    except ValidationError as e:
        print(f"❌ Invalid board limits: {e}", file=sys.stderr)
        return 1

    _pass_raw_bytes(sys.stdout)
    board = BoardController()
    interpreter = CommandInterpreter(board, limits=limits, out=sys.stdout)

    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8", errors="surrogateescape") as f:
                interpreter.run(f)
        except FileNotFoundError:
            print(f"❌ Input file not found: {args.input}", file=sys.stderr)
            return 1
    else:
        _pass_raw_bytes(sys.stdin)
        interpreter.run(sys.stdin)

    if args.dump:
        print(json.dumps(board.snapshot().model_dump(mode="json"), indent=2))

    logger.info(f"✅ Done: {len(board)} tasks, {board.started_count} started, clock {board.now}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
