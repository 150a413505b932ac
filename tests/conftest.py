"""
Shared fixtures for the taskboard test suite.
"""

import io

import pytest

from taskboard import BoardController, BoardLimits, CommandInterpreter


@pytest.fixture
def board():
    """A fresh board: clock 0, no tasks."""
    return BoardController()


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def limits():
    return BoardLimits()


@pytest.fixture
def interpreter(board, limits, out):
    return CommandInterpreter(board, limits=limits, out=out)


@pytest.fixture
def run_script(interpreter, out):
    """Run command lines and return the output lines they produced."""

    def _run(*lines):
        start = len(out.getvalue())
        interpreter.run(line + "\n" for line in lines)
        return out.getvalue()[start:].splitlines()

    return _run
