"""
Tests for schema models and environment-driven limits.
"""

import pytest
from pydantic import ValidationError

from taskboard import BoardLimits, Task, STAGE_TODO


def test_default_limits():
    limits = BoardLimits()
    assert limits.max_tasks == 10000
    assert limits.max_description_length == 50
    assert limits.max_users == 50
    assert limits.max_user_length == 20
    assert limits.max_activities == 10
    assert limits.max_activity_length == 20


def test_limits_from_env(monkeypatch):
    monkeypatch.setenv("TASKBOARD_MAX_TASKS", "5")
    monkeypatch.setenv("TASKBOARD_MAX_USER_LENGTH", "8")
    limits = BoardLimits.from_env()
    assert limits.max_tasks == 5
    assert limits.max_user_length == 8
    assert limits.max_users == 50


def test_malformed_env_falls_back(monkeypatch):
    monkeypatch.setenv("TASKBOARD_MAX_USERS", "lots")
    monkeypatch.setenv("TASKBOARD_MAX_ACTIVITIES", " ")
    limits = BoardLimits.from_env()
    assert limits.max_users == 50
    assert limits.max_activities == 10


def test_overrides_beat_env(monkeypatch):
    monkeypatch.setenv("TASKBOARD_MAX_TASKS", "5")
    assert BoardLimits.from_env(max_tasks=7).max_tasks == 7
    assert BoardLimits.from_env(max_tasks=None).max_tasks == 5


def test_limits_must_be_positive():
    with pytest.raises(ValidationError):
        BoardLimits(max_tasks=0)


def test_task_defaults():
    task = Task(id=1, description="write", duration=2)
    assert task.stage == STAGE_TODO
    assert task.user is None
    assert task.start is None
