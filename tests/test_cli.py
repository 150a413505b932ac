"""
Tests for the taskboard CLI entry point.
"""

import io
import json

import pytest

from taskboard import cli


SCRIPT = """t 4 write report
t 2 buy milk
u alice
m 1 alice IN PROGRESS
n 6
m 1 alice DONE
d DONE
q
t 1 never read
"""


def test_runs_command_file(tmp_path, capsys):
    script = tmp_path / "commands.txt"
    script.write_text(SCRIPT)

    assert cli.main(["-i", str(script)]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "task 1",
        "task 2",
        "6",
        "duration=6 slack=2",
        "1 0 write report",
    ]


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("t 3 from stdin\nl\n"))

    assert cli.main([]) == 0

    assert capsys.readouterr().out.splitlines() == ["task 1", "1 TO DO #3 from stdin"]


def test_dump_prints_board_json(tmp_path, capsys):
    script = tmp_path / "commands.txt"
    script.write_text("t 4 write report\nu bob\nn 2\nm 1 bob IN PROGRESS\n")

    assert cli.main(["-i", str(script), "--dump"]) == 0

    out = capsys.readouterr().out
    payload = json.loads(out[out.index("{"):])
    assert payload["now"] == 2
    assert payload["tasks"] == [{
        "id": 1,
        "description": "write report",
        "user": "bob",
        "stage": "IN PROGRESS",
        "duration": 4,
        "start": 2,
    }]


def test_max_tasks_flag(tmp_path, capsys):
    script = tmp_path / "commands.txt"
    script.write_text("t 1 a\nt 1 b\n")

    assert cli.main(["-i", str(script), "--max-tasks", "1"]) == 0

    assert capsys.readouterr().out.splitlines() == ["task 1", "too many tasks"]


def test_missing_input_file(tmp_path, capsys):
    assert cli.main(["-i", str(tmp_path / "missing.txt")]) == 1
    assert "not found" in capsys.readouterr().err


def test_undecodable_bytes_pass_through_file(tmp_path, capsysbinary):
    script = tmp_path / "commands.txt"
    script.write_bytes(b"t 1 caf\xe9\nl\n")

    assert cli.main(["-i", str(script)]) == 0

    assert capsysbinary.readouterr().out == b"task 1\n1 TO DO #1 caf\xe9\n"


def test_undecodable_bytes_pass_through_stdin(monkeypatch, capsysbinary):
    stdin = io.TextIOWrapper(io.BytesIO(b"t 2 na\xefve\nd TO DO\n"), encoding="utf-8")
    monkeypatch.setattr("sys.stdin", stdin)

    assert cli.main([]) == 0

    assert capsysbinary.readouterr().out == b"task 1\n1 0 na\xefve\n"


@pytest.mark.parametrize("flag", ["--max-tasks", "--max-users", "--max-activities"])
@pytest.mark.parametrize("value", ["0", "-3", "many"])
def test_rejects_non_positive_capacity(flag, value, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([flag, value])
    assert excinfo.value.code == 2
    assert flag in capsys.readouterr().err


def test_invalid_limit_in_environment(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("TASKBOARD_MAX_TASKS", "0")
    script = tmp_path / "commands.txt"
    script.write_text("t 1 a\n")

    assert cli.main(["-i", str(script)]) == 1
    assert "Invalid board limits" in capsys.readouterr().err
