"""Tests for the process table — ps listing, parsing and forest building."""

import pytest

from nodeplat.exceptions import CommandFailedError, ProcessQueryError
from nodeplat.processes.table import (
    build_forest,
    list_processes,
    parse_process_records,
    read_process_forest,
)
from nodeplat.types import ProcessRecord


# ── parse_process_records ──────────────────────────────────────


def test_parse_skips_header():
    records = parse_process_records(["  PID  PPID", "    1     0", "   42     1"])
    assert records == [ProcessRecord(pid=1, ppid=0), ProcessRecord(pid=42, ppid=1)]


def test_parse_trims_surrounding_whitespace():
    records = parse_process_records(["\t 7   3 \t"])
    assert records == [ProcessRecord(pid=7, ppid=3)]


def test_parse_skips_malformed_rows():
    lines = [
        "10 1",
        "",
        "abc def",
        "11",
        "12 1 extra",
        "-3 1",
        "13 10",
    ]
    records = parse_process_records(lines)
    assert [(r.pid, r.ppid) for r in records] == [(10, 1), (13, 10)]


def test_header_does_not_change_forest():
    body = ["1 0", "2 1", "3 1"]
    with_header = build_forest(parse_process_records(["PID PPID", *body]))
    without_header = build_forest(parse_process_records(body))
    assert with_header == without_header


# ── build_forest ───────────────────────────────────────────────


def test_build_forest_preserves_read_order():
    records = [
        ProcessRecord(pid=9, ppid=1),
        ProcessRecord(pid=3, ppid=1),
        ProcessRecord(pid=5, ppid=1),
    ]
    assert build_forest(records) == {1: [9, 3, 5]}


def test_build_forest_leaves_are_not_keys():
    forest = build_forest([ProcessRecord(pid=2, ppid=1), ProcessRecord(pid=3, ppid=2)])
    assert 3 not in forest
    assert forest == {1: [2], 2: [3]}


def test_build_forest_empty():
    assert build_forest([]) == {}


# ── list_processes ─────────────────────────────────────────────


def test_list_processes_runs_ps_with_pid_columns(ps_runner):
    lines = list_processes(ps_runner)
    assert ps_runner.commands == ["ps -ax -o pid,ppid"]
    assert lines[0].split() == ["PID", "PPID"]
    assert len(lines) == 6


def test_list_processes_nonzero_exit_raises(fake_runner_factory):
    runner = fake_runner_factory(failures={"ps": "ps: illegal option"})
    with pytest.raises(ProcessQueryError) as exc_info:
        list_processes(runner)
    assert exc_info.value.exit_code == 1
    assert exc_info.value.stderr == "ps: illegal option"


def test_list_processes_error_carries_stdout_and_stderr(fake_runner_factory):
    from nodeplat.runner import CommandResult

    def _handler(command):
        return CommandResult(command=command, exit_code=2, stdout="1 0\n", stderr="boom")

    runner = fake_runner_factory(handler=_handler)
    with pytest.raises(ProcessQueryError) as exc_info:
        read_process_forest(runner)
    assert exc_info.value.stdout == "1 0\n"
    assert exc_info.value.stderr == "boom"


def test_list_processes_wraps_runner_failure(fake_runner_factory):
    def _handler(command):
        raise CommandFailedError("Command timed out: ps", command=command)

    runner = fake_runner_factory(handler=_handler)
    with pytest.raises(ProcessQueryError, match="timed out"):
        list_processes(runner)


def test_read_process_forest(ps_runner):
    assert read_process_forest(ps_runner) == {0: [1], 1: [2, 3], 2: [4], 3: [5]}
