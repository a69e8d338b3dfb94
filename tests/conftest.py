"""Shared test fixtures — FakeRunner for testing without touching the OS."""

from __future__ import annotations

from typing import Callable

import pytest

from nodeplat.exceptions import CommandFailedError
from nodeplat.runner import CommandResult, CommandRunner

PS_OUTPUT = """  PID  PPID
    1     0
    2     1
    3     1
    4     2
    5     3
"""


class FakeRunner(CommandRunner):
    """Runner that returns scripted results. No subprocesses.

    ``outputs`` and ``failures`` map a substring of the command to its
    stdout / stderr; failures win. ``handler`` replaces both when given.
    """

    def __init__(
        self,
        outputs: dict[str, str] | None = None,
        failures: dict[str, str] | None = None,
        handler: Callable[[str], CommandResult] | None = None,
    ) -> None:
        super().__init__(timeout_s=1)
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.handler = handler
        self.commands: list[str] = []  # record all calls for assertions

    def _result(self, command: str) -> CommandResult:
        if self.handler is not None:
            return self.handler(command)
        for needle, stderr in self.failures.items():
            if needle in command:
                return CommandResult(command=command, exit_code=1, stderr=stderr)
        for needle, stdout in self.outputs.items():
            if needle in command:
                return CommandResult(command=command, exit_code=0, stdout=stdout)
        return CommandResult(command=command, exit_code=0)

    def run(self, command, on_output=None, error_message=""):
        self.commands.append(command)
        result = self._result(command)
        if not result.ok:
            raise CommandFailedError(
                f"{error_message or 'Command failed'}: {command} (exit={result.exit_code})",
                command=command,
                exit_code=result.exit_code,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        if on_output is not None:
            on_output(result.stdout)
        return result

    def run_args(self, args):
        command = " ".join(args)
        self.commands.append(command)
        return self._result(command)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def fake_runner_factory():
    def _factory(**kwargs) -> FakeRunner:
        return FakeRunner(**kwargs)
    return _factory


@pytest.fixture
def ps_runner():
    """Runner whose ps listing is the five-process tree in PS_OUTPUT."""
    return FakeRunner(outputs={"ps -ax": PS_OUTPUT})
