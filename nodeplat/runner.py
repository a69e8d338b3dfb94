"""Command runner — blocking shell-out with captured output.

Every OS interaction in nodeplat goes through a CommandRunner so tests can
swap in a fake that records commands and returns canned output.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Callable

from pydantic import BaseModel

from nodeplat.config import settings
from nodeplat.exceptions import CommandFailedError

_logger = logging.getLogger(__name__)

OutputCallback = Callable[[str], None]


class CommandResult(BaseModel):
    """Outcome of one external command."""

    command: str
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandRunner:
    """Runs external commands synchronously on the calling thread."""

    def __init__(self, timeout_s: int | None = None) -> None:
        self._timeout_s = timeout_s if timeout_s is not None else settings.command_timeout_s

    def run(
        self,
        command: str,
        on_output: OutputCallback | None = None,
        error_message: str = "",
    ) -> CommandResult:
        """Run a shell command, raising CommandFailedError unless it exits 0.

        ``on_output`` receives stdout once the command has succeeded.
        """
        _logger.debug("Running command: %s", command)
        try:
            proc = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                text=True,
                timeout=self._timeout_s,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandFailedError(
                f"{error_message or 'Command failed'}: {command} timed out after {self._timeout_s}s",
                command=command,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr),
            ) from e
        except OSError as e:
            raise CommandFailedError(
                f"{error_message or 'Command failed'}: {command} could not start: {e}",
                command=command,
            ) from e

        result = CommandResult(
            command=command,
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
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

    def run_args(self, args: list[str]) -> CommandResult:
        """Run an argv list without a shell. Non-zero exit is returned, not raised."""
        command = " ".join(args)
        _logger.debug("Running command: %s", command)
        try:
            proc = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self._timeout_s,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandFailedError(
                f"Command timed out after {self._timeout_s}s: {command}",
                command=command,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr),
            ) from e
        except OSError as e:
            raise CommandFailedError(
                f"Command could not start: {command}: {e}",
                command=command,
            ) from e

        return CommandResult(
            command=command,
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )


def _as_text(data: str | bytes | None) -> str:
    # TimeoutExpired may carry bytes even when text=True was requested
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return data
