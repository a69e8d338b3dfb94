"""Process table — `ps` output parsed into a parent -> children forest.

ps has no "subtree" option, so the whole table is listed and inverted on
every call. Nothing is cached: pids are reused by the OS, and a stale
table could point termination at the wrong process.
"""

from __future__ import annotations

import logging
import re
import shlex
from typing import Iterable

from nodeplat.config import settings
from nodeplat.exceptions import CommandFailedError, ProcessQueryError
from nodeplat.runner import CommandRunner
from nodeplat.types import ProcessForest, ProcessRecord

_logger = logging.getLogger(__name__)

PS_PID_PATTERN = re.compile(r"(\d+)\s+(\d+)")


def list_processes(runner: CommandRunner | None = None) -> list[str]:
    """Run the process listing and return its stdout lines.

    Raises ProcessQueryError if ps exits non-zero, times out, or is missing.
    """
    runner = runner or CommandRunner()
    args = shlex.split(settings.ps_command)
    try:
        result = runner.run_args(args)
    except CommandFailedError as e:
        raise ProcessQueryError(str(e), stdout=e.stdout, stderr=e.stderr) from e

    if not result.ok:
        _logger.warning(
            "ps exited non-zero (exit=%d) stdout=%r stderr=%r",
            result.exit_code, result.stdout, result.stderr,
        )
        raise ProcessQueryError(
            f"ps exited with {result.exit_code}",
            exit_code=result.exit_code,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return result.stdout.splitlines()


def parse_process_records(lines: Iterable[str]) -> list[ProcessRecord]:
    """Keep the lines that are exactly two integers; drop headers and junk."""
    records = []
    skipped = 0
    for line in lines:
        match = PS_PID_PATTERN.fullmatch(line.strip())
        if match is None:
            skipped += 1
            continue
        records.append(ProcessRecord(pid=int(match.group(1)), ppid=int(match.group(2))))

    if skipped:
        _logger.debug("Skipped %d unparsable ps line(s)", skipped)
    return records


def build_forest(records: Iterable[ProcessRecord]) -> ProcessForest:
    forest: ProcessForest = {}
    for rec in records:
        forest.setdefault(rec.ppid, []).append(rec.pid)
    return forest


def read_process_forest(runner: CommandRunner | None = None) -> ProcessForest:
    """List, parse and invert the live process table in one go."""
    return build_forest(parse_process_records(list_processes(runner)))
