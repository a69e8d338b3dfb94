"""Signal a process and all of its descendants."""

from __future__ import annotations

import logging
import os
import signal
from typing import Iterable

from nodeplat.types import ProcessId

_logger = logging.getLogger(__name__)


def signal_tree(
    root: ProcessId,
    descendants: Iterable[ProcessId],
    force: bool = False,
) -> set[ProcessId]:
    """Send SIGTERM (SIGKILL if ``force``) to the descendants, then the root.

    Descendants are signalled before the root, in ascending pid order.
    Returns the pids that were signalled; pids that already exited are
    skipped.
    """
    sig = signal.SIGKILL if force else signal.SIGTERM
    signalled: set[ProcessId] = set()
    for pid in [*sorted(descendants), root]:
        try:
            os.kill(pid, sig)
        except ProcessLookupError:
            _logger.debug("pid %d already exited", pid)
            continue
        signalled.add(pid)

    _logger.info(
        "Sent %s to %d process(es) in the tree of pid %d",
        sig.name, len(signalled), root,
    )
    return signalled
