"""Platform facade — the OS-specific operations the agent calls.

Usage:
    from nodeplat.platform import get_platform

    plat = get_platform()
    plat.create_user("svc_worker")
    plat.add_user_to_group("svc_worker", plat.get_privileged_group())
    children = plat.get_child_pids(1234)
"""

from __future__ import annotations

import logging
import sys

from nodeplat.config import settings
from nodeplat.exceptions import UnsupportedPlatformError
from nodeplat.identity.commands import DARWIN_COMMANDS, LINUX_COMMANDS, IdentityCommands
from nodeplat.identity.provisioner import IdentityProvisioner
from nodeplat.processes.killer import signal_tree
from nodeplat.processes.resolver import descendants_of
from nodeplat.processes.table import read_process_forest
from nodeplat.runner import CommandRunner
from nodeplat.types import GroupIdentity, ProcessId, UserIdentity

_logger = logging.getLogger(__name__)


class UnixPlatform:
    """Shared Unix behaviour. Subclasses pick the commands and privileged group."""

    PRIVILEGED_GROUP = ""
    IDENTITY_COMMANDS: IdentityCommands

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner = runner or CommandRunner()
        self._identities = IdentityProvisioner(self.IDENTITY_COMMANDS, runner=self._runner)

    # ── Identities ────────────────────────────────────────────────────────

    def create_user(self, user: str) -> UserIdentity:
        return self._identities.create_user(user)

    def create_group(self, group: str) -> GroupIdentity:
        return self._identities.create_group(group)

    def add_user_to_group(self, user: str, group: str) -> None:
        self._identities.add_user_to_group(user, group)

    def get_privileged_group(self) -> str:
        return self.PRIVILEGED_GROUP

    # ── Process tree ──────────────────────────────────────────────────────

    def get_child_pids(self, pid: ProcessId) -> set[ProcessId]:
        """All live descendants of ``pid``, read fresh from ps."""
        _logger.debug("Running ps to identify child processes of pid %d", pid)
        forest = read_process_forest(self._runner)
        return descendants_of(pid, forest)

    def kill_process_and_children(self, pid: ProcessId, force: bool = False) -> set[ProcessId]:
        """Signal ``pid`` and every descendant. Returns the pids signalled."""
        children = self.get_child_pids(pid)
        return signal_tree(pid, children, force=force)


class DarwinPlatform(UnixPlatform):
    PRIVILEGED_GROUP = "wheel"
    IDENTITY_COMMANDS = DARWIN_COMMANDS


class LinuxPlatform(UnixPlatform):
    PRIVILEGED_GROUP = "root"
    IDENTITY_COMMANDS = LINUX_COMMANDS


_PLATFORMS: dict[str, type[UnixPlatform]] = {
    "darwin": DarwinPlatform,
    "linux": LinuxPlatform,
}


def get_platform(name: str | None = None, runner: CommandRunner | None = None) -> UnixPlatform:
    """Build the platform for ``name``, the configured override, or this OS."""
    key = (name or settings.platform or sys.platform).lower()
    if key.startswith("linux"):
        key = "linux"
    cls = _PLATFORMS.get(key)
    if cls is None:
        raise UnsupportedPlatformError(f"No platform implementation for {key!r}")
    return cls(runner=runner)
