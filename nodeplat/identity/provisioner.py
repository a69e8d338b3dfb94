"""IdentityProvisioner — OS users and groups for isolated components.

Ids are allocated by reading the highest id in use and adding one. Nothing
in the OS tooling makes that read-then-create atomic, so two provisioners
running at once (in different processes) can still pick the same id. Within
one process, a lock serializes every provisioning call.

A failure part-way through leaves the user or group half-configured. No
rollback is attempted; the caller decides how to remediate.
"""

from __future__ import annotations

import logging
import re
import threading

from nodeplat.config import settings
from nodeplat.exceptions import CommandFailedError, IdentityCreateError, IdentityQueryError
from nodeplat.identity.commands import IdentityCommands
from nodeplat.runner import CommandRunner
from nodeplat.types import GroupIdentity, UserIdentity

_logger = logging.getLogger(__name__)

# Portable user/group name; also keeps shell metacharacters out of templates
_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.-]{0,31}")


class IdentityProvisioner:
    """Creates users and groups through the platform's command line tools."""

    def __init__(
        self,
        commands: IdentityCommands,
        runner: CommandRunner | None = None,
        shell: str | None = None,
    ) -> None:
        self._commands = commands
        self._runner = runner or CommandRunner()
        self._shell = shell or settings.default_shell
        self._lock = threading.Lock()

    def create_user(self, name: str) -> UserIdentity:
        """Create a user whose uid and primary gid are the next free uid.

        The primary gid equals the uid, so every user gets a private group.
        """
        _check_name(name, "user")
        cmds = self._commands
        with self._lock:
            uid = self._next_id(cmds.max_uid, "Cannot get a unique id for creating user")
            self._mutate(cmds.create_user.format(name=name), "Failed to create user")
            self._mutate(
                cmds.set_user_shell.format(name=name, shell=self._shell), "Failed to add shell"
            )
            self._mutate(cmds.set_user_uid.format(name=name, id=uid), "Failed to add user id")
            self._mutate(cmds.set_user_gid.format(name=name, id=uid), "Failed to add group id")

        _logger.info("Created user %s with uid %d", name, uid)
        return UserIdentity(name=name, uid=uid, gid=uid, shell=self._shell)

    def create_group(self, name: str) -> GroupIdentity:
        _check_name(name, "group")
        cmds = self._commands
        with self._lock:
            gid = self._next_id(cmds.max_gid, "Cannot get a unique gid for creating group")
            self._mutate(cmds.create_group.format(name=name), "Failed to create group")
            self._mutate(cmds.set_group_gid.format(name=name, id=gid), "Failed to add gid")

        _logger.info("Created group %s with gid %d", name, gid)
        return GroupIdentity(name=name, gid=gid)

    def add_user_to_group(self, user: str, group: str) -> None:
        _check_name(user, "user")
        _check_name(group, "group")
        with self._lock:
            self._mutate(
                self._commands.add_user_to_group.format(user=user, group=group),
                "Failed to add user to group",
            )
        _logger.info("Added user %s to group %s", user, group)

    # ── Internals ─────────────────────────────────────────────────────────

    def _next_id(self, query: str, error_message: str) -> int:
        output: list[str] = []
        try:
            self._runner.run(query.format(), on_output=output.append, error_message=error_message)
        except CommandFailedError as e:
            raise IdentityQueryError(f"{error_message}: {e}") from e

        raw = "".join(output).strip()
        try:
            highest = int(raw)
        except ValueError as e:
            raise IdentityQueryError(f"{error_message}: unexpected output {raw!r}") from e

        _logger.debug("Highest id in use is %d", highest)
        return highest + 1

    def _mutate(self, command: str, error_message: str) -> None:
        try:
            self._runner.run(command, error_message=error_message)
        except CommandFailedError as e:
            _logger.error("%s: %s", error_message, e.stderr.strip() or e)
            raise IdentityCreateError(str(e)) from e


def _check_name(name: str, kind: str) -> None:
    if not _NAME_PATTERN.fullmatch(name):
        raise IdentityCreateError(f"Invalid {kind} name: {name!r}")
