"""Custom exception hierarchy for nodeplat."""

from __future__ import annotations


class NodeplatError(Exception):
    """Base for all platform-layer errors."""


class CommandFailedError(NodeplatError):
    """An external command exited non-zero, timed out, or could not start."""

    def __init__(
        self,
        message: str,
        command: str = "",
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class IdentityError(NodeplatError):
    """Base for user/group provisioning failures."""


class IdentityQueryError(IdentityError):
    """Could not determine the next available numeric user or group id."""


class IdentityCreateError(IdentityError):
    """Creating or modifying a user, group or membership failed."""


class ProcessQueryError(NodeplatError):
    """The process listing tool exited non-zero."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class UnsupportedPlatformError(NodeplatError):
    """No platform implementation exists for this operating system."""
