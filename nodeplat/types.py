"""Core types shared across nodeplat subsystems."""

from __future__ import annotations

from typing import TypeAlias

from pydantic import BaseModel

# ── ID Types ──────────────────────────────────────────────────────────────────

ProcessId: TypeAlias = int

# Parent pid -> direct child pids, in the order ps reported them.
ProcessForest: TypeAlias = dict[ProcessId, list[ProcessId]]


# ── Process Table ─────────────────────────────────────────────────────────────


class ProcessRecord(BaseModel):
    """One (pid, ppid) row from the process listing."""

    pid: ProcessId
    ppid: ProcessId


# ── Identities ────────────────────────────────────────────────────────────────


class UserIdentity(BaseModel):
    """What create_user applied to the OS. Not persisted anywhere."""

    name: str
    uid: int
    gid: int
    shell: str


class GroupIdentity(BaseModel):
    name: str
    gid: int
