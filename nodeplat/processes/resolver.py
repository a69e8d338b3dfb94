"""Descendant resolution over a process forest."""

from __future__ import annotations

from nodeplat.types import ProcessForest, ProcessId


def descendants_of(root: ProcessId, forest: ProcessForest) -> set[ProcessId]:
    """Every pid reachable from ``root`` by following child links.

    ``root`` itself is not included, and a root missing from the forest
    yields an empty set. The walk is iterative, so deep trees cannot hit
    the recursion limit.

    Precondition: the forest is acyclic, as a live process table is (a
    process cannot be its own ancestor). There is no visited-set, so a
    cyclic forest never terminates.
    """
    found: set[ProcessId] = set()
    pending = list(forest.get(root, ()))
    while pending:
        pid = pending.pop()
        found.add(pid)
        pending.extend(forest.get(pid, ()))
    return found
