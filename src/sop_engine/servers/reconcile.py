"""Reconcile declared MCP servers into a shared, hand-editable server list.

The backing file holds two kinds of entries:

- managed entries, whose names this tool lists in ``managed_names``. They
  are rebuilt from the declaration on every run.
- manual entries, anything else. They are carried through verbatim.

``reconcile`` is a pure function. It does no I/O and never mutates its
inputs; the caller loads and persists state (see ``servers.store``).
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from sop_engine import OWNER_TAG


@dataclass(frozen=True)
class Absent:
    """No backing file exists yet."""


@dataclass(frozen=True)
class Corrupt:
    """A backing file exists but could not be parsed into a server list."""

    reason: str = ""


ABSENT = Absent()


@dataclass
class ManagedState:
    """Persisted server list plus the names this tool owns."""

    owner_tag: str = OWNER_TAG
    managed_names: set[str] = field(default_factory=set)
    entries: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def manual_names(self) -> set[str]:
        return set(self.entries) - self.managed_names


@dataclass
class ReconcileReport:
    """What a reconciliation changed, computed against the previous state."""

    kind: str = "created"
    currently_managed: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    claimed: list[str] = field(default_factory=list)
    preserved_manual: list[str] = field(default_factory=list)
    removed_managed: list[str] = field(default_factory=list)
    corrupt_warning: bool = False
    corrupt_reason: str = ""

    @property
    def changed(self) -> bool:
        return self.kind != "unchanged"

    def lines(self, filename: str = ".mcp.json") -> list[str]:
        """Render the report as output lines, one per non-empty group."""
        out = []
        if self.corrupt_warning:
            detail = f" ({self.corrupt_reason})" if self.corrupt_reason else ""
            out.append(f"WARNING: existing {filename} was invalid{detail}, replacing")
        if self.added:
            out.append(f"created: {', '.join(self.added)}")
        if self.claimed:
            out.append(f"claimed: {', '.join(self.claimed)}")
        if self.preserved_manual:
            out.append(f"preserved manual: {', '.join(self.preserved_manual)}")
        if self.removed_managed:
            out.append(f"removed managed: {', '.join(self.removed_managed)}")
        out.append(f"managed: {', '.join(self.currently_managed) or '(none)'}")
        return out


def overlay(base: dict[str, Any], top: dict[str, Any]) -> dict[str, Any]:
    """Apply ``top`` over ``base``; ``top`` wins every name collision.

    Entries of ``base`` keep their relative order and come first, followed by
    ``top`` in its own order. A colliding name takes its position from ``top``
    so the result does not depend on where the name used to live.
    """
    merged = {name: value for name, value in base.items() if name not in top}
    merged.update(top)
    return merged


def reconcile(
    previous: ManagedState | Absent | Corrupt,
    declared: dict[str, Any],
) -> tuple[ManagedState, ReconcileReport]:
    """Merge ``declared`` into ``previous``.

    Args:
        previous: Loaded state, ``ABSENT`` when there is no file, or a
            ``Corrupt`` marker when the file could not be parsed.
        declared: Servers this tool wants to manage right now.

    Returns:
        (new state, report) tuple.
    """
    declared = copy.deepcopy(dict(declared))
    names = list(declared)

    if not isinstance(previous, ManagedState):
        state = ManagedState(managed_names=set(names), entries=declared)
        corrupt = isinstance(previous, Corrupt)
        report = ReconcileReport(
            kind="replaced" if corrupt else "created",
            currently_managed=sorted(names),
            added=sorted(names),
            corrupt_warning=corrupt,
            corrupt_reason=previous.reason if corrupt else "",
        )
        return state, report

    manual = {
        name: copy.deepcopy(entry)
        for name, entry in previous.entries.items()
        if name not in previous.managed_names
    }
    merged = overlay(manual, declared)

    state = ManagedState(
        owner_tag=OWNER_TAG,
        managed_names=set(names),
        entries=merged,
        extra=copy.deepcopy(previous.extra),
    )

    declared_set = set(names)
    claimed = declared_set & set(manual)
    report = ReconcileReport(
        kind="unchanged" if state == previous else "updated",
        currently_managed=sorted(declared_set),
        added=sorted(declared_set - previous.managed_names - claimed),
        claimed=sorted(claimed),
        preserved_manual=sorted(set(merged) - declared_set),
        removed_managed=sorted(previous.managed_names - declared_set),
    )
    return state, report
