"""MCP server list module — reconcile, load, and save .mcp.json."""

from sop_engine.servers.declaration import DeclarationError, load_declaration
from sop_engine.servers.reconcile import (
    ABSENT,
    Absent,
    Corrupt,
    ManagedState,
    ReconcileReport,
    reconcile,
)
from sop_engine.servers.store import load_state, save_state

__all__ = [
    "ABSENT",
    "Absent",
    "Corrupt",
    "ManagedState",
    "ReconcileReport",
    "reconcile",
    "load_state",
    "save_state",
    "DeclarationError",
    "load_declaration",
]
