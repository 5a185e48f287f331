"""Load and save the project's .mcp.json server list."""

from __future__ import annotations

import json
from pathlib import Path

from sop_engine import ENTRIES_KEY, MANAGED_KEY, OWNER_KEY
from sop_engine.servers.reconcile import ABSENT, Absent, Corrupt, ManagedState

_RESERVED = {OWNER_KEY, MANAGED_KEY, ENTRIES_KEY}


def parse_state(text: str) -> ManagedState | Corrupt:
    """Parse backing-file text into a ManagedState, or a Corrupt marker.

    A file without a managed-names key predates this tool: every entry
    in it is manual. Server definitions are opaque: any JSON value is
    accepted as an entry.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return Corrupt(f"invalid JSON: {e.msg} at line {e.lineno}")

    if not isinstance(data, dict):
        return Corrupt("top level is not a JSON object")

    entries = data.get(ENTRIES_KEY)
    if entries is None:
        entries = {}
    if not isinstance(entries, dict):
        return Corrupt(f"'{ENTRIES_KEY}' is not an object")

    managed = data.get(MANAGED_KEY)
    if managed is None:
        managed = []
    if not isinstance(managed, list) or not all(isinstance(n, str) for n in managed):
        return Corrupt(f"'{MANAGED_KEY}' is not a list of names")

    owner = data.get(OWNER_KEY)
    return ManagedState(
        owner_tag=owner if isinstance(owner, str) else "",
        managed_names=set(managed),
        entries=entries,
        extra={k: v for k, v in data.items() if k not in _RESERVED},
    )


def load_state(path: Path | str) -> ManagedState | Absent | Corrupt:
    """Read the backing file.

    Returns:
        ``ABSENT`` if the file does not exist, a ``Corrupt`` marker if it
        cannot be parsed, otherwise the loaded ManagedState.

    Raises:
        OSError: For read failures other than a missing file.
    """
    state_path = Path(path)
    if not state_path.exists():
        return ABSENT
    try:
        text = state_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        return Corrupt(f"not UTF-8 text: {e.reason}")
    return parse_state(text)


def dump_state(state: ManagedState) -> dict:
    """Build the JSON document for a state with a deterministic key order."""
    data = {
        OWNER_KEY: state.owner_tag,
        MANAGED_KEY: sorted(state.managed_names),
        ENTRIES_KEY: state.entries,
    }
    for key, value in state.extra.items():
        data[key] = value
    return data


def save_state(state: ManagedState, path: Path | str) -> None:
    """Overwrite the backing file in place.

    The write is not atomic. A crash mid-write leaves a file that the
    next run reads as Corrupt and replaces. Concurrent runs are not
    coordinated and may race.
    """
    text = json.dumps(dump_state(state), indent=2) + "\n"
    state_path = Path(path)
    with open(state_path, "w", encoding="utf-8") as f:
        f.write(text)
