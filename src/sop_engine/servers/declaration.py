"""Read the declared MCP servers from sop.yaml."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from sop_engine import ENTRIES_KEY


class DeclarationError(ValueError):
    """The config file exists but its server declaration cannot be read."""


def read_config(path: Path | str) -> dict:
    """Read and parse a sop.yaml file.

    Args:
        path: Path to sop.yaml.

    Returns:
        Parsed config dict. A missing or empty file yields ``{}``.

    Raises:
        DeclarationError: If the file is not UTF-8, the YAML is malformed,
            or the document is not a mapping.
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}
    with open(config_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except UnicodeDecodeError as e:
            raise DeclarationError(f"{config_path.name} is not UTF-8 text: {e.reason}") from e
        except yaml.YAMLError as e:
            raise DeclarationError(f"{config_path.name} is not valid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DeclarationError(f"{config_path.name} is not a YAML mapping")
    return data


def _json_safe(definition) -> bool:
    # YAML yields dates and timestamps for unquoted values; JSON cannot hold them
    try:
        json.dumps(definition)
    except (TypeError, ValueError):
        return False
    return True


def get_declared_servers(config: dict, skipped: list[str] | None = None) -> dict:
    """Extract the server declaration from a parsed config.

    Definitions are forwarded unchanged, except ones that cannot be stored
    in .mcp.json. Those are left out and described in ``skipped``.
    """
    servers = config.get(ENTRIES_KEY)
    if servers is None:
        return {}
    if not isinstance(servers, dict):
        raise DeclarationError(f"'{ENTRIES_KEY}' is not a mapping of server names")

    declared = {}
    for name, definition in servers.items():
        if not _json_safe(definition):
            if skipped is not None:
                skipped.append(
                    f"server '{name}' has values JSON cannot store "
                    "(quote dates and timestamps), skipped"
                )
            continue
        declared[str(name)] = definition
    return declared


def load_declaration(path: Path | str) -> dict:
    """Load the servers this tool should manage."""
    return get_declared_servers(read_config(path))
