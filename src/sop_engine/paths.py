"""Template and config path resolution.

The template tree (hooks, validators, loggers, sop.yaml) ships inside the
package. A project can override it with its own ``.sop/`` directory.

Environment variables:
    SOP_ENGINE_DIR — replacement for the bundled template tree
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from pathlib import Path

from sop_engine import CONFIG_FILE, LOCAL_OVERRIDE_DIR, SCAFFOLD_DIR, STATE_FILE

_BUNDLED_DIR = Path(__file__).resolve().parent / "sop"


@dataclass(frozen=True)
class ConfigSource:
    """Directory the template and the server declaration are read from."""

    root: Path
    local: bool = False

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILE

    def describe(self) -> str:
        kind = "project override" if self.local else "engine default"
        return f"{self.root} ({kind})"


def engine_dir() -> Path:
    """Return the engine's default template directory."""
    env = os.environ.get("SOP_ENGINE_DIR")
    if env:
        path = Path(env).expanduser()
        if path.is_dir():
            return path
        warnings.warn(f"SOP_ENGINE_DIR={env} is not a directory, using bundled template")
    return _BUNDLED_DIR


def resolve_config_source(target: Path | str) -> ConfigSource:
    """Pick the project-local ``.sop/`` directory if present, else the engine default."""
    local = Path(target) / LOCAL_OVERRIDE_DIR
    if local.is_dir():
        return ConfigSource(root=local, local=True)
    return ConfigSource(root=engine_dir(), local=False)


def scaffold_dir(target: Path | str) -> Path:
    """Return the path to the target's .claude/ directory."""
    return Path(target) / SCAFFOLD_DIR


def state_path(target: Path | str) -> Path:
    """Return the path to the target's .mcp.json."""
    return Path(target) / STATE_FILE
