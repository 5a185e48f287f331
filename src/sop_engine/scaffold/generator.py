"""One-time .claude/ scaffold generation.

Copies the template tree (hooks, validators, loggers, sop.yaml) into the
target project, writes settings.json, and assembles skill and agent files
declared in sop.yaml. Nothing here merges: the scaffold is generated once
and left to the project afterwards.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from sop_engine import CONFIG_FILE
from sop_engine.scaffold.templates import (
    AGENT_FIELDS,
    SKILL_FIELDS,
    build_settings,
    with_front_matter,
)

EXECUTABLE = 0o755
SCRIPT_DIRS = ["validators", "loggers"]


@dataclass
class ScaffoldResult:
    """Files written by a scaffold run, relative to the .claude/ directory."""

    files: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _copy_executable(src: Path, dest: Path) -> None:
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dest)
    dest.chmod(EXECUTABLE)


def _copy_scripts(source_dir: Path, dest_dir: Path, prefix: str) -> list[str]:
    """Copy every file under ``source_dir`` recursively, marking each executable."""
    written = []
    if not source_dir.is_dir():
        return written
    for src in sorted(source_dir.rglob("*")):
        if not src.is_file():
            continue
        rel = src.relative_to(source_dir)
        _copy_executable(src, dest_dir / rel)
        written.append(f"{prefix}/{rel.as_posix()}")
    return written


def _valid_name(name) -> bool:
    if not isinstance(name, str) or name in {"", ".", ".."}:
        return False
    return "/" not in name and "\\" not in name


def _inside(root: Path, source) -> bool:
    if not isinstance(source, str):
        return False
    resolved = (root / source).resolve()
    return resolved.is_relative_to(root.resolve())


def _render_items(
    items,
    kind: str,
    fields: list[str],
    source_root: Path,
    result: ScaffoldResult,
) -> list[tuple[str, str]]:
    """Assemble (name, text) pairs for skill or agent entries."""
    rendered = []
    if items is None:
        return rendered
    if not isinstance(items, list):
        result.warnings.append(f"'{kind}s' in {CONFIG_FILE} is not a list, skipped")
        return rendered

    for item in items:
        if not isinstance(item, dict):
            result.warnings.append(f"{kind} entry {item!r} is not a mapping, skipped")
            continue
        name = item.get("name")
        if not _valid_name(name):
            result.warnings.append(f"{kind} entry has invalid name {name!r}, skipped")
            continue
        source = item.get("source")
        if not source:
            result.warnings.append(f"{kind} '{name}' has no source file, skipped")
            continue
        if not _inside(source_root, source):
            result.warnings.append(
                f"{kind} '{name}' source {source!r} is outside the template, skipped"
            )
            continue
        # Missing content files are fatal, like a missing template file
        content = (source_root / source).read_text(encoding="utf-8")
        rendered.append((name, with_front_matter(item, fields, content)))
    return rendered


def generate_scaffold(
    source_root: Path,
    claude_dir: Path,
    config: dict | None = None,
    dry_run: bool = False,
) -> ScaffoldResult:
    """Generate the .claude/ directory from a template tree.

    Args:
        source_root: Template directory (project override or engine default).
        claude_dir: Destination .claude/ directory. Must not exist yet.
        config: Parsed sop.yaml, for the optional skills and agents lists.
        dry_run: Report what would be written without touching disk.

    Returns:
        ScaffoldResult with written paths relative to ``claude_dir``.

    Raises:
        FileNotFoundError: If hooks/engine.sh or a declared content file is missing.
    """
    config = config or {}
    result = ScaffoldResult()

    engine_src = source_root / "hooks" / "engine.sh"
    if not engine_src.is_file():
        raise FileNotFoundError(f"Template hook not found: {engine_src}")

    skills = _render_items(config.get("skills"), "skill", SKILL_FIELDS, source_root, result)
    agents = _render_items(config.get("agents"), "agent", AGENT_FIELDS, source_root, result)

    if dry_run:
        result.files.append("hooks/engine.sh")
        for sub in SCRIPT_DIRS:
            src_dir = source_root / sub
            if src_dir.is_dir():
                result.files.extend(
                    f"{sub}/{p.relative_to(src_dir).as_posix()}"
                    for p in sorted(src_dir.rglob("*")) if p.is_file()
                )
    else:
        for sub in ["hooks", *SCRIPT_DIRS]:
            (claude_dir / sub).mkdir(parents=True, exist_ok=True)
        _copy_executable(engine_src, claude_dir / "hooks" / "engine.sh")
        result.files.append("hooks/engine.sh")
        for sub in SCRIPT_DIRS:
            result.files.extend(_copy_scripts(source_root / sub, claude_dir / sub, sub))

    config_src = source_root / CONFIG_FILE
    if config_src.is_file():
        if not dry_run:
            shutil.copyfile(config_src, claude_dir / CONFIG_FILE)
        result.files.append(CONFIG_FILE)

    if not dry_run:
        with open(claude_dir / "settings.json", "w", encoding="utf-8") as f:
            json.dump(build_settings(), f, indent=2)
            f.write("\n")
    result.files.append("settings.json")

    for name, text in skills:
        rel = f"skills/{name}/SKILL.md"
        if not dry_run:
            dest = claude_dir / rel
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(text, encoding="utf-8")
        result.files.append(rel)

    for name, text in agents:
        rel = f"agents/{name}.md"
        if not dry_run:
            dest = claude_dir / rel
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(text, encoding="utf-8")
        result.files.append(rel)

    return result
