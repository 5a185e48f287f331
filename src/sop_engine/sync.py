"""Project sync — scaffold .claude/ once, then reconcile .mcp.json.

The sync process:
1. Resolve the config source (project .sop/ override, else engine default)
2. Generate .claude/ unless it already exists
3. Load the declared servers from sop.yaml
4. Load .mcp.json, reconcile, and write the result back

Manual entries in .mcp.json are preserved; see servers.reconcile.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from sop_engine import CONFIG_FILE, SCAFFOLD_DIR, STATE_FILE
from sop_engine.paths import ConfigSource, resolve_config_source, scaffold_dir, state_path
from sop_engine.scaffold.generator import ScaffoldResult, generate_scaffold
from sop_engine.servers.declaration import DeclarationError, get_declared_servers, read_config
from sop_engine.servers.reconcile import ReconcileReport, reconcile
from sop_engine.servers.store import load_state, save_state


@dataclass
class SyncResult:
    """Outcome of one sync run."""

    target: Path
    source: ConfigSource
    scaffold: ScaffoldResult | None = None
    report: ReconcileReport | None = None
    warnings: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def scaffold_action(self) -> str:
        return "skipped" if self.scaffold is None else "created"

    def lines(self) -> list[str]:
        out = [f"Generating {SCAFFOLD_DIR}/ in {self.target}"]
        if self.scaffold is None:
            out.append(f"  {SCAFFOLD_DIR}/ already exists, skipping scaffold")
        else:
            out.extend(f"  {rel}" for rel in self.scaffold.files)
        for w in self.warnings:
            out.append(f"WARNING: {w}")
        if self.report is not None:
            out.append("")
            out.append(f"{STATE_FILE}: {self.report.kind}")
            out.extend(f"  {line}" for line in self.report.lines(STATE_FILE))
        out.append("")
        if self.dry_run:
            out.append("[DRY RUN] No files were modified.")
        elif self.scaffold is None:
            out.append("Done.")
        else:
            out.append(f"Done. {SCAFFOLD_DIR}/ is ready.")
        return out

    def summary(self) -> str:
        return "\n".join(self.lines())


def _load_config(source: ConfigSource, warnings: list[str]) -> tuple[dict, dict]:
    """Read sop.yaml and its server declaration, downgrading parse errors."""
    try:
        config = read_config(source.config_path)
    except DeclarationError as e:
        warnings.append(f"{e}; declaring no servers")
        return {}, {}
    try:
        declared = get_declared_servers(config, skipped=warnings)
    except DeclarationError as e:
        warnings.append(f"{CONFIG_FILE}: {e}; declaring no servers")
        declared = {}
    return config, declared


def sync_project(target: Path | str, dry_run: bool = False) -> SyncResult:
    """Scaffold and reconcile a single project directory.

    Raises:
        OSError: On any read or write failure other than a missing file.
    """
    target_path = Path(target).expanduser().resolve()
    source = resolve_config_source(target_path)
    result = SyncResult(target=target_path, source=source, dry_run=dry_run)

    claude_dir = scaffold_dir(target_path)
    scaffold_exists = claude_dir.exists()

    config, declared = _load_config(source, result.warnings)

    if not scaffold_exists:
        result.scaffold = generate_scaffold(source.root, claude_dir, config, dry_run)
        result.warnings.extend(result.scaffold.warnings)

    mcp_path = state_path(target_path)
    state, report = reconcile(load_state(mcp_path), declared)
    if report.changed and not dry_run:
        save_state(state, mcp_path)
    result.report = report
    return result
