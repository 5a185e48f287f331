"""Tests for .claude/ scaffold generation."""

import json
import os
import stat

import pytest
import yaml

from sop_engine.scaffold.generator import generate_scaffold
from sop_engine.scaffold.templates import (
    ENGINE_COMMAND,
    HOOK_EVENTS,
    build_settings,
    front_matter,
    with_front_matter,
)
from sop_engine.servers.declaration import read_config


def _front_matter_of(text):
    _, block, _ = text.split("---\n", 2)
    return yaml.safe_load(block)


class TestTemplates:
    def test_settings_wires_every_event(self):
        settings = build_settings()
        assert list(settings["hooks"]) == HOOK_EVENTS
        for event, groups in settings["hooks"].items():
            assert len(groups) == 1
            assert groups[0]["hooks"] == [{"type": "command", "command": ENGINE_COMMAND}]

    def test_only_tool_events_have_matcher(self):
        hooks = build_settings()["hooks"]
        assert hooks["PreToolUse"][0]["matcher"] == "*"
        assert hooks["PostToolUse"][0]["matcher"] == "*"
        assert "matcher" not in hooks["Stop"][0]

    def test_front_matter_survives_special_characters(self):
        meta = {"name": "x", "description": 'a: "b" # c'}
        block = front_matter(meta, ["name", "description"])
        assert yaml.safe_load(block.strip("-\n")) == meta

    def test_front_matter_skips_unset_fields(self):
        block = front_matter({"name": "x", "model": ""}, ["name", "description", "model"])
        assert block == '---\nname: "x"\n---\n'

    def test_list_values_joined(self):
        text = with_front_matter({"name": "p", "tools": ["Read", "Grep"]}, ["name", "tools"], "body\n")
        assert _front_matter_of(text) == {"name": "p", "tools": "Read, Grep"}
        assert text.endswith("\nbody\n")


class TestGenerateScaffold:
    def test_copies_template_tree(self, template_dir, tmp_path):
        claude = tmp_path / "out" / ".claude"
        result = generate_scaffold(template_dir, claude, read_config(template_dir / "sop.yaml"))

        assert result.files == [
            "hooks/engine.sh",
            "validators/check.sh",
            "validators/nested/deep.sh",
            "loggers/log.sh",
            "sop.yaml",
            "settings.json",
            "skills/review/SKILL.md",
            "agents/planner.md",
        ]
        assert result.warnings == []
        assert (claude / "validators" / "nested" / "deep.sh").read_bytes() == (
            template_dir / "validators" / "nested" / "deep.sh"
        ).read_bytes()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_scripts_are_executable(self, template_dir, tmp_path):
        claude = tmp_path / ".claude"
        generate_scaffold(template_dir, claude)
        for rel in ["hooks/engine.sh", "validators/check.sh", "loggers/log.sh"]:
            mode = stat.S_IMODE((claude / rel).stat().st_mode)
            assert mode == 0o755

    def test_settings_written(self, template_dir, tmp_path):
        claude = tmp_path / ".claude"
        generate_scaffold(template_dir, claude)
        settings = json.loads((claude / "settings.json").read_text())
        assert settings == build_settings()

    def test_skill_and_agent_files(self, template_dir, tmp_path):
        claude = tmp_path / ".claude"
        generate_scaffold(template_dir, claude, read_config(template_dir / "sop.yaml"))

        skill = (claude / "skills" / "review" / "SKILL.md").read_text()
        assert _front_matter_of(skill) == {
            "name": "review",
            "description": 'Review: read the "diff" # first',
        }
        assert skill.endswith("Read the diff before approving.\n")

        agent = (claude / "agents" / "planner.md").read_text()
        assert _front_matter_of(agent) == {
            "name": "planner",
            "description": "Plans work",
            "tools": "Read, Grep",
            "model": "sonnet",
        }

    def test_missing_engine_raises(self, template_dir, tmp_path):
        (template_dir / "hooks" / "engine.sh").unlink()
        with pytest.raises(FileNotFoundError):
            generate_scaffold(template_dir, tmp_path / ".claude")
        assert not (tmp_path / ".claude").exists()

    def test_missing_skill_source_raises(self, template_dir, tmp_path):
        config = {"skills": [{"name": "ghost", "description": "d", "source": "skills/ghost.md"}]}
        with pytest.raises(FileNotFoundError):
            generate_scaffold(template_dir, tmp_path / ".claude", config)

    def test_invalid_items_warn_and_skip(self, template_dir, tmp_path):
        config = {
            "skills": [{"name": "../escape", "source": "skills/review.md"}, "bare"],
            "agents": {"planner": {}},
        }
        result = generate_scaffold(template_dir, tmp_path / ".claude", config)
        assert len(result.warnings) == 3
        assert not any(f.startswith(("skills/", "agents/")) for f in result.files)

    @pytest.mark.parametrize("source", ["../../outside.md", "/etc/hostname"])
    def test_source_outside_template_skipped(self, template_dir, tmp_path, source):
        (tmp_path / "outside.md").write_text("secret\n")
        config = {"skills": [{"name": "leak", "description": "d", "source": source}]}
        result = generate_scaffold(template_dir, tmp_path / ".claude", config)
        assert len(result.warnings) == 1
        assert "outside the template" in result.warnings[0]
        assert not (tmp_path / ".claude" / "skills").exists()

    def test_dry_run_writes_nothing(self, template_dir, tmp_path):
        claude = tmp_path / ".claude"
        result = generate_scaffold(template_dir, claude, read_config(template_dir / "sop.yaml"), dry_run=True)
        assert "settings.json" in result.files
        assert "validators/nested/deep.sh" in result.files
        assert not claude.exists()
