"""Tests for the command-line entry point.

Covers:
- Parser construction and defaults
- --help exits zero without touching the target
- Successful run output
- I/O failures reported with a non-zero exit
"""

import argparse
from unittest.mock import patch

import pytest

from sop_engine.cli import build_parser, main


class TestParser:
    def test_build_parser_returns_parser(self):
        assert isinstance(build_parser(), argparse.ArgumentParser)

    def test_target_optional(self):
        args = build_parser().parse_args([])
        assert args.target is None
        assert args.dry_run is False

    def test_target_and_dry_run(self):
        args = build_parser().parse_args(["/tmp/proj", "--dry-run"])
        assert args.target == "/tmp/proj"
        assert args.dry_run is True

    @pytest.mark.parametrize("flag", ["--help", "-h"])
    def test_help_exits_zero(self, flag, capsys, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as exc_info:
            main([flag])
        assert exc_info.value.code == 0
        assert "dev-sop-engine" in capsys.readouterr().out
        assert list(tmp_path.iterdir()) == []


class TestMain:
    def test_run_on_project(self, project, capsys):
        rc = main([str(project)])
        assert rc == 0
        out = capsys.readouterr().out
        assert "Generating .claude/" in out
        assert "managed: docs, search" in out
        assert (project / ".mcp.json").is_file()

    def test_defaults_to_cwd(self, project, monkeypatch, capsys):
        monkeypatch.chdir(project)
        assert main([]) == 0
        assert (project / ".claude").is_dir()

    def test_io_error_exits_nonzero(self, project, capsys):
        with patch("sop_engine.sync.save_state", side_effect=PermissionError("denied")):
            rc = main([str(project)])
        assert rc == 1
        assert "ERROR: denied" in capsys.readouterr().err

    def test_unreadable_config_is_not_fatal(self, project, capsys):
        (project / ".sop" / "sop.yaml").write_bytes(b"command: \xff\xfe\n")
        assert main([str(project)]) == 0
        assert "declaring no servers" in capsys.readouterr().out
