"""Shared test fixtures for dev-sop-engine."""

import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def template_dir(tmp_path):
    """A writable copy of the fixture template tree."""
    dest = tmp_path / "template"
    shutil.copytree(FIXTURES / "template", dest)
    return dest


@pytest.fixture
def project(tmp_path, template_dir):
    """An empty project whose .sop/ override points at the fixture template."""
    root = tmp_path / "project"
    root.mkdir()
    shutil.copytree(template_dir, root / ".sop")
    return root
