"""Scaffold module — one-time generation of a project's .claude/ directory."""

from sop_engine.scaffold.generator import ScaffoldResult, generate_scaffold

__all__ = ["ScaffoldResult", "generate_scaffold"]
