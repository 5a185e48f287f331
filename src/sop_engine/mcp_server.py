"""MCP stdio server exposing project generation as the ``sop_generate`` tool.

Usage:
    dev-sop-engine-mcp
"""

from __future__ import annotations

import os

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from sop_engine.sync import sync_project


def sop_generate(target_dir: str = "") -> str:
    """Generate .claude/ directory with hooks, validators, and config for a target project.

    Also reconciles the project's .mcp.json with the servers declared in sop.yaml.

    Args:
        target_dir: Path to the target project directory (absolute or relative)
    """
    target = target_dir or os.getcwd()
    try:
        return sync_project(target).summary()
    except OSError as e:
        raise ToolError(f"Error: {e}") from e


def build_server() -> FastMCP:
    mcp = FastMCP("dev-sop-engine")
    mcp.tool()(sop_generate)
    return mcp


def main() -> None:
    build_server().run()


if __name__ == "__main__":
    main()
