"""Generated-file templates for the .claude/ scaffold.

settings.json routes every hook event to the single engine script. Skill
and agent files are the supplied markdown content behind a front-matter
block.
"""

from __future__ import annotations

import json

ENGINE_COMMAND = "$CLAUDE_PROJECT_DIR/.claude/hooks/engine.sh"

# Events routed to the engine, in the order they appear in settings.json
HOOK_EVENTS = [
    "PreToolUse",
    "PostToolUse",
    "UserPromptSubmit",
    "Stop",
    "SubagentStop",
    "SessionStart",
    "SessionEnd",
    "PreCompact",
    "Notification",
]

# Events that fire per tool call and take a tool matcher
TOOL_EVENTS = {"PreToolUse", "PostToolUse"}

SKILL_FIELDS = ["name", "description"]
AGENT_FIELDS = ["name", "description", "tools", "model"]


def build_settings(command: str = ENGINE_COMMAND) -> dict:
    """Build the settings.json document wiring each event to ``command``."""
    hooks = {}
    for event in HOOK_EVENTS:
        group: dict = {}
        if event in TOOL_EVENTS:
            group["matcher"] = "*"
        group["hooks"] = [{"type": "command", "command": command}]
        hooks[event] = [group]
    return {"hooks": hooks}


def quote(value) -> str:
    """Quote a front-matter value so YAML reads it back as the same string."""
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(v) for v in value)
    return json.dumps(str(value), ensure_ascii=False)


def front_matter(meta: dict, fields: list[str]) -> str:
    """Render the ``---`` block for the given fields, skipping unset ones."""
    lines = ["---"]
    for key in fields:
        value = meta.get(key)
        if value is None or value == "":
            continue
        lines.append(f"{key}: {quote(value)}")
    lines.append("---")
    return "\n".join(lines) + "\n"


def with_front_matter(meta: dict, fields: list[str], content: str) -> str:
    """Prefix ``content`` with its front-matter block."""
    return front_matter(meta, fields) + "\n" + content.lstrip("\n")
