"""dev-sop-engine — scaffold a project's .claude/ directory and keep its
.mcp.json server list in sync.

The scaffold is generated once. The server list is reconciled on every run:
servers declared in sop.yaml are managed by the tool, anything else in
.mcp.json is treated as a manual entry and left alone.
"""

__version__ = "1.0.0"

SCAFFOLD_DIR = ".claude"
CONFIG_FILE = "sop.yaml"
STATE_FILE = ".mcp.json"
LOCAL_OVERRIDE_DIR = ".sop"

# Backing-file keys
OWNER_TAG = "dev-sop-engine"
OWNER_KEY = "_managedBy"
MANAGED_KEY = "_managedServers"
ENTRIES_KEY = "mcpServers"
