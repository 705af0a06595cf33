"""Default configuration values."""

from pathlib import Path

# Storage Configuration
STORAGE_SUBDIR = Path(".opencode") / "plugins" / "async-agents"  # Relative to the home directory
TASKS_FILENAME = "tasks.json"
SERVER_INFO_FILENAME = "server.json"

# Fork Context Budget (characters, 200k chars ~= 50k tokens)
FORK_CHAR_BUDGET = 200_000
FORK_CHAR_NO_REMOVAL = 120_000  # Below this, never evict messages

# Graduated tool result tiers
FORK_TIER1_COUNT = 5  # Newest N tool results are kept whole
FORK_TIER2_COUNT = 10  # Next N tool results get the medium cap
FORK_TIER2_LIMIT = 3_000
FORK_TIER3_LIMIT = 500

# Tool parameter preview caps per tier
FORK_PARAMS_TIER1 = 500
FORK_PARAMS_TIER2 = 200
FORK_PARAMS_TIER3 = 100

# Head+tail split of a tier cap
FORK_HEAD_RATIO = 0.8
FORK_TAIL_RATIO = 0.2

# Case-sensitive substrings that mark a tool result as error output
FORK_ERROR_PATTERNS = [
    "error",
    "Error",
    "ERROR",
    "failed",
    "FAILED",
    "exception",
    "traceback",
]

# Tool name keywords for shell-like tools (head and tail both matter)
FORK_HEAD_TAIL_KEYWORDS = ["bash", "pty", "exec"]

# Tools whose results the child agent needs verbatim
FORK_NO_TRUNCATION_TOOLS = ["ask_user_questions"]

# Written by the host when it clears a tool result during compaction
FORK_COMPACTED_SENTINEL = "[Old tool result content cleared]"

# HTTP Status API Configuration
DEFAULT_API_ENABLED = True
DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 5165
MAX_PORT_RETRY = 10
HEARTBEAT_INTERVAL_SECONDS = 30.0
MAX_SSE_SUBSCRIBERS = 50
DEFAULT_TASK_LIMIT = 50
MAX_TASK_LIMIT = 200
