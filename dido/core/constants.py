"""Module holding constants used across dido."""

ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
USER_AGENT = "dido/0.1.1"
DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_HOME = "~/.dido"
CONFIG_FILENAME = "config.json"
DB_FILENAME = "dido.db"
HTTP_TIMEOUT_SEC = 60
MAX_TOKENS = 1024

RECENT_COMMITS = 10
README_NAME = "README.md"
README_CONTEXT_CHARS = 2000
MAX_DIFF_CHARS = 15000

# Directory names the repository walker never descends into.
DEFAULT_SKIP_DIRECTORIES = frozenset(
    {
        "node_modules",
        ".git",
        "vendor",
        "dist",
        "build",
        ".next",
        ".nuxt",
        "coverage",
        "__pycache__",
        ".venv",
        "venv",
    }
)

DISPLAY_PATH_WIDTH = 30
API_KEY_MISSING = "API key not configured"
