"""
API Configuration - Single Source of Truth

All backend parameters defined here. Do not duplicate elsewhere.
Values come from the environment so the MCP host can configure the server
without flags.
"""

import os

from models import ErrorKind, MondayError

# GraphQL endpoint and schema version
API_URL = os.environ.get("MONDAY_API_URL", "https://api.monday.com/v2")
API_VERSION = os.environ.get("MONDAY_API_VERSION", "2025-10")

# Environment variable holding the personal/app token
TOKEN_ENV_VAR = "MONDAY_API_TOKEN"

# Timeout for every GraphQL round trip (seconds)
API_TIMEOUT = float(os.environ.get("MONDAY_API_TIMEOUT", 60))

LOG_LEVEL = os.environ.get("MONDAY_LOG_LEVEL", "INFO")


# --- Search ---
# Caller-facing max page size, and the item count at or below which
# term search hands filtering back to the caller.
SEARCH_LIMIT = 100
# Page size for the single "fetch everything" round trip of a term search.
LOAD_INTO_MEMORY_LIMIT = 10_000

# --- Board insights ---
DEFAULT_INSIGHTS_LIMIT = 1000
MAX_INSIGHTS_LIMIT = 1000


def get_api_token() -> str:
    """Read the API token at call time (tests and hosts may set it late)."""
    token = os.environ.get(TOKEN_ENV_VAR, "").strip()
    if not token:
        raise MondayError(
            ErrorKind.AUTH_REQUIRED,
            f"{TOKEN_ENV_VAR} is not set. Create a token in monday.com "
            "(Profile → Developers → My access tokens) and export it.",
        )
    return token
