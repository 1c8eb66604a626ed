"""
Centralized constants for findpeople.

Limits, timeouts and environment variable definitions live here so the
presenter, the directory backends and the CLI agree on them.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

FINDPEOPLE_CONFIG_DIR = Path.home() / ".config" / "findpeople"

# =============================================================================
# SEARCH & DIRECTORY LIMITS
# =============================================================================

SEARCH_RESULT_LIMIT = 20  # Max profiles returned per search
DEFAULT_BACKEND = "memory"  # Directory backend when none is configured

# =============================================================================
# TIMEOUTS & RETRIES (in seconds unless noted)
# =============================================================================

NOTIFICATION_TIMEOUT_SECONDS = 2  # Toast duration for connection request outcomes
REQUEST_TIMEOUT_SECONDS = 10  # Per HTTP request to the directory API
MAX_REQUEST_RETRIES = 3  # Retries for idempotent directory reads
RETRY_MIN_BACKOFF_SECONDS = 0.5
RETRY_MAX_BACKOFF_SECONDS = 4.0

# =============================================================================
# LOGGING
# =============================================================================

LOG_FILE_NAME = "findpeople.log"
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 2

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "FINDPEOPLE_BACKEND": {
        "description": "Directory backend to use (rest or memory)",
        "default": DEFAULT_BACKEND,
        "valid_values": ["rest", "memory"],
    },
    "FINDPEOPLE_API_URL": {
        "description": "Base URL of the directory API (e.g. https://xyz.supabase.co)",
        "default": None,
        "valid_values": None,
    },
    "FINDPEOPLE_API_KEY": {
        "description": "API key sent with every directory request",
        "default": None,
        "valid_values": None,
        "sensitive": True,
    },
    "FINDPEOPLE_USER_ID": {
        "description": "Id of the signed-in user (excluded from results, used as requester)",
        "default": None,
        "valid_values": None,
    },
    "FINDPEOPLE_LOG_LEVEL": {
        "description": "Log level for the log file",
        "default": "INFO",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
    },
}
