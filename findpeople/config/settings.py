"""Configuration utilities for findpeople."""

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..exceptions import ConfigurationError
from .constants import (
    ENV_VAR_DEFINITIONS,
    MAX_REQUEST_RETRIES,
    REQUEST_TIMEOUT_SECONDS,
    SEARCH_RESULT_LIMIT,
)


@dataclass(frozen=True)
class DirectorySettings:
    """Everything a directory backend needs to talk to its store."""

    backend: str = "memory"
    api_url: Optional[str] = None
    api_key: Optional[str] = None
    user_id: Optional[str] = None
    result_limit: int = SEARCH_RESULT_LIMIT
    timeout: float = REQUEST_TIMEOUT_SECONDS
    max_retries: int = MAX_REQUEST_RETRIES


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None  # Unknown vars are always valid

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")

    if value is None or valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all findpeople environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Args:
        name: The environment variable name.
        validate: Whether to validate the value against known definitions.

    Returns:
        The environment variable value, its default, or None.

    Raises:
        ConfigurationError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error, setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def get_env_info() -> Dict[str, Dict]:
    """Describe every findpeople environment variable, masking secrets."""
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        is_valid, _ = validate_env_var(name, value)

        display_value = value
        if value and definition.get("sensitive"):
            display_value = value[:4] + "..." if len(value) > 4 else "***"

        info[name] = {
            "description": definition.get("description", ""),
            "value": display_value,
            "is_set": value is not None,
            "valid": is_valid,
            "default": definition.get("default"),
            "sensitive": definition.get("sensitive", False),
        }
    return info


def load_directory_settings(backend: Optional[str] = None) -> DirectorySettings:
    """Build DirectorySettings from the environment.

    Args:
        backend: Override for FINDPEOPLE_BACKEND (e.g. from a CLI flag).

    Raises:
        ConfigurationError: On invalid values, or when the REST backend is
            selected without a URL and key.
    """
    if backend is not None:
        is_valid, error = validate_env_var("FINDPEOPLE_BACKEND", backend)
        if not is_valid:
            raise ConfigurationError(error, setting="backend")
        chosen = backend.lower()
    else:
        chosen = (get_env_var("FINDPEOPLE_BACKEND") or "memory").lower()

    settings = DirectorySettings(
        backend=chosen,
        api_url=get_env_var("FINDPEOPLE_API_URL"),
        api_key=get_env_var("FINDPEOPLE_API_KEY"),
        user_id=get_env_var("FINDPEOPLE_USER_ID"),
    )

    if settings.backend == "rest":
        if not settings.api_url:
            raise ConfigurationError(
                "REST backend requires an API URL", setting="FINDPEOPLE_API_URL"
            )
        if not settings.api_key:
            raise ConfigurationError(
                "REST backend requires an API key", setting="FINDPEOPLE_API_KEY"
            )

    return settings
