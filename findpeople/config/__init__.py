"""Configuration for findpeople: constants, environment settings, UI prefs."""

from .settings import (
    DirectorySettings,
    get_env_info,
    get_env_var,
    load_directory_settings,
    validate_all_env_vars,
    validate_env_var,
)

__all__ = [
    "DirectorySettings",
    "get_env_info",
    "get_env_var",
    "load_directory_settings",
    "validate_all_env_vars",
    "validate_env_var",
]
