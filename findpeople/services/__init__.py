"""User directory backends."""

from typing import Optional

from ..config.settings import DirectorySettings, load_directory_settings
from .directory import UserDirectoryService
from .memory_directory import InMemoryDirectoryService
from .rest_directory import RestDirectoryService


def create_directory(settings: Optional[DirectorySettings] = None) -> UserDirectoryService:
    """Build the directory backend named by settings (or the environment)."""
    settings = settings or load_directory_settings()
    if settings.backend == "rest":
        return RestDirectoryService(settings)
    if settings.user_id:
        return InMemoryDirectoryService(
            current_user_id=settings.user_id, result_limit=settings.result_limit
        )
    return InMemoryDirectoryService(result_limit=settings.result_limit)


__all__ = [
    "InMemoryDirectoryService",
    "RestDirectoryService",
    "UserDirectoryService",
    "create_directory",
]
