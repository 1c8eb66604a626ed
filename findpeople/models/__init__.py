"""Data models for findpeople."""

from .connection import Connection, ConnectionStatus
from .profile import Profile

__all__ = ["Connection", "ConnectionStatus", "Profile"]
