"""
The user directory the search screen talks to.

Backends implement UserDirectoryService. Every call is async and may raise;
callers decide how failures are shown.
"""

from typing import List, Optional, Protocol, runtime_checkable

from ..models import Connection, Profile


@runtime_checkable
class UserDirectoryService(Protocol):
    """Protocol for user directory backends."""

    async def search_users(self, query: str) -> List[Profile]:
        """Profiles whose username or display name matches query, in server order."""
        ...

    async def send_connection_request(self, user_id: str) -> Optional[Connection]:
        """Ask user_id to connect with the signed-in user."""
        ...

    async def get_profile(self, user_id: str) -> Profile:
        """Full profile for user_id."""
        ...
