"""
In-memory user directory.

Backs the TUI when no REST directory is configured and doubles as a
realistic fake in tests. Matching mirrors the REST backend: case-insensitive
substring on username or display name, current user excluded, capped at the
result limit, insertion order preserved.
"""

import asyncio
import logging
import uuid
from typing import Iterable, List, Optional

from ..config.constants import SEARCH_RESULT_LIMIT
from ..exceptions import ConnectionExistsError, DirectoryError, ProfileNotFoundError
from ..models import Connection, ConnectionStatus, Profile
from ..utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)

DEMO_USER_ID = "u-0000"

DEMO_PROFILES = (
    Profile(id=DEMO_USER_ID, username="me", display_name="You"),
    Profile(id="u-0001", username="alice", display_name="Alice Martin", is_verified=True,
            verification_status="verified", bio="Runs the Thursday climbing meetup."),
    Profile(id="u-0002", username="alvaro", display_name="Álvaro Ruiz",
            bio="Street photography, mostly at night."),
    Profile(id="u-0003", username="jdoe", display_name=None),
    Profile(id="u-0004", username="jane", display_name="Jane Doe", is_verified=True,
            verification_status="verified"),
    Profile(id="u-0005", username="sal", display_name="Sally Ng", bio="Board games and bad puns."),
    Profile(id="u-0006", username="kwame", display_name="Kwame Mensah"),
)


class InMemoryDirectoryService:
    """UserDirectoryService backed by a list of profiles."""

    def __init__(
        self,
        profiles: Iterable[Profile] = DEMO_PROFILES,
        current_user_id: Optional[str] = DEMO_USER_ID,
        latency: float = 0.0,
        result_limit: int = SEARCH_RESULT_LIMIT,
    ):
        self._profiles: List[Profile] = list(profiles)
        self.current_user_id = current_user_id
        self.latency = latency
        self.result_limit = result_limit
        self.connections: List[Connection] = []

    async def _simulate_latency(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)

    async def search_users(self, query: str) -> List[Profile]:
        await self._simulate_latency()

        needle = query.strip().lower()
        if not needle:
            return []

        matches = [
            profile
            for profile in self._profiles
            if profile.id != self.current_user_id
            and (
                needle in (profile.username or "").lower()
                or needle in (profile.display_name or "").lower()
            )
        ]
        logger.debug("Memory directory: %d match(es) for %r", len(matches), query)
        return matches[: self.result_limit]

    async def get_profile(self, user_id: str) -> Profile:
        await self._simulate_latency()
        for profile in self._profiles:
            if profile.id == user_id:
                return profile
        raise ProfileNotFoundError(user_id=user_id)

    def _existing_connection(self, other_id: str) -> Optional[Connection]:
        for connection in self.connections:
            if connection.involves(other_id) and connection.involves(self.current_user_id):
                return connection
        return None

    async def send_connection_request(self, user_id: str) -> Optional[Connection]:
        await self._simulate_latency()

        if self.current_user_id is None:
            raise DirectoryError("Not signed in")
        if user_id == self.current_user_id:
            raise DirectoryError("Cannot connect with yourself", user_id=user_id)
        if not any(profile.id == user_id for profile in self._profiles):
            raise ProfileNotFoundError(user_id=user_id)
        if self._existing_connection(user_id) is not None:
            raise ConnectionExistsError(user_id=user_id)

        now = utc_now()
        connection = Connection(
            id=str(uuid.uuid4()),
            requester_id=self.current_user_id,
            receiver_id=user_id,
            status=ConnectionStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        self.connections.append(connection)
        logger.info("Memory directory: connection request %s -> %s", self.current_user_id, user_id)
        return connection
