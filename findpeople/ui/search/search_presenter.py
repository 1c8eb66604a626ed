"""
Presenter for the user search screen.

Owns the screen's state machine: editing the query, submitting a search,
reconciling its completion, and sending connection requests. The view only
reads SearchStateVM snapshots and forwards user intents here.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from findpeople.config.constants import NOTIFICATION_TIMEOUT_SECONDS
from findpeople.models import Profile
from findpeople.services.directory import UserDirectoryService

logger = logging.getLogger(__name__)


class DisplayMode(Enum):
    """Mutually exclusive things the results area can show."""

    INITIAL = "initial"  # Prompt, nothing searched yet or query cleared
    LOADING = "loading"  # Spinner, overrides everything else
    ERROR = "error"  # Message slot: failure or "no users found"
    RESULTS = "results"  # Profile list


@dataclass(frozen=True)
class SearchStateVM:
    """Immutable snapshot of the search screen state.

    ``no_matches`` marks a successful search that returned nothing. It shares
    the message slot with failures but is not a failure.
    """

    query: str = ""
    is_loading: bool = False
    results: tuple[Profile, ...] = ()
    error_message: str = ""
    no_matches: bool = False

    @property
    def display_mode(self) -> DisplayMode:
        if self.is_loading:
            return DisplayMode.LOADING
        if self.error_message:
            return DisplayMode.ERROR
        if self.results:
            return DisplayMode.RESULTS
        return DisplayMode.INITIAL

    @property
    def is_failure(self) -> bool:
        return bool(self.error_message) and not self.no_matches


@dataclass(frozen=True)
class Notification:
    """A transient message for the user (toast)."""

    message: str
    severity: str = "information"  # Textual severities: information, warning, error
    timeout: float = NOTIFICATION_TIMEOUT_SECONDS


class SearchPresenter:
    """
    Handles user search screen business logic.

    - Empty or whitespace queries never reach the directory
    - Overlapping searches are not de-duplicated; the last completion wins
    - Completions that arrive after unmount() are dropped
    """

    PROMPT = "Search for users by username or display name"

    def __init__(
        self,
        directory: UserDirectoryService,
        on_state_update: Callable[[SearchStateVM], Awaitable[None]] | None = None,
        on_notify: Callable[[Notification], Awaitable[None]] | None = None,
    ):
        self.directory = directory
        self.on_state_update = on_state_update
        self.on_notify = on_notify
        self._state = SearchStateVM()
        # Bumped on unmount; async work started under an older value is stale
        self._generation = 0
        self._mounted = False

    @property
    def state(self) -> SearchStateVM:
        """Get current state."""
        return self._state

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def generation(self) -> int:
        return self._generation

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> None:
        """Start a fresh screen lifetime with empty state."""
        self._mounted = True
        self._state = SearchStateVM()
        logger.debug("Search presenter mounted (generation %d)", self._generation)

    def unmount(self) -> None:
        """End the screen lifetime; in-flight completions will be discarded."""
        self._mounted = False
        self._generation += 1
        logger.debug("Search presenter unmounted (generation %d)", self._generation)

    def _is_stale(self, generation: int, operation: str) -> bool:
        if generation != self._generation:
            logger.debug("Discarding %s completion from generation %d", operation, generation)
            return True
        return False

    # ------------------------------------------------------------------
    # State plumbing
    # ------------------------------------------------------------------

    def _commit(self, **changes: Any) -> SearchStateVM:
        self._state = replace(self._state, **changes)
        return self._state

    async def _publish(self, **changes: Any) -> None:
        self._commit(**changes)
        if self.on_state_update:
            await self.on_state_update(self._state)

    async def _notify(self, notification: Notification) -> None:
        if self.on_notify:
            await self.on_notify(notification)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def set_query(self, text: str) -> SearchStateVM:
        """Record edited query text. Editing down to empty clears the screen."""
        if text == "":
            return self.clear()
        return self._commit(query=text)

    def clear(self) -> SearchStateVM:
        """Empty the query and drop results and messages. Always yields INITIAL."""
        return self._commit(
            query="", is_loading=False, results=(), error_message="", no_matches=False
        )

    async def search(self) -> None:
        """Search the directory for the current (trimmed) query."""
        query = self._state.query.strip()
        if not query:
            self._commit(is_loading=False, results=(), error_message="", no_matches=False)
            if self.on_state_update:
                await self.on_state_update(self._state)
            return

        generation = self._generation
        await self._publish(is_loading=True, error_message="", no_matches=False)

        try:
            results = await self.directory.search_users(query)
        except Exception as e:
            if self._is_stale(generation, "search"):
                return
            logger.error(f"Search for {query!r} failed: {e}")
            await self._publish(
                is_loading=False,
                no_matches=False,
                error_message=f"Error searching for users: {e}",
            )
            return

        if self._is_stale(generation, "search"):
            return

        results = tuple(results)
        logger.info("Search for %r returned %d profile(s)", query, len(results))
        if results:
            await self._publish(is_loading=False, results=results, error_message="", no_matches=False)
        else:
            await self._publish(
                is_loading=False,
                results=(),
                no_matches=True,
                error_message=f'No users found matching "{query}"',
            )

    async def send_connection_request(self, profile: Profile) -> None:
        """Ask the directory to connect with profile. Never touches search state."""
        generation = self._generation
        try:
            await self.directory.send_connection_request(profile.id)
        except Exception as e:
            if self._is_stale(generation, "connection request"):
                return
            logger.error(f"Connection request to {profile.id} failed: {e}")
            await self._notify(
                Notification(f"Error sending connection request: {e}", severity="error")
            )
            return

        if self._is_stale(generation, "connection request"):
            return

        logger.info("Connection request sent to %s", profile.id)
        await self._notify(Notification(f"Connection request sent to {profile.label}"))

    def result_at(self, index: int) -> Profile | None:
        """Get result at the given index."""
        if 0 <= index < len(self._state.results):
            return self._state.results[index]
        return None
