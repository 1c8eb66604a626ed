"""
REST user directory.

Talks to a PostgREST-style API (as exposed by Supabase) with two tables:

- ``profiles``: id, username, display_name, avatar_url, bio, ...
- ``connections``: id, requester_id, receiver_id, status, created_at, updated_at

HTTP goes through a blocking ``requests.Session`` run in a worker thread, so
the event loop driving the TUI never stalls on the network.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from ..config.constants import RETRY_MAX_BACKOFF_SECONDS, RETRY_MIN_BACKOFF_SECONDS
from ..config.settings import DirectorySettings
from ..exceptions import (
    ApiAuthenticationError,
    ApiConnectionError,
    ApiError,
    ApiRateLimitError,
    ConfigurationError,
    ConnectionExistsError,
    ProfileNotFoundError,
)
from ..models import Connection, ConnectionStatus, Profile
from ..utils.datetime_utils import utc_now_iso
from ..utils.retry import retry

logger = logging.getLogger(__name__)


def _quote(value: str) -> str:
    """Quote a value for use inside a PostgREST ``or=(...)`` filter."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _error_detail(response: requests.Response) -> str:
    """Best-effort human message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason or ""
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


class RestDirectoryService:
    """UserDirectoryService backed by a PostgREST API."""

    def __init__(
        self,
        settings: DirectorySettings,
        session: Optional[requests.Session] = None,
    ):
        if not settings.api_url or not settings.api_key:
            raise ConfigurationError("REST directory needs an API URL and key", setting="api_url")

        self.settings = settings
        self._base_url = settings.api_url.rstrip("/") + "/rest/v1"
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "apikey": settings.api_key,
                "Authorization": f"Bearer {settings.api_key}",
                "Accept": "application/json",
            }
        )
        # Reads are idempotent and safe to retry; inserts are sent once
        self._request_with_retry = retry(
            max_retries=settings.max_retries,
            min_backoff=RETRY_MIN_BACKOFF_SECONDS,
            max_backoff=RETRY_MAX_BACKOFF_SECONDS,
        )(self._request)

    # ------------------------------------------------------------------
    # HTTP plumbing (runs in worker threads)
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send one request and return its decoded JSON body.

        Raises:
            ApiConnectionError: Network failure or timeout.
            ApiAuthenticationError: 401/403.
            ApiRateLimitError: 429.
            ApiError: Any other non-2xx response or undecodable body.
        """
        try:
            response = self._session.request(
                method,
                f"{self._base_url}/{table}",
                params=params,
                json=payload,
                headers=headers,
                timeout=self.settings.timeout,
            )
        except requests.Timeout as e:
            raise ApiConnectionError("Directory request timed out", service=table) from e
        except requests.ConnectionError as e:
            raise ApiConnectionError("Could not reach the directory", service=table) from e
        except requests.RequestException as e:
            raise ApiError(f"Directory request failed: {e}", service=table) from e

        status = response.status_code
        if status in (401, 403):
            raise ApiAuthenticationError(_error_detail(response) or "Not authorized", service=table)
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            try:
                retry_seconds = float(retry_after) if retry_after else None
            except ValueError:
                retry_seconds = None
            raise ApiRateLimitError(service=table, retry_after=retry_seconds)
        if status >= 400:
            raise ApiError(_error_detail(response) or "Directory request failed",
                           status_code=status, service=table)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Directory returned invalid JSON", status_code=status, service=table) from e

    def _call(
        self,
        method: str,
        table: str,
        *,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GETs go through the retry wrapper; writes are sent exactly once."""
        request = self._request_with_retry if method == "GET" else self._request
        return request(method, table, params, payload, headers)

    def _require_user(self) -> str:
        if not self.settings.user_id:
            raise ApiAuthenticationError("Not signed in", service="directory")
        return self.settings.user_id

    # ------------------------------------------------------------------
    # Synchronous operations
    # ------------------------------------------------------------------

    def search_users_sync(self, query: str) -> List[Profile]:
        query = query.strip()
        if not query:
            return []
        user_id = self._require_user()
        pattern = _quote(f"*{query}*")
        rows = self._call(
            "GET",
            "profiles",
            params={
                "select": "*",
                "or": f"(username.ilike.{pattern},display_name.ilike.{pattern})",
                "id": f"neq.{user_id}",
                "limit": str(self.settings.result_limit),
            },
        )
        profiles = [Profile.from_dict(row) for row in rows or []]
        logger.debug("REST directory: %d profile(s) for %r", len(profiles), query)
        return profiles

    def get_profile_sync(self, user_id: str) -> Profile:
        rows = self._call(
            "GET",
            "profiles",
            params={"select": "*", "id": f"eq.{user_id}", "limit": "1"},
        )
        if not rows:
            raise ProfileNotFoundError(user_id=user_id)
        return Profile.from_dict(rows[0])

    def connection_status_sync(self, other_user_id: str) -> Optional[ConnectionStatus]:
        """Status of any connection between us and other_user_id, in either direction."""
        user_id = self._require_user()
        rows = self._call(
            "GET",
            "connections",
            params={
                "select": "*",
                "or": (
                    f"(and(requester_id.eq.{user_id},receiver_id.eq.{other_user_id}),"
                    f"and(requester_id.eq.{other_user_id},receiver_id.eq.{user_id}))"
                ),
                "limit": "1",
            },
        )
        if not rows:
            return None
        return Connection.from_dict(rows[0]).status

    def send_connection_request_sync(self, user_id: str) -> Optional[Connection]:
        requester_id = self._require_user()

        existing = self.connection_status_sync(user_id)
        if existing is not None:
            raise ConnectionExistsError(user_id=user_id, status=existing.value)

        now = utc_now_iso()
        rows = self._call(
            "POST",
            "connections",
            payload={
                "requester_id": requester_id,
                "receiver_id": user_id,
                "status": ConnectionStatus.PENDING.value,
                "created_at": now,
                "updated_at": now,
            },
            headers={"Prefer": "return=representation"},
        )
        logger.info("REST directory: connection request %s -> %s", requester_id, user_id)
        if isinstance(rows, list) and rows:
            return Connection.from_dict(rows[0])
        return None

    # ------------------------------------------------------------------
    # UserDirectoryService
    # ------------------------------------------------------------------

    async def search_users(self, query: str) -> List[Profile]:
        return await asyncio.to_thread(self.search_users_sync, query)

    async def get_profile(self, user_id: str) -> Profile:
        return await asyncio.to_thread(self.get_profile_sync, user_id)

    async def send_connection_request(self, user_id: str) -> Optional[Connection]:
        return await asyncio.to_thread(self.send_connection_request_sync, user_id)

    def close(self) -> None:
        self._session.close()
