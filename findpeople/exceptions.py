"""Custom exception hierarchy for findpeople.

Errors raised by directory backends are caught at the screen boundary and
shown to the user, so every type here carries a readable message plus
optional context that ends up in the rendered text.

Exception Hierarchy:
    FindPeopleError (base)
    ├── ApiError - HTTP calls to the user directory
    │   ├── ApiConnectionError (retryable)
    │   ├── ApiRateLimitError (retryable)
    │   └── ApiAuthenticationError
    ├── DirectoryError - Directory level refusals
    │   ├── ProfileNotFoundError
    │   └── ConnectionExistsError
    └── ConfigurationError - Settings/configuration issues

Usage:
    from findpeople.exceptions import ApiConnectionError

    try:
        response = session.get(url, timeout=10)
    except requests.ConnectionError as e:
        raise ApiConnectionError("Directory unreachable", service="profiles") from e
"""

from typing import Any, Optional


class FindPeopleError(Exception):
    """Base exception for all findpeople errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., IDs, status codes)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# API Errors
# =============================================================================


class ApiError(FindPeopleError):
    """Base exception for calls to the directory API."""

    def __init__(
        self,
        message: str = "Directory API request failed",
        *,
        status_code: Optional[int] = None,
        **context: Any,
    ) -> None:
        if status_code is not None:
            context["status_code"] = status_code
        super().__init__(message, **context)


class ApiConnectionError(ApiError):
    """Failed to reach the directory API - typically retryable."""

    def __init__(
        self,
        message: str = "API connection failed",
        *,
        service: Optional[str] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        super().__init__(message, retryable=True, **context)


class ApiRateLimitError(ApiError):
    """Hit the directory's rate limit - retryable with backoff."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        *,
        service: Optional[str] = None,
        retry_after: Optional[float] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        if retry_after is not None:
            context["retry_after"] = retry_after
        super().__init__(message, retryable=True, **context)


class ApiAuthenticationError(ApiError):
    """The directory rejected our credentials, or we have none."""

    def __init__(
        self,
        message: str = "API authentication failed",
        *,
        service: Optional[str] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        super().__init__(message, retryable=False, **context)


# =============================================================================
# Directory Errors
# =============================================================================


class DirectoryError(FindPeopleError):
    """The directory understood the request but refused it."""

    pass


class ProfileNotFoundError(DirectoryError):
    """No profile exists for the given user id."""

    def __init__(
        self,
        message: str = "Profile not found",
        *,
        user_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if user_id:
            context["user_id"] = user_id
        super().__init__(message, **context)


class ConnectionExistsError(DirectoryError):
    """A connection (pending or otherwise) already links the two users."""

    def __init__(
        self,
        message: str = "A connection already exists with this user",
        *,
        user_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if user_id:
            context["user_id"] = user_id
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(FindPeopleError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
