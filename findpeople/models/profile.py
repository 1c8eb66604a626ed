"""User profile model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..utils.datetime_utils import parse_datetime


@dataclass(frozen=True)
class Profile:
    """A user identity record as returned by the directory.

    Only ``id``, ``username`` and ``display_name`` drive the search screen;
    the rest is shown on the profile detail view.
    """

    id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    is_verified: bool = False
    verification_status: str = "unverified"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_seen_at: Optional[datetime] = None

    @property
    def label(self) -> str:
        """Name to show a human: display name, else username, else id."""
        return self.display_name or self.username or self.id

    @property
    def handle(self) -> str:
        """``@username`` or an empty string."""
        return f"@{self.username}" if self.username else ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """Build a Profile from a directory row (snake_case keys)."""
        return cls(
            id=str(data["id"]),
            username=data.get("username"),
            display_name=data.get("display_name"),
            avatar_url=data.get("avatar_url"),
            bio=data.get("bio"),
            is_verified=bool(data.get("is_verified") or False),
            verification_status=data.get("verification_status") or "unverified",
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            last_seen_at=parse_datetime(data.get("last_seen_at")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
            "bio": self.bio,
            "is_verified": self.is_verified,
            "verification_status": self.verification_status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "last_seen_at": self.last_seen_at.isoformat() if self.last_seen_at else None,
        }
