"""Connection model: a request or link between two users."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..utils.datetime_utils import parse_datetime


class ConnectionStatus(Enum):
    """Lifecycle of a connection between two users."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    BLOCKED = "blocked"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ConnectionStatus":
        """Parse a status string; unknown values count as pending."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.PENDING


@dataclass(frozen=True)
class Connection:
    """Represents a connection row."""

    id: str
    requester_id: str
    receiver_id: str
    status: ConnectionStatus = ConnectionStatus.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status is ConnectionStatus.PENDING

    @property
    def is_accepted(self) -> bool:
        return self.status is ConnectionStatus.ACCEPTED

    def involves(self, user_id: str) -> bool:
        """Check if the connection is with a specific user."""
        return user_id in (self.requester_id, self.receiver_id)

    def other_user_id(self, current_user_id: str) -> str:
        """Id of the user on the other end from current_user_id."""
        if self.requester_id == current_user_id:
            return self.receiver_id
        return self.requester_id

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Connection":
        return cls(
            id=str(data["id"]),
            requester_id=str(data["requester_id"]),
            receiver_id=str(data["receiver_id"]),
            status=ConnectionStatus.parse(data.get("status")),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "requester_id": self.requester_id,
            "receiver_id": self.receiver_id,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
