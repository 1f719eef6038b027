"""
Transcript message model.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from medinfo.models.medicine import MedicineRecord


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


def generate_message_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class Message:
    """
    One transcript entry.

    Messages are immutable once created; the transcript that holds them is
    append-only and its insertion order is the display order.
    """

    role: Role
    content: str
    id: str = field(default_factory=generate_message_id)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    attached_record: Optional[MedicineRecord] = None
    is_pending: bool = False

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(
        cls, content: str, attached_record: Optional[MedicineRecord] = None
    ) -> "Message":
        return cls(role=Role.ASSISTANT, content=content, attached_record=attached_record)

    @classmethod
    def pending(cls) -> "Message":
        """Typing-indicator entry shown while a turn is awaiting its reply."""
        return cls(role=Role.ASSISTANT, content="", is_pending=True)
