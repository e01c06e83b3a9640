from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Message:
    id: str
    username: str
    text: str
    timestamp: int  # epoch milliseconds

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "text": self.text,
            "timestamp": self.timestamp,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Message":
        return Message(
            id=str(data["id"]),
            username=str(data["username"]),
            text=str(data["text"]),
            timestamp=int(data["timestamp"]),
        )
