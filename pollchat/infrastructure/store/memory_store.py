from __future__ import annotations

import threading
import time
from typing import Callable

from pollchat.application.exceptions import CursorNotFoundError
from pollchat.application.ports.message_store import MessageStorePort
from pollchat.domain.entities.message import Message
from pollchat.domain.entities.message_page import MessagePage


def _now_ms() -> int:
    return int(time.time() * 1000)


class MemoryMessageStore(MessageStorePort):
    def __init__(self, recent_limit: int = 50, clock: Callable[[], int] = _now_ms) -> None:
        self._messages: list[Message] = []
        self._positions: dict[str, int] = {}
        self._last_id_value: int | None = None
        self._recent_limit = recent_limit
        self._clock = clock
        self._lock = threading.Lock()

    def append(self, username: str, text: str) -> Message:
        with self._lock:
            timestamp = int(self._clock())
            message = Message(
                id=self._next_id(timestamp),
                username=username,
                text=text,
                timestamp=timestamp,
            )
            self._positions[message.id] = len(self._messages)
            self._messages.append(message)
            return message

    def list_since(self, cursor: str | None, strict: bool = False) -> MessagePage:
        with self._lock:
            if not cursor:
                selected = self._messages[-self._recent_limit :] if self._recent_limit > 0 else []
            else:
                position = self._positions.get(cursor)
                if position is None:
                    if strict:
                        raise CursorNotFoundError(cursor)
                    # Unknown cursor: resend everything
                    selected = list(self._messages)
                else:
                    selected = self._messages[position + 1 :]

            last_id = selected[-1].id if selected else (cursor or None)
            return MessagePage(messages=tuple(selected), last_message_id=last_id)

    def count(self) -> int:
        with self._lock:
            return len(self._messages)

    def _next_id(self, timestamp: int) -> str:
        """Timestamp-derived id, bumped past the previous one within the same millisecond."""
        value = timestamp
        if self._last_id_value is not None and value <= self._last_id_value:
            value = self._last_id_value + 1
        self._last_id_value = value
        return str(value)
