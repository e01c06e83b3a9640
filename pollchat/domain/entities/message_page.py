from __future__ import annotations

from dataclasses import dataclass

from pollchat.domain.entities.message import Message


@dataclass(frozen=True)
class MessagePage:
    messages: tuple[Message, ...] = ()
    last_message_id: str | None = None
