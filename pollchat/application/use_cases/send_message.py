from __future__ import annotations

import logging

from pollchat.application.exceptions import ValidationError
from pollchat.application.ports.message_store import MessageStorePort
from pollchat.domain.entities.message import Message


class SendMessageUseCase:
    def __init__(self, store: MessageStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def execute(self, username: str | None, text: str | None) -> Message:
        if not _present(username) or not _present(text):
            self._logger.info(
                "Rejected message",
                extra={"username": username, "reason": "username and text are required"},
            )
            raise ValidationError("username and text are required.")

        message = self._store.append(username=username, text=text)
        self._logger.info("Message stored", extra={"message_id": message.id, "username": message.username})
        return message


def _present(value: str | None) -> bool:
    return bool(value)
