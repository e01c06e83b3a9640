from __future__ import annotations

import logging

from pollchat.application.ports.message_store import MessageStorePort
from pollchat.domain.entities.message_page import MessagePage


class ListMessagesUseCase:
    def __init__(self, store: MessageStorePort, strict_cursor: bool = False) -> None:
        self._store = store
        self._strict_cursor = strict_cursor
        self._logger = logging.getLogger(__name__)

    def execute(self, cursor: str | None) -> MessagePage:
        page = self._store.list_since(cursor, strict=self._strict_cursor)
        if page.messages:
            self._logger.debug(
                "Messages listed",
                extra={"cursor": cursor, "count": len(page.messages)},
            )
        return page
