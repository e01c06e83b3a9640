from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Protocol

from pollchat.application.exceptions import TransportError
from pollchat.client.poller import Poller
from pollchat.client.render import render_message
from pollchat.domain.entities.message import Message
from pollchat.domain.entities.message_page import MessagePage


class ChatApi(Protocol):
    def send_message(self, username: str, text: str) -> Message: ...

    def fetch_messages(self, cursor: str | None) -> MessagePage: ...


class SessionState(str, Enum):
    unauthenticated = "unauthenticated"
    active = "active"


class ConnectionStatus(str, Enum):
    unknown = "unknown"
    ok = "ok"
    error = "error"


class ChatSession:
    """
    Client-side chat state.

    Unauthenticated until a non-empty username is set. Entering Active
    fetches once immediately and starts the poller. Sent messages are not
    echoed locally; the next poll picks them up.
    """

    def __init__(
        self,
        api: ChatApi,
        on_line: Callable[[str], None] = print,
        on_alert: Callable[[str], None] = print,
        interval: float = 3.0,
    ) -> None:
        self._api = api
        self._on_line = on_line
        self._on_alert = on_alert
        self._interval = interval
        self._poll_lock = threading.Lock()
        self._poller: Poller | None = None
        self._logger = logging.getLogger(__name__)

        self.state = SessionState.unauthenticated
        self.username: str | None = None
        self.cursor: str | None = None
        self.status = ConnectionStatus.unknown

    @property
    def input_enabled(self) -> bool:
        return self.state is SessionState.active

    def set_username(self, name: str) -> bool:
        username = (name or "").strip()
        if not username:
            return False

        self.username = username
        if self.state is SessionState.active:
            return True

        self.state = SessionState.active
        self.poll_once()
        self._poller = Poller(self.poll_once, self._interval)
        self._poller.start()
        return True

    def poll_once(self) -> list[Message]:
        if self.state is not SessionState.active:
            return []

        with self._poll_lock:
            try:
                page = self._api.fetch_messages(self.cursor)
            except TransportError as e:
                self._set_status(ConnectionStatus.error, reason=str(e))
                return []

            self._set_status(ConnectionStatus.ok)
            for message in page.messages:
                self._on_line(render_message(message, self.username))
            self.cursor = page.last_message_id
            return list(page.messages)

    def send(self, text: str) -> bool:
        """Post text as the current user. True means the caller may clear its input."""
        if not self.input_enabled:
            return False
        body = (text or "").strip()
        if body == "":
            return False

        try:
            self._api.send_message(username=self.username or "", text=body)
        except TransportError as e:
            self._on_alert(f"Send failed: {e}")
            return False
        return True

    def close(self) -> None:
        if self._poller is not None:
            self._poller.stop()
            self._poller = None

    def _set_status(self, status: ConnectionStatus, reason: str | None = None) -> None:
        if status is not self.status:
            if status is ConnectionStatus.error:
                self._logger.warning("Connection lost", extra={"status": status.value, "reason": reason})
            else:
                self._logger.info("Connection status changed", extra={"status": status.value})
        self.status = status
