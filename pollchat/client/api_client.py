from __future__ import annotations

import logging
from typing import Any

import httpx

from pollchat.application.exceptions import TransportError
from pollchat.domain.entities.message import Message
from pollchat.domain.entities.message_page import MessagePage


class ChatApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    def send_message(self, username: str, text: str) -> Message:
        payload = {"username": username, "text": text}
        data = self._request("POST", "/messages", json=payload)
        try:
            return Message.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed message in response: {e}") from e

    def fetch_messages(self, cursor: str | None) -> MessagePage:
        params = {"lastMessageId": cursor or ""}
        data = self._request("GET", "/messages", params=params)
        try:
            messages = tuple(Message.from_dict(m) for m in data.get("messages") or [])
            last_id = data.get("lastMessageId")
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed message page in response: {e}") from e
        return MessagePage(messages=messages, last_message_id=None if last_id is None else str(last_id))

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {path} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            self._logger.error(
                "Non-JSON response",
                extra={"status": resp.status_code, "reason": resp.text[:200]},
            )
            raise TransportError(f"Invalid JSON from {path} (HTTP {resp.status_code})") from e

        if not isinstance(body, dict) or not body.get("success") or "data" not in body:
            error = body.get("error") if isinstance(body, dict) else None
            raise TransportError(error or f"Request to {path} failed (HTTP {resp.status_code})")

        return body["data"]
