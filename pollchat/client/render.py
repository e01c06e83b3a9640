from __future__ import annotations

from datetime import datetime, tzinfo

from pollchat.domain.entities.message import Message


def escape_text(value: str) -> str:
    """Make user text safe to print: control and other non-printable characters become visible escapes."""
    return "".join(
        ch if ch.isprintable() else ch.encode("unicode_escape").decode("ascii")
        for ch in value
    )


def format_time(timestamp_ms: int, tz: tzinfo | None = None) -> str:
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz)
    return dt.strftime("%H:%M")


def render_message(message: Message, current_username: str | None, tz: tzinfo | None = None) -> str:
    marker = "*" if current_username is not None and message.username == current_username else " "
    return (
        f"{marker}[{format_time(message.timestamp, tz)}] "
        f"{escape_text(message.username)}: {escape_text(message.text)}"
    )
