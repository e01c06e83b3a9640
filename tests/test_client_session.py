"""
Tests for the polling client state machine, poller and rendering.
"""

from __future__ import annotations

import threading
from datetime import timezone

import pytest

from pollchat.application.exceptions import TransportError
from pollchat.client.poller import Poller
from pollchat.client.render import escape_text, render_message
from pollchat.client.session import ChatSession, ConnectionStatus, SessionState
from pollchat.domain.entities.message import Message
from pollchat.domain.entities.message_page import MessagePage
from pollchat.infrastructure.store.memory_store import MemoryMessageStore


class StoreBackedApi:
    """Fake API that talks to a store directly, with switchable failures."""

    def __init__(self, store: MemoryMessageStore) -> None:
        self.store = store
        self.fail_fetch = False
        self.fail_send = False
        self.fetch_cursors: list[str | None] = []
        self.sent: list[tuple[str, str]] = []

    def fetch_messages(self, cursor: str | None) -> MessagePage:
        self.fetch_cursors.append(cursor)
        if self.fail_fetch:
            raise TransportError("connection refused")
        return self.store.list_since(cursor)

    def send_message(self, username: str, text: str) -> Message:
        if self.fail_send:
            raise TransportError("username and text are required.")
        self.sent.append((username, text))
        return self.store.append(username, text)


@pytest.fixture
def fake_api(store):
    return StoreBackedApi(store)


@pytest.fixture
def session(fake_api):
    lines: list[str] = []
    alerts: list[str] = []
    s = ChatSession(fake_api, on_line=lines.append, on_alert=alerts.append, interval=60.0)
    s.lines = lines
    s.alerts = alerts
    yield s
    s.close()


def test_starts_unauthenticated_and_ignores_input(session, fake_api):
    assert session.state is SessionState.unauthenticated
    assert session.input_enabled is False

    assert session.send("hello") is False
    assert session.poll_once() == []
    assert fake_api.sent == []
    assert fake_api.fetch_cursors == []


def test_blank_username_keeps_unauthenticated(session):
    assert session.set_username("   ") is False
    assert session.state is SessionState.unauthenticated


def test_set_username_activates_and_fetches_immediately(session, fake_api, store):
    store.append("bob", "earlier")

    assert session.set_username("  alice ") is True

    assert session.state is SessionState.active
    assert session.username == "alice"
    assert session.input_enabled is True
    assert fake_api.fetch_cursors == [None]
    assert len(session.lines) == 1 and "bob: earlier" in session.lines[0]
    assert session.status is ConnectionStatus.ok


def test_poll_advances_cursor_and_renders_only_new(session, fake_api, store):
    session.set_username("alice")
    first = store.append("bob", "one")
    second = store.append("alice", "two")

    new = session.poll_once()

    assert new == [first, second]
    assert session.cursor == second.id
    assert session.poll_once() == []
    assert session.cursor == second.id
    assert fake_api.fetch_cursors[-1] == second.id
    assert session.lines[-1].startswith("*")


def test_send_does_not_render_until_next_poll(session, fake_api):
    session.set_username("alice")

    assert session.send("  hi there ") is True
    assert fake_api.sent == [("alice", "hi there")]
    assert session.lines == []

    session.poll_once()
    assert len(session.lines) == 1
    assert "alice: hi there" in session.lines[0]


def test_send_rejects_blank_text(session, fake_api):
    session.set_username("alice")

    assert session.send("   ") is False
    assert fake_api.sent == []


def test_send_failure_alerts(session, fake_api):
    session.set_username("alice")
    fake_api.fail_send = True

    assert session.send("hi") is False
    assert session.alerts == ["Send failed: username and text are required."]


def test_fetch_failure_sets_error_and_recovers(session, fake_api, store):
    session.set_username("alice")
    fake_api.fail_fetch = True

    assert session.poll_once() == []
    assert session.status is ConnectionStatus.error

    fake_api.fail_fetch = False
    store.append("bob", "back")
    assert len(session.poll_once()) == 1
    assert session.status is ConnectionStatus.ok


def test_poller_ticks_until_stopped():
    calls = []
    done = threading.Event()

    def tick():
        calls.append(1)
        if len(calls) >= 3:
            done.set()

    poller = Poller(tick, interval=0.01)
    poller.start()
    try:
        assert done.wait(2.0)
    finally:
        poller.stop()

    assert poller.is_running is False
    count = len(calls)
    done.wait(0.05)
    assert len(calls) == count


def test_poller_survives_failing_tick():
    calls = []
    done = threading.Event()

    def tick():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        done.set()

    poller = Poller(tick, interval=0.01)
    poller.start()
    try:
        assert done.wait(2.0)
    finally:
        poller.stop()


def test_poller_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        Poller(lambda: None, interval=0)


def test_session_background_polling_picks_up_messages(fake_api, store):
    lines: list[str] = []
    arrived = threading.Event()

    def on_line(line: str) -> None:
        lines.append(line)
        arrived.set()

    session = ChatSession(fake_api, on_line=on_line, interval=0.01)
    try:
        session.set_username("alice")
        store.append("bob", "pushed later")
        assert arrived.wait(2.0)
    finally:
        session.close()

    assert "bob: pushed later" in lines[0]


def test_render_message_marks_own_and_formats_time():
    message = Message(id="1", username="alice", text="hi", timestamp=0)

    assert render_message(message, "alice", tz=timezone.utc) == "*[00:00] alice: hi"
    assert render_message(message, "bob", tz=timezone.utc) == " [00:00] alice: hi"


def test_render_escapes_control_sequences():
    message = Message(id="1", username="eve\x1b[2J", text="line1\nline2\x07", timestamp=0)

    line = render_message(message, None, tz=timezone.utc)

    assert "\x1b" not in line
    assert "\n" not in line
    assert line == " [00:00] eve\\x1b[2J: line1\\nline2\\x07"


def test_escape_text_keeps_printable_unicode():
    assert escape_text("こんにちは <b>") == "こんにちは <b>"
