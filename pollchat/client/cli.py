from __future__ import annotations

import argparse

from pollchat.client.api_client import ChatApiClient
from pollchat.client.session import ChatSession
from pollchat.core.config import settings
from pollchat.core.log_format import configure_logging


def _print_header(base_url: str, username: str) -> None:
    print("\nPolling Chat")
    print("-" * 60)
    print(f"server: {base_url}")
    print(f"username: {username}")
    print("Type your message and press Enter.")
    print("Commands: /status, /help, /quit")
    print("-" * 60)


def _ask_username() -> str | None:
    while True:
        try:
            name = input("Username: ").strip()
        except (EOFError, KeyboardInterrupt):
            return None
        if name:
            return name


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Terminal client for the polling chat server")
    parser.add_argument("--url", default=settings.API_BASE_URL)
    parser.add_argument("--username", default="")
    parser.add_argument("--interval", type=float, default=settings.POLL_INTERVAL_SECONDS)
    args = parser.parse_args(argv)

    configure_logging("WARNING")

    username = args.username.strip() or _ask_username()
    if not username:
        print("\nBye!")
        return

    api = ChatApiClient(args.url, timeout=settings.HTTP_TIMEOUT_SECONDS)
    session = ChatSession(api, interval=args.interval)
    _print_header(args.url, username)
    session.set_username(username)

    try:
        while True:
            try:
                line = input()
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                return

            cmd = line.strip().lower()
            if cmd in ("/quit", "/exit"):
                print("Bye!")
                return
            if cmd == "/help":
                print("Commands:")
                print("  /status -> show connection status and cursor")
                print("  /quit   -> exit")
                continue
            if cmd == "/status":
                print(f"status: {session.status.value} cursor: {session.cursor}")
                continue

            session.send(line)
    finally:
        session.close()
        api.close()


if __name__ == "__main__":
    main()
