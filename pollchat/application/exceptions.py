class ValidationError(ValueError):
    """Raised when a send request is missing its username or text."""


class CursorNotFoundError(LookupError):
    """Raised in strict mode when a cursor does not match any stored message."""

    def __init__(self, cursor: str) -> None:
        super().__init__(f"Unknown lastMessageId: {cursor}")
        self.cursor = cursor


class TransportError(RuntimeError):
    """Raised by the client when the server is unreachable or replies with garbage."""
