from abc import ABC, abstractmethod

from pollchat.domain.entities.message import Message
from pollchat.domain.entities.message_page import MessagePage


class MessageStorePort(ABC):
    @abstractmethod
    def append(self, username: str, text: str) -> Message:
        raise NotImplementedError

    @abstractmethod
    def list_since(self, cursor: str | None, strict: bool = False) -> MessagePage:
        """
        Return messages newer than cursor.
        A None or empty cursor yields the most recent page. An unknown cursor
        yields the whole store, or raises CursorNotFoundError when strict.
        """
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError
