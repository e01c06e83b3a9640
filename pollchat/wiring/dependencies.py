from fastapi import Depends

from pollchat.core.config import settings
from pollchat.application.ports.message_store import MessageStorePort
from pollchat.application.use_cases.list_messages import ListMessagesUseCase
from pollchat.application.use_cases.send_message import SendMessageUseCase
from pollchat.infrastructure.store.memory_store import MemoryMessageStore


_message_store: MessageStorePort | None = None


def get_message_store() -> MessageStorePort:
    global _message_store
    if _message_store is None:
        _message_store = MemoryMessageStore(recent_limit=settings.RECENT_LIMIT)
    return _message_store


def get_send_message_use_case(
    store: MessageStorePort = Depends(get_message_store),
) -> SendMessageUseCase:
    return SendMessageUseCase(store=store)


def get_list_messages_use_case(
    store: MessageStorePort = Depends(get_message_store),
) -> ListMessagesUseCase:
    return ListMessagesUseCase(store=store, strict_cursor=settings.strict_cursor())
