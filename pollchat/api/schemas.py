from pydantic import BaseModel, ConfigDict, Field

from pollchat.domain.entities.message import Message
from pollchat.domain.entities.message_page import MessagePage


class SendMessageRequestSchema(BaseModel):
    # Optional so that missing fields reach the use case and come back as 400.
    username: str | None = None
    text: str | None = None


class MessageSchema(BaseModel):
    id: str
    username: str
    text: str
    timestamp: int

    @staticmethod
    def from_entity(message: Message) -> "MessageSchema":
        return MessageSchema(**message.to_dict())


class MessagesPageSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[MessageSchema] = Field(default_factory=list)
    last_message_id: str | None = Field(default=None, alias="lastMessageId")

    @staticmethod
    def from_entity(page: MessagePage) -> "MessagesPageSchema":
        return MessagesPageSchema(
            messages=[MessageSchema.from_entity(m) for m in page.messages],
            last_message_id=page.last_message_id,
        )


class MessageResponseSchema(BaseModel):
    success: bool = True
    data: MessageSchema


class MessagesPageResponseSchema(BaseModel):
    success: bool = True
    data: MessagesPageSchema


class ErrorResponseSchema(BaseModel):
    success: bool = False
    error: str
