from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from pollchat.api.schemas import (
    ErrorResponseSchema,
    MessageResponseSchema,
    MessageSchema,
    MessagesPageResponseSchema,
    MessagesPageSchema,
    SendMessageRequestSchema,
)
from pollchat.application.exceptions import CursorNotFoundError, ValidationError
from pollchat.application.use_cases.list_messages import ListMessagesUseCase
from pollchat.application.use_cases.send_message import SendMessageUseCase
from pollchat.wiring.dependencies import get_list_messages_use_case, get_send_message_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponseSchema(error=error).model_dump(),
    )


@router.post(
    "/messages",
    status_code=201,
    response_model=MessageResponseSchema,
    responses={400: {"model": ErrorResponseSchema}},
)
def send_message(
    req: SendMessageRequestSchema,
    uc: SendMessageUseCase = Depends(get_send_message_use_case),
):
    try:
        message = uc.execute(username=req.username, text=req.text)
    except ValidationError as e:
        return error_response(400, str(e))

    return MessageResponseSchema(data=MessageSchema.from_entity(message))


@router.get(
    "/messages",
    response_model=MessagesPageResponseSchema,
    response_model_by_alias=True,
    responses={404: {"model": ErrorResponseSchema}},
)
def list_messages(
    last_message_id: str | None = Query(None, alias="lastMessageId"),
    uc: ListMessagesUseCase = Depends(get_list_messages_use_case),
):
    try:
        page = uc.execute(last_message_id)
    except CursorNotFoundError as e:
        logger.warning("Unknown cursor", extra={"cursor": e.cursor})
        return error_response(404, str(e))

    return MessagesPageResponseSchema(data=MessagesPageSchema.from_entity(page))
