import logging
from typing import Any

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from pollchat.api.messages import error_response, router as messages_router
from pollchat.application.ports.message_store import MessageStorePort
from pollchat.core.config import settings
from pollchat.core.log_format import configure_logging
from pollchat.wiring.dependencies import get_message_store


configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Polling Chat", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(messages_router, tags=["messages"])


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Malformed request", extra={"reason": str(exc.errors()[:1])})
    return error_response(400, "Request body must be JSON with string username and text.")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.get("/health")
def health(store: MessageStorePort = Depends(get_message_store)) -> dict[str, Any]:
    return {"status": "ok", "messages": store.count()}


def run() -> None:
    logger.info("Server listening on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
