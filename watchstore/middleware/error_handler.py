"""
Error translation.

`domain_error_handler` turns the service error taxonomy into JSON responses
with the status each error declares. `ErrorHandlerMiddleware` is the outer
pure-ASGI safety net for anything that escapes as an unhandled exception.
"""
import json

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from watchstore.core.errors import DomainError
from watchstore.core.logging import get_logger

logger = get_logger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map a DomainError to `{"detail": ..., "type": ...}` with its status."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "Request failed",
        error=exc.message,
        error_type=type(exc).__name__,
        status_code=exc.status_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "type": type(exc).__name__},
    )


class ErrorHandlerMiddleware:
    """
    Pure ASGI error handler that catches unhandled exceptions
    and returns proper JSON 500 responses.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            if response_started:
                # Headers already sent, can't change the response
                logger.exception(
                    "Unhandled exception after response started",
                    error=str(e),
                    path=scope.get("path", "unknown"),
                )
                raise

            logger.exception(
                "Unhandled exception",
                error=str(e),
                path=scope.get("path", "unknown"),
            )

            body = json.dumps({
                "detail": "Internal server error",
                "type": type(e).__name__,
            }).encode("utf-8")

            await send({
                "type": "http.response.start",
                "status": 500,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(body)).encode()),
                ],
            })
            await send({
                "type": "http.response.body",
                "body": body,
            })
