"""
Request body size limit.

A declared ``Content-Length`` above the limit is refused before the
body is read.  Bodies without one (chunked uploads) are read here
message by message and refused as soon as the running total passes
the limit; otherwise the buffered messages are replayed to the app.
"""

import logging
from typing import List

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import PayloadTooLargeError

logger = logging.getLogger(__name__)

TOO_LARGE_MESSAGE = "Request entity too large. Please upload a smaller file (max 10MB)."


class BodySizeLimitMiddleware:
    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            length = Headers(scope=scope).get("content-length")
            if length is not None:
                if length.isdigit() and int(length) > self.max_body_bytes:
                    raise PayloadTooLargeError(TOO_LARGE_MESSAGE)
                await self.app(scope, receive, send)
                return
            buffered = await self._read_body(receive)
        except PayloadTooLargeError as exc:
            logger.warning("Refused %s %s: body above %d bytes", scope["method"], scope["path"], self.max_body_bytes)
            response = JSONResponse(status_code=exc.status_code, content={"error": exc.message})
            await response(scope, receive, send)
            return

        async def replay() -> Message:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _read_body(self, receive: Receive) -> List[Message]:
        messages: List[Message] = []
        total = 0
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                return messages
            total += len(message.get("body", b""))
            if total > self.max_body_bytes:
                raise PayloadTooLargeError(TOO_LARGE_MESSAGE)
            if not message.get("more_body", False):
                return messages
