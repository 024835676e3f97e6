"""
Request body size limit.

Runs before routing, so oversized bodies never reach a handler. A declared
Content-Length over the limit is rejected without reading anything; bodies
without one (chunked) are buffered up to the limit and rejected as soon as
they exceed it.
"""

import logging

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    def __init__(self, app: ASGIApp, max_body_size: int = 10 * 1024):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None and content_length.isdigit():
            if int(content_length) > self.max_body_size:
                await self._reject(scope, receive, send)
                return

        body = b""
        trailing = []
        while True:
            message = await receive()
            if message["type"] != "http.request":
                trailing.append(message)
                break
            body += message.get("body", b"")
            if len(body) > self.max_body_size:
                await self._reject(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        pending = [{"type": "http.request", "body": body, "more_body": False}] + trailing

        async def replay() -> Message:
            if pending:
                return pending.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        logger.warning("Rejected oversized request body on %s %s", scope.get("method"), scope.get("path"))
        response = JSONResponse(
            {"error": "Request body too large"},
            status_code=413,
        )
        await response(scope, receive, send)
