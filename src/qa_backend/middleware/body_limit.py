"""
Request body size limit middleware
"""

import logging
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

class BodySizeLimitMiddleware:
    """
    Rejects request bodies larger than max_body_size with 413

    Pure ASGI so that bodies sent without a Content-Length (chunked) are
    counted as they arrive, before anything downstream reads them.
    QA forms carry screenshot URLs, not files.
    """

    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")

        if content_length is not None:
            try:
                declared_size = int(content_length)
            except ValueError:
                await self._reject(scope, receive, send, 400, "Invalid Content-Length header")
                return

            if declared_size > self.max_body_size:
                self._log_rejection(scope, declared_size)
                await self._reject(scope, receive, send, 413, "Payload too large")
                return

            await self.app(scope, receive, send)
            return

        # No declared size: read at most max_body_size bytes, then replay them
        messages = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_body_size:
                self._log_rejection(scope, received)
                await self._reject(scope, receive, send, 413, "Payload too large")
                return
            more_body = message.get("more_body", False)

        async def replay_receive():
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay_receive, send)

    def _log_rejection(self, scope: Scope, size: int):
        logger.warning(
            f"Rejected {scope['method']} {scope['path']}: "
            f"body of {size} bytes exceeds {self.max_body_size}"
        )

    @staticmethod
    async def _reject(scope: Scope, receive: Receive, send: Send, status_code: int, error: str):
        response = JSONResponse(status_code=status_code, content={"success": False, "error": error})
        await response(scope, receive, send)
