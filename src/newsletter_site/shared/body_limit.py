"""
Request body size cap enforced at the ASGI layer.

The cap is applied while the application reads the body, so requests whose
body is never read (static assets) cost nothing. Once the cap is exceeded
the request is aborted: the application is not allowed to answer, and the
error is raised to the ASGI server. Under uvicorn,
:class:`~newsletter_site.server.AbortingH11Protocol` then drops the
connection.
"""

from __future__ import annotations

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from newsletter_site.shared.exceptions import PayloadTooLargeError
from newsletter_site.shared.logging import get_logger

logger = get_logger(__name__)


class BodyLimitMiddleware:
    """Abort any HTTP request whose body grows past ``max_body_bytes``.

    Must wrap the application from the outside (around Starlette's own
    error middleware), otherwise a 500 page would be rendered for the
    aborted request.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        received = 0
        aborted = False

        async def limited_receive() -> Message:
            nonlocal received, aborted
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    aborted = True
                    raise PayloadTooLargeError(self.max_body_bytes, received)
            return message

        async def guarded_send(message: Message) -> None:
            if aborted:
                return
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except PayloadTooLargeError:
            logger.warning(
                "Request body too large; aborting request",
                extra={
                    "path": scope.get("path"),
                    "limit": self.max_body_bytes,
                    "received": received,
                },
            )
            raise
