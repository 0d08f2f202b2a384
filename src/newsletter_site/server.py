"""
uvicorn integration.

uvicorn answers any exception raised before a response has started with its
own ``500 Internal Server Error``. A request aborted by
:class:`~newsletter_site.shared.body_limit.BodyLimitMiddleware` must get no
response at all, so the HTTP protocol used by :func:`newsletter_site.main.run`
drops the connection instead.
"""

from __future__ import annotations

from typing import Any

from starlette.types import ASGIApp, Receive, Scope, Send
from uvicorn.protocols.http.h11_impl import H11Protocol

from newsletter_site.shared.exceptions import PayloadTooLargeError


class AbortingH11Protocol(H11Protocol):
    """h11 protocol that resets the connection on :class:`PayloadTooLargeError`."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.app = self._abort_on_oversized_body(self.app)

    def _abort_on_oversized_body(self, app: ASGIApp) -> ASGIApp:
        async def wrapped(scope: Scope, receive: Receive, send: Send) -> None:
            try:
                await app(scope, receive, send)
            except PayloadTooLargeError:
                # Marking the cycle disconnected stops uvicorn from writing
                # its fallback 500 once we return.
                if self.cycle is not None:
                    self.cycle.disconnected = True
                self.transport.abort()

        return wrapped
