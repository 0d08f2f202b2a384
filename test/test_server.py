"""
End-to-end tests against a real uvicorn server on a loopback socket.
"""

from __future__ import annotations

import asyncio
import socket
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
import uvicorn

from newsletter_site.config import Settings
from newsletter_site.email.mock_provider import MockEmailProvider
from newsletter_site.main import create_app
from newsletter_site.server import AbortingH11Protocol

IO_TIMEOUT = 10.0


def _raw_request(method: str, path: str, body: bytes = b"", close: bool = False) -> bytes:
    lines = [
        f"{method} {path} HTTP/1.1",
        "Host: 127.0.0.1",
        "Content-Type: application/json",
        f"Content-Length: {len(body)}",
    ]
    if close:
        lines.append("Connection: close")
    return ("\r\n".join(lines) + "\r\n\r\n").encode() + body


async def _exchange(port: int, request: bytes) -> bytes:
    """Send a raw request and read until the server closes the connection."""
    reader, writer = await asyncio.open_connection("127.0.0.1", port)
    chunks: list[bytes] = []
    try:
        try:
            writer.write(request)
            await writer.drain()
        except ConnectionError:
            pass

        try:
            while True:
                chunk = await asyncio.wait_for(reader.read(65536), timeout=IO_TIMEOUT)
                if not chunk:
                    break
                chunks.append(chunk)
        except ConnectionError:
            pass
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except ConnectionError:
            pass
    return b"".join(chunks)


@pytest_asyncio.fixture
async def live_server(
    make_settings: Callable[..., Settings],
    mock_provider: MockEmailProvider,
) -> AsyncGenerator[int, None]:
    """Serve the app with uvicorn and yield the bound port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]

    config = uvicorn.Config(
        create_app(settings=make_settings(), email_provider=mock_provider),
        http=AbortingH11Protocol,
        lifespan="off",
        log_config=None,
        log_level="warning",
    )
    server = uvicorn.Server(config)
    task = asyncio.create_task(server.serve(sockets=[sock]))

    async def _wait_started() -> None:
        while not server.started and not task.done():
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_wait_started(), timeout=IO_TIMEOUT)
    assert server.started

    try:
        yield port
    finally:
        server.should_exit = True
        await asyncio.wait_for(task, timeout=IO_TIMEOUT)
        sock.close()


class TestOversizedBodyOverRealServer:
    @pytest.mark.asyncio
    async def test_connection_dropped_without_status_line(
        self,
        live_server: int,
        mock_provider: MockEmailProvider,
    ) -> None:
        request = _raw_request("POST", "/api/subscribe", b"x" * 1_200_000)

        data = await _exchange(live_server, request)

        assert b"HTTP/1.1" not in data
        assert mock_provider.attempts == 0

    @pytest.mark.asyncio
    async def test_server_keeps_serving_after_abort(
        self,
        live_server: int,
        mock_provider: MockEmailProvider,
    ) -> None:
        await _exchange(live_server, _raw_request("POST", "/api/subscribe", b"x" * 1_200_000))

        body = b'{"email": "person@example.com"}'
        data = await _exchange(live_server, _raw_request("POST", "/api/subscribe", body, close=True))

        assert data.startswith(b"HTTP/1.1 200")
        assert data.endswith(b'{"ok":true}')
        assert mock_provider.attempts == 2

    @pytest.mark.asyncio
    async def test_body_at_cap_gets_a_response(self, live_server: int) -> None:
        payload = b'{"email": "person@example.com"}'
        body = payload + b" " * (1_000_000 - len(payload))

        data = await _exchange(live_server, _raw_request("POST", "/api/subscribe", body, close=True))

        assert data.startswith(b"HTTP/1.1 200")
        assert data.endswith(b'{"ok":true}')

    @pytest.mark.asyncio
    async def test_static_get_is_served(self, live_server: int) -> None:
        data = await _exchange(live_server, _raw_request("GET", "/", close=True))

        assert data.startswith(b"HTTP/1.1 200")
        assert b"text/html" in data
