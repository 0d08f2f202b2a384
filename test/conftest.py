"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from newsletter_site.config import EmailProviderType, Settings
from newsletter_site.email.mock_provider import MockEmailProvider
from newsletter_site.main import create_app

INDEX_HTML = b"<!doctype html><title>a68</title><h1>Hello</h1>"
STYLE_CSS = b"body { color: #111; }"


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """A small site under ``tmp_path/site`` plus a secret file next to it."""
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "style.css").write_bytes(STYLE_CSS)
    (root / "app.js").write_bytes(b"console.log('hi');")
    (root / "logo.PNG").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "notes.txt").write_bytes(b"plain notes")
    (root / "assets").mkdir()
    (root / "assets" / "photo.jpeg").write_bytes(b"\xff\xd8\xff\xe0")
    (root / "docs").mkdir()

    (tmp_path / "secret.txt").write_bytes(b"top secret")
    sibling = tmp_path / "site-private"
    sibling.mkdir()
    (sibling / "keys.txt").write_bytes(b"private keys")
    return root


@pytest.fixture
def make_settings(content_root: Path) -> Callable[..., Settings]:
    """Build deterministic settings; keyword overrides win."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "content_root": content_root,
            "email_provider": EmailProviderType.RESEND,
            "resend_api_key": "re_test_key_123456",
            "from_email": "Julian from a68 <julian@a68.io>",
            "owner_email": "owner@a68.io",
            "max_body_bytes": 1_000_000,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def test_settings(make_settings: Callable[..., Settings]) -> Settings:
    return make_settings()


@pytest.fixture
def mock_provider() -> MockEmailProvider:
    return MockEmailProvider()


@pytest.fixture
def make_client(
    mock_provider: MockEmailProvider,
) -> Callable[[Settings], AsyncClient]:
    """Create an ASGI-backed client for the given settings."""

    def _make(settings: Settings) -> AsyncClient:
        asgi_app = create_app(settings=settings, email_provider=mock_provider)
        transport = ASGITransport(app=asgi_app)
        return AsyncClient(transport=transport, base_url="http://test")

    return _make


@pytest_asyncio.fixture
async def async_client(
    make_client: Callable[[Settings], AsyncClient],
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API tests."""
    async with make_client(test_settings) as client:
        yield client
