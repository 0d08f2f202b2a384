"""Application wiring and lifespan tests."""

import logging
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from newsletter_site import main
from newsletter_site.config import Settings
from newsletter_site.email.mock_provider import MockEmailProvider
from newsletter_site.main import create_app, create_fastapi_app
from newsletter_site.server import AbortingH11Protocol
from newsletter_site.shared.body_limit import BodyLimitMiddleware


class ClosingMockProvider(MockEmailProvider):
    def __init__(self) -> None:
        super().__init__()
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True


class TestCreateApp:
    def test_wrapped_in_body_limit(self, test_settings: Settings) -> None:
        asgi_app = create_app(settings=test_settings, email_provider=MockEmailProvider())

        assert isinstance(asgi_app, BodyLimitMiddleware)
        assert asgi_app.max_body_bytes == test_settings.max_body_bytes

    def test_state_holds_settings_and_provider(self, test_settings: Settings) -> None:
        provider = MockEmailProvider()
        app = create_fastapi_app(settings=test_settings, email_provider=provider)

        assert app.state.settings is test_settings
        assert app.state.email_provider is provider

    def test_docs_are_disabled(self, test_settings: Settings) -> None:
        app = create_fastapi_app(settings=test_settings, email_provider=MockEmailProvider())

        assert app.docs_url is None
        assert app.openapi_url is None


class TestRun:
    def test_uses_aborting_protocol(
        self, monkeypatch: pytest.MonkeyPatch, test_settings: Settings
    ) -> None:
        calls: list[tuple[tuple, dict]] = []
        monkeypatch.setattr(main, "get_settings", lambda: test_settings)
        monkeypatch.setattr(main.uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))

        main.run()

        assert len(calls) == 1
        args, kwargs = calls[0]
        assert args == ("newsletter_site.main:app",)
        assert kwargs["http"] is AbortingH11Protocol
        assert kwargs["port"] == test_settings.port


class TestLifespan:
    def test_serves_and_closes_provider(self, make_settings: Callable[..., Settings]) -> None:
        provider = ClosingMockProvider()
        asgi_app = create_app(settings=make_settings(), email_provider=provider)

        root = logging.getLogger()
        previous_handlers, previous_level = root.handlers[:], root.level
        try:
            with TestClient(asgi_app) as client:
                resp = client.get("/")
                assert resp.status_code == 200
                assert provider.closed is False
        finally:
            root.handlers = previous_handlers
            root.setLevel(previous_level)

        assert provider.closed is True
