"""
Application configuration with environment-driven settings.

Settings are read once at startup and are immutable for the lifetime of the
process. Handlers get them from ``app.state`` rather than module globals.
"""

from enum import Enum
from functools import lru_cache
import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmailProviderType(str, Enum):
    """Supported transactional email providers."""

    RESEND = "resend"
    MOCK = "mock"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = "newsletter-site"
    app_env: Literal["dev", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = Field(default="0.0.0.0", description="Interface uvicorn binds to")
    port: int = Field(default=3000, ge=1, le=65535)

    # Static content
    content_root: Path = Field(
        default_factory=Path.cwd,
        description="Directory static assets are served from",
    )
    index_document: str = Field(
        default="index.html",
        description="Document served for the root path",
    )

    # Subscribe endpoint
    max_body_bytes: int = Field(
        default=1_000_000,
        ge=1,
        description="Hard cap on request body size; larger bodies abort the request",
    )

    # Email provider
    email_provider: EmailProviderType = Field(default=EmailProviderType.RESEND)
    resend_api_key: str | None = Field(default=None, description="Resend API key")
    resend_api_url: str = Field(default="https://api.resend.com/emails")
    from_email: str = Field(default="Julian from a68 <julian@a68.io>")
    owner_email: str = Field(
        default="julian@a68.io",
        description="Address notified on every new signup",
    )

    @field_validator("content_root", mode="after")
    @classmethod
    def absolute_content_root(cls, v: Path) -> Path:
        """Anchor relative roots at the working directory, without resolving symlinks."""
        return Path(os.path.abspath(v))

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return str(v).strip().upper()

    @property
    def has_email_credentials(self) -> bool:
        """True when the selected provider can send; the mock provider needs no key."""
        if self.email_provider == EmailProviderType.MOCK:
            return True
        return bool(self.resend_api_key and self.resend_api_key.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
