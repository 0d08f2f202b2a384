"""
FastAPI dependencies resolving per-app singletons from ``app.state``.
"""

from fastapi import Request

from newsletter_site.config import Settings
from newsletter_site.email.interface import EmailProvider


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_email_provider(request: Request) -> EmailProvider:
    return request.app.state.email_provider
