"""Shared infrastructure: logging, exceptions, ASGI middleware."""
