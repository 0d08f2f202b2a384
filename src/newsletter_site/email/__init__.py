"""
Email package.

Keep package import side-effects to a minimum; import providers from their
modules directly.
"""

__all__ = [
    "interface",
    "factory",
    "resend_provider",
    "mock_provider",
]
