"""
Static file resolution under a fixed content root.

Resolution order matters for traversal safety: the request path is
percent-decoded by the server first, then joined and normalised, and only
then compared against the root.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator

import anyio

from newsletter_site.shared.exceptions import ForbiddenPathError, StaticFileNotFoundError

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: dict[str, str] = {
    ".html": "text/html; charset=utf-8",
    ".js": "text/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
}

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class StaticFile:
    """A resolved, existing regular file ready to be streamed."""

    path: str
    content_type: str
    size: int


def content_type_for(path: str | Path) -> str:
    ext = os.path.splitext(str(path))[1].lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)


def is_within_root(root: str, candidate: str) -> bool:
    """Component-wise containment check on normalised paths."""
    root = os.path.normpath(root)
    if candidate == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return candidate.startswith(prefix)


def resolve_static_path(
    root: str | Path,
    request_path: str,
    index_document: str = "index.html",
) -> str:
    """Map a decoded URL path to an absolute filesystem path under ``root``.

    Raises:
        ForbiddenPathError: The normalised path escapes the root.
    """
    root_str = os.path.normpath(str(root))
    if request_path in ("", "/"):
        request_path = "/" + index_document

    candidate = os.path.normpath(os.path.join(root_str, request_path.lstrip("/")))
    if not is_within_root(root_str, candidate):
        raise ForbiddenPathError()
    return candidate


async def open_static_file(
    root: str | Path,
    request_path: str,
    index_document: str = "index.html",
) -> StaticFile:
    """Resolve ``request_path`` and stat it.

    Raises:
        ForbiddenPathError: The path escapes the root.
        StaticFileNotFoundError: The path does not exist or is not a regular file.
    """
    resolved = resolve_static_path(root, request_path, index_document)
    if "\x00" in resolved:
        raise StaticFileNotFoundError()

    try:
        st = await anyio.Path(resolved).stat()
    except OSError:
        raise StaticFileNotFoundError() from None

    if not stat.S_ISREG(st.st_mode):
        raise StaticFileNotFoundError()

    return StaticFile(path=resolved, content_type=content_type_for(resolved), size=st.st_size)


async def iter_file(path: str, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Stream a file in chunks without loading it into memory."""
    async with await anyio.open_file(path, "rb") as f:
        while True:
            chunk = await f.read(chunk_size)
            if not chunk:
                break
            yield chunk
