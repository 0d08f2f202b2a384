"""
Catch-all static asset route.

Registered after every API router so that any path not claimed elsewhere is
served from the content root.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response, StreamingResponse

from newsletter_site.config import Settings
from newsletter_site.dependencies import get_app_settings
from newsletter_site.shared.exceptions import ForbiddenPathError, StaticFileNotFoundError
from newsletter_site.shared.logging import get_logger
from newsletter_site.static.resolver import iter_file, open_static_file

logger = get_logger(__name__)

router = APIRouter(tags=["static"])

# An empty method set matches every verb, TRACE and extension methods included.
ANY_METHOD: list[str] = []


@router.api_route("/{path:path}", methods=ANY_METHOD, include_in_schema=False, operation_id="serve_static")
async def serve_static(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Response:
    # scope["path"] is already percent-decoded by the server
    request_path = request.scope["path"]

    try:
        static_file = await open_static_file(
            settings.content_root,
            request_path,
            settings.index_document,
        )
    except ForbiddenPathError:
        logger.info("Static path outside content root", extra={"request_path": request_path})
        return PlainTextResponse("Forbidden", status_code=403)
    except StaticFileNotFoundError:
        return PlainTextResponse("Not found", status_code=404)

    headers = {"Content-Length": str(static_file.size)}
    if request.method == "HEAD":
        return Response(status_code=200, headers=headers, media_type=static_file.content_type)

    return StreamingResponse(
        iter_file(static_file.path),
        status_code=200,
        headers=headers,
        media_type=static_file.content_type,
    )
