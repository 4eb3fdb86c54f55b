# sane_permalinks/app/web.py
"""
FastAPI integration: stale permalinks redirect, unknown ones answer 404.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from sane_permalinks.app.config import get_settings
from sane_permalinks.app.domain.errors import RecordNotFoundError, WrongPermalinkError

logger = logging.getLogger(__name__)

# (request, record, canonical_param) -> URL of the canonical page
CanonicalUrlBuilder = Callable[[Request, Any, str], str]


def install_permalink_handlers(
    app: FastAPI,
    url_for: CanonicalUrlBuilder,
    redirect_status: Optional[int] = None,
) -> None:
    """
    Register exception handlers for the permalink errors on ``app``.

    Args:
        app: The application
        url_for: Builds the canonical URL for a mismatched record
        redirect_status: HTTP status of the redirect (settings default: 301)
    """
    status_code = redirect_status or get_settings().PERMALINK_REDIRECT_STATUS

    async def wrong_permalink_handler(request: Request, exc: WrongPermalinkError) -> RedirectResponse:
        target = url_for(request, exc.record, exc.canonical_param)
        logger.info("Redirecting %s to canonical %s", request.url.path, target)
        return RedirectResponse(url=target, status_code=status_code)

    async def record_not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    app.add_exception_handler(WrongPermalinkError, wrong_permalink_handler)
    app.add_exception_handler(RecordNotFoundError, record_not_found_handler)
