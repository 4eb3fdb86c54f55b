# sane_permalinks/app/main.py
from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

from fastapi import APIRouter, FastAPI

from sane_permalinks.app.config import get_settings
from sane_permalinks.app.web import CanonicalUrlBuilder, install_permalink_handlers


def configure_logging(level: Optional[str] = None) -> None:
    """Plain stdout logging, good for dev and containers."""
    logging.basicConfig(
        level=(level or get_settings().LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def create_app(
    url_for: CanonicalUrlBuilder,
    routers: Iterable[APIRouter] = (),
    redirect_status: Optional[int] = None,
) -> FastAPI:
    """Build an app whose routes may raise the permalink errors freely."""
    configure_logging()
    app = FastAPI(title="Sane Permalinks", version="0.1.0")

    for router in routers:
        app.include_router(router)
    install_permalink_handlers(app, url_for, redirect_status=redirect_status)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app
