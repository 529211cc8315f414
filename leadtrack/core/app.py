"""FastAPI application factory for the lead tracker API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leadtrack.api.router_auth import router as auth_router
from leadtrack.api.router_health import router as health_router
from leadtrack.api.router_leads import router as leads_router
from leadtrack.api.router_sso import dev_router as sso_dev_router
from leadtrack.api.router_sso import router as sso_router
from leadtrack.core.settings import AuthSettings
from leadtrack.db.engine import dispose_engine

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    settings = AuthSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        await dispose_engine()

    app = FastAPI(
        title="Lead Tracker API",
        version="0.1.0",
        lifespan=lifespan,
    )

    origins = settings.get_cors_origin_list()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT"],
            allow_headers=["Authorization", "Content-Type"],
        )

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(sso_router)
    app.include_router(leads_router)
    if settings.enable_dev_routes:
        app.include_router(sso_dev_router)
    else:
        logger.info("Development SSO token route disabled")

    return app
