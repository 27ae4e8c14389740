"""Application factory for FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated instances.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from xeoos.api.routes import (
    feed_router,
    health_router,
    messages_router,
    posts_router,
    tasks_router,
    users_router,
)
from xeoos.core.config import settings
from xeoos.core.exception_handlers import setup_exception_handlers
from xeoos.core.logging import configure_logging
from xeoos.core.middleware import locale_middleware, request_id_middleware
from xeoos.core.openapi import apply_openapi_customizations
from xeoos.db.session import init_db

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.db.create_tables:
        init_db()
    logger.info("app.started", extra={"env": settings.app_env})
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="XEO OS API",
        description=(
            "Multilingual forum backend: posts and replies are translated into "
            "ten locales by an external worker. Includes likes, notifications, "
            "search, per-IP rate limiting and JWT authentication."
        ),
        version="0.1.0",
        contact={
            "name": "XEO OS",
            "url": "https://xeoos.net",
        },
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
        lifespan=lifespan,
    )

    # Middleware (the last registered runs first)
    app.middleware("http")(locale_middleware)
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    for router in (users_router, posts_router, tasks_router, messages_router, feed_router):
        app.include_router(router, prefix=API_PREFIX)
    app.include_router(health_router)

    # OpenAPI customizations (security scheme, tags, exemptions)
    apply_openapi_customizations(app)

    return app
