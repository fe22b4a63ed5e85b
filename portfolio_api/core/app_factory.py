"""Application factory for the portfolio API.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated instances.
"""

from __future__ import annotations

from fastapi import FastAPI

from portfolio_api.api.routes import contact_router, health_router, share_router
from portfolio_api.core.config import settings
from portfolio_api.core.exception_handlers import setup_exception_handlers
from portfolio_api.core.logging import configure_logging
from portfolio_api.core.middleware import contact_cors_middleware, request_id_middleware
from portfolio_api.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Portfolio API",
        description=(
            "Serverless handlers for the portfolio site: a rate-limited "
            "contact-form email relay and crawler-aware share links."
        ),
        version="0.1.0",
        debug=settings.app.debug,
    )

    # Middleware (last registered runs outermost)
    app.middleware("http")(contact_cors_middleware)
    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(contact_router)
    app.include_router(share_router)
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
