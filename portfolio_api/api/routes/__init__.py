from __future__ import annotations

from portfolio_api.api.routes.contact import router as contact_router
from portfolio_api.api.routes.health import router as health_router
from portfolio_api.api.routes.share import router as share_router

__all__ = ["contact_router", "health_router", "share_router"]
