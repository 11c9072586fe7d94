"""API routes."""

from leadscope.web.routes.health_routes import router as health_router
from leadscope.web.routes.lead_routes import router as lead_router
from leadscope.web.routes.override_routes import router as override_router
from leadscope.web.routes.proxy_routes import router as proxy_router

__all__ = ["health_router", "lead_router", "override_router", "proxy_router"]
