"""HTTP routers: the public lookup group and the session-gated panel group."""
from .panel import router as panel_router
from .public import router as public_router

__all__ = ["panel_router", "public_router"]
