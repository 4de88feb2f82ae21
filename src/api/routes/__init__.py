"""API route modules."""

from .health import router as health_router
from .shadow_hours import router as shadow_hours_router

__all__ = ["health_router", "shadow_hours_router"]
