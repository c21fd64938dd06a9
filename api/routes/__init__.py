"""
API route modules.
"""

from api.routes.items import router as items_router
from api.routes.health import router as health_router

__all__ = ["items_router", "health_router"]
