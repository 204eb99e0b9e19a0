"""API route modules."""
from api.routes.system import router as system_router
from api.routes.images import router as images_router

__all__ = [
    "system_router",
    "images_router",
]
