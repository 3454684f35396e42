"""API routers."""
from app.routers.health import router as health_router
from app.routers.documents import router as documents_router
from app.routers.tenant import router as tenant_router
from app.routers.admin import router as admin_router

__all__ = [
    "health_router",
    "documents_router",
    "tenant_router",
    "admin_router",
]
