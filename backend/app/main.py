"""FastAPI main application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.database import Database
from app.exceptions import StorageError, TenantApiError
from app.routers import (
    health_router,
    documents_router,
    tenant_router,
    admin_router,
)

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON in request body"
    loc = first.get("loc", ())
    if loc and loc[0] == "body" and first.get("type") == "missing":
        return "Request body must be a valid JSON object"
    field = ".".join(str(part) for part in loc[1:]) if len(loc) > 1 else "request"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the API as ``{"error": message}``."""

    @app.exception_handler(TenantApiError)
    async def tenant_api_error_handler(request: Request, exc: TenantApiError):
        if isinstance(exc, StorageError):
            logger.error(f"{request.method} {request.url.path} failed: {exc.__cause__}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        logging.basicConfig(level=settings.log_level.upper())
        database = Database.from_settings(settings)
        database.init()
        app.state.database = database
        logger.info(f"{settings.app_name} started")
        yield
        # Shutdown
        database.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant collections of schema-less JSON documents",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure properly in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(admin_router)
    app.include_router(tenant_router)
    app.include_router(documents_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "app": settings.app_name,
            "docs": "/docs",
            "health": "/health"
        }

    return app


app = create_app()
