"""Health check router."""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.database import Database, get_database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
def readiness_check(database: Database = Depends(get_database)):
    """Readiness check (DB connectivity)."""
    try:
        database.ping()
    except SQLAlchemyError as e:
        logger.error(f"Database readiness check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "checks": {"database": "error"}}
        )
    return {"status": "ready", "checks": {"database": "ok"}}
