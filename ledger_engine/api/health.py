"""
Health check endpoint.

Reports whether the service is up and whether the books
database answers a trivial query.
"""

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledger_engine.config import get_settings
from ledger_engine.models.base import get_db

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Service status plus database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.error("Database health check failed: {}", e)
        db_status = "unhealthy"

    settings = get_settings()
    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "ledger-engine",
        "version": settings.APP_VERSION,
        "database": db_status,
    }
