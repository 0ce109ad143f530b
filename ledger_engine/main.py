"""
Ledger Engine — FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from ledger_engine.config import get_settings
from ledger_engine.logger import setup_logging
from ledger_engine.models.base import Base, SessionLocal, engine
from ledger_engine.services.books_service import BooksService
from ledger_engine.api.health import router as health_router
from ledger_engine.api.masters import router as masters_router
from ledger_engine.api.vouchers import router as vouchers_router
from ledger_engine.api.reports import router as reports_router

settings = get_settings()
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed an empty database before serving."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        BooksService(db).load()
        db.commit()
    finally:
        db.close()
    logger.info("{} {} started ({})", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry books, GST returns and reports over business vouchers",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(masters_router)
app.include_router(vouchers_router)
app.include_router(reports_router)
