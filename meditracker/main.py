from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from contextlib import asynccontextmanager
import uvicorn
import logging
import sys

from meditracker.core.config import settings
from meditracker.core.database_utils import check_database_connection, get_db_session
from meditracker.db.base import Base
from meditracker import models  # noqa: F401  (registers tables on Base.metadata)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting up MediTracker Backend...")

    # Check database tables
    try:
        from sqlalchemy import inspect

        with get_db_session() as db:
            inspector = inspect(db.bind)
            existing_tables = inspector.get_table_names()
            required_tables = [table.name for table in Base.metadata.tables.values()]
            missing_tables = [table for table in required_tables if table not in existing_tables]

            if missing_tables:
                logger.warning(f"Missing database tables: {missing_tables}")
                logger.warning("Please run the database setup script before starting the server:")
                logger.warning("python scripts/setup_database.py")
            else:
                logger.info("All required database tables exist")
    except Exception as e:
        logger.warning(f"Could not check database tables: {e}")

    if not settings.google_calendar_configured:
        logger.info("ℹ️ [Startup] Google Calendar OAuth client not configured; calendar sync disabled")

    yield

    logger.info("✅ MediTracker Backend shutdown complete")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="MediTracker - appointments, medicines and health records with email and calendar reminders",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"CORS configured for {settings.ENVIRONMENT.value} environment with origins: {settings.allowed_cors_origins}")

    from meditracker.api.v1.api import api_router

    app.include_router(api_router, prefix=settings.API_V1_STR)

    if settings.METRICS_ENABLED:
        from prometheus_fastapi_instrumentator import Instrumentator

        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    return app


# Create the FastAPI app instance
app = create_application()


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint that redirects to API documentation"""
    return RedirectResponse(url=f"{settings.API_V1_STR}/docs")


@app.get("/health", tags=["Health Check"])
def health_check():
    db_ok = check_database_connection()
    return {
        "status": "healthy" if db_ok else "degraded",
        "version": settings.VERSION,
        "project": settings.PROJECT_NAME,
        "database": "healthy" if db_ok else "unhealthy",
    }


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Global HTTP exception handler"""
    logger.error(f"HTTP {exc.status_code}: {exc.detail} - {request.url}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc} - {request.url}")
    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "message": "Internal server error",
            "status_code": 500,
        },
    )


if __name__ == "__main__":
    uvicorn.run(
        "meditracker.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.is_development,
    )
