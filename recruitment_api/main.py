"""
Recruitment API - FastAPI Application

Main entry point for the API server.
Run with: uvicorn recruitment_api.main:app --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recruitment_api.config.settings import settings
from recruitment_api.config.database import init_db
from recruitment_api.endpoints import api_router
from recruitment_api.middleware.error_handler import setup_exception_handlers
from recruitment_api.middleware.logging import LoggingMiddleware, configure_logging

# Configure structured logging
configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info(
        "Starting Recruitment API",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
    )

    if settings.AUTO_CREATE_TABLES:
        logger.info("Initializing database tables")
        try:
            init_db()
        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))

    yield

    logger.info("Shutting down Recruitment API")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Candidate registration synchronized with the legacy recruitment system",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

# Setup exception handlers
setup_exception_handlers(app)

# Add CORS middleware (outermost)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# Include API routes
app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "recruitment_api.main:app",
        host="0.0.0.0",
        port=3000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
