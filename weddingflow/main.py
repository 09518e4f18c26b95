"""
WeddingFlow Seating - Main Application Entry Point
Seating engine for wedding floor plans
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import structlog

from weddingflow.core.config import get_settings
from weddingflow.core.database import init_db
from weddingflow.core.exceptions import InternalFailureError, SeatingError
from weddingflow.api import assignments, changes, floor_plans, relationships, tables, versions

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Initializing WeddingFlow seating backend", environment=settings.ENVIRONMENT)
    # Tables are created by Alembic migrations outside local development
    if settings.ENVIRONMENT == "development":
        init_db()
    else:
        logger.info("Database managed by Alembic migrations")

    yield

    # Shutdown
    logger.info("Shutting down WeddingFlow seating backend")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map seating errors to JSON responses.

        NotFoundError          -> 404
        CapacityExceededError  -> 409
        TableOccupiedError     -> 409
        SeatingValidationError -> 400
        ForbiddenError         -> 403
        InternalFailureError   -> 500, details withheld
    """

    @app.exception_handler(InternalFailureError)
    async def handle_internal_failure(request: Request, exc: InternalFailureError):
        logger.error("internal_failure", path=request.url.path, message=exc.message, cause=repr(exc.__cause__))
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": "An internal error occurred. Please try again later.",
                "details": {},
            },
        )

    @app.exception_handler(SeatingError)
    async def handle_seating_error(request: Request, exc: SeatingError):
        if exc.status_code >= 500:
            logger.error("seating_error", path=request.url.path, message=exc.message)
        else:
            logger.info("seating_request_rejected", path=request.url.path, error=exc.error_code)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.context,
            },
        )


# Create FastAPI application
app = FastAPI(
    title="WeddingFlow Seating API",
    description="Floor plans, table capacity, guest conflicts and seating versions",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(floor_plans.router, prefix=f"{settings.API_V1_PREFIX}/floor-plans", tags=["floor-plans"])
app.include_router(tables.router, prefix=f"{settings.API_V1_PREFIX}/floor-plans", tags=["tables"])
app.include_router(assignments.router, prefix=f"{settings.API_V1_PREFIX}/floor-plans", tags=["assignments"])
app.include_router(versions.router, prefix=f"{settings.API_V1_PREFIX}/floor-plans", tags=["versions"])
app.include_router(changes.router, prefix=f"{settings.API_V1_PREFIX}/floor-plans", tags=["changes"])
app.include_router(relationships.router, prefix=f"{settings.API_V1_PREFIX}/relationships", tags=["relationships"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "weddingflow-seating-api"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "weddingflow.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
