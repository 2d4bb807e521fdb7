"""
SupportFlow FastAPI Application

Thin HTTP surface over the classification engine.
"""

from contextlib import asynccontextmanager
from datetime import datetime

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from supportflow.api.routes import admin, health, tickets
from supportflow.config import settings
from supportflow.exceptions import ClassificationFailedError, ConfigurationError
from supportflow.observability import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()
    logger.info("Starting SupportFlow API", environment=settings.environment)

    if not settings.has_llm_credentials:
        logger.warning("No LLM credentials configured; classification requests will fail")

    yield

    logger.info("SupportFlow API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="SupportFlow API",
        description="""
## SupportFlow - Support Ticket Classification

Classifies free-text support tickets with a language model under a strict
output contract:

- **Structured classification**: category, priority, severity, impact, urgency
- **Output repair**: malformed model output degrades to a flagged default
- **Retries**: transient model failures are retried with exponential backoff
- **Confidence gate**: low-confidence results are flagged for manual review
- **Batch processing**: per-ticket failures never abort a batch

### API Sections

- `/api/v1/tickets` - Classification and batch processing
- `/api/v1/admin` - Runtime configuration and memory management
        """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = datetime.now()

        response = await call_next(request)

        duration_ms = (datetime.now() - start_time).total_seconds() * 1000

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        return response

    @app.exception_handler(ClassificationFailedError)
    async def classification_failed_handler(request: Request, exc: ClassificationFailedError):
        return JSONResponse(
            status_code=502,
            content={"error": "Classification failed", "message": exc.message, **exc.details},
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error("Configuration error", path=request.url.path, error=exc.message)
        return JSONResponse(
            status_code=503,
            content={"error": "Service misconfigured", "message": exc.message},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc) if settings.debug else "An unexpected error occurred",
            },
        )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(tickets.router, prefix="/api/v1/tickets", tags=["Tickets"])
    app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "supportflow.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
