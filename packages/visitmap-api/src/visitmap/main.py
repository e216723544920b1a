"""FastAPI application factory and entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from visitmap import __version__
from visitmap.config import Settings, get_settings
from visitmap.routers import health, visitors
from visitmap.services.visit_log import VisitLog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    # Startup
    settings: Settings = app.state.settings
    logging.basicConfig(
        level=logging.DEBUG if settings.environment == "development" else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting visitmap API v%s in %s mode", __version__, settings.environment)

    # Reject an unbounded visit log in production
    settings.validate_production()

    if app.state.visit_log.max_records is None:
        logger.warning("Visit log is unbounded; memory use grows with every visit")

    yield

    # Shutdown
    logger.info("visitmap API shut down with %d visits in memory", len(app.state.visit_log))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Each application owns exactly one VisitLog, reachable from request
    handlers through ``visitmap.dependencies.get_visit_log``.
    """
    if settings is None:
        settings = get_settings()

    # Interactive docs only in development
    docs_url = "/docs" if settings.environment == "development" else None
    redoc_url = "/redoc" if settings.environment == "development" else None
    openapi_url = "/openapi.json" if settings.environment == "development" else None

    app = FastAPI(
        title="visitmap API",
        description="Visitor IP and country tracking",
        version=__version__,
        lifespan=lifespan,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
    )
    app.state.settings = settings
    app.state.visit_log = VisitLog(max_records=settings.visit_log_max_records)

    origins = [o.strip() for o in settings.cors_origins.split(",")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Security headers middleware; visitor lists must never be cached
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Cache-Control"] = "no-store"
        return response

    # Include routers
    app.include_router(health.router)
    app.include_router(visitors.router)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "visitmap.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=(settings.environment == "development"),
    )


if __name__ == "__main__":
    run()
