"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from loanready.api.middleware import RequestIDMiddleware, MetricsMiddleware
from loanready.api.v1 import businesses, directors, documents, funding
from loanready.infrastructure.database.session import init_db
from loanready.infrastructure.observability.logging import setup_logging
from loanready.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="LoanReady Gateway",
        description="Business onboarding, profile completion scoring and funding requests",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    if settings.auto_create_tables:
        init_db()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(businesses.router, prefix="/v1", tags=["businesses"])
    app.include_router(directors.router, prefix="/v1", tags=["directors"])
    app.include_router(documents.router, prefix="/v1", tags=["documents"])
    app.include_router(funding.router, prefix="/v1", tags=["funding"])

    return app


app = create_app()
