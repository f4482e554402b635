"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from moneyflow.api.middleware import RequestIDMiddleware, MetricsMiddleware
from moneyflow.api.v1 import categories, dashboard, transactions
from moneyflow.infrastructure.observability.logging import setup_logging
from moneyflow.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Moneyflow Dashboard API",
        description="Monthly income/expense summaries, money-flow graph and transaction charts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "backend": settings.backend_mode}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(categories.router, prefix="/v1", tags=["reference"])

    return app


app = create_app()
