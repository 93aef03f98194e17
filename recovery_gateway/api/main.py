"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from recovery_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from recovery_gateway.api.v1 import rules, evaluate, debtors, recovery, invoices
from recovery_gateway.infrastructure.observability.logging import setup_logging
from recovery_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Recovery Gateway",
        description="Collection category escalation, follow-up cadence and grace classification service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(rules.router, prefix="/v1", tags=["rules"])
    app.include_router(evaluate.router, prefix="/v1", tags=["evaluation"])
    app.include_router(debtors.router, prefix="/v1", tags=["debtors"])
    app.include_router(recovery.router, prefix="/v1", tags=["recovery"])
    app.include_router(invoices.router, prefix="/v1", tags=["invoices"])

    return app


app = create_app()
