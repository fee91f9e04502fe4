"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fico_simulator.api.dependencies import get_request_id
from fico_simulator.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fico_simulator.api.v1 import score, analyze, simulations
from fico_simulator.infrastructure.observability.logging import setup_logging
from fico_simulator.config import settings

setup_logging(settings.log_level)


async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything the routers did not translate becomes a logged 500"""
    logging.exception(
        f"Unhandled error on {request.method} {request.url.path}",
        extra={"request_id": get_request_id(request)},
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app() -> FastAPI:
    """Build the simulator API: scoring, report analysis and simulation sessions"""
    app = FastAPI(
        title="FICO Score Simulator",
        description="Credit score estimation, what-if adjustments and goal simulation",
        version="0.1.0",
    )

    # Starlette runs the last-added middleware first, so request ids exist before timing starts
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_exception_handler(Exception, unhandled_error)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(score.router, prefix="/v1", tags=["scores"])
    app.include_router(analyze.router, prefix="/v1", tags=["analysis"])
    app.include_router(simulations.router, prefix="/v1", tags=["simulations"])

    return app


app = create_app()
