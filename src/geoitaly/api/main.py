"""geoitaly API: FastAPI application over a GeoCatalog.

Run:
    uvicorn geoitaly.api.main:app --reload
    # or
    geoitaly-api
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from dataclasses import asdict

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from geoitaly.api.routes import router
from geoitaly.api.schemas import HealthResponse, StatsResponse
from geoitaly.catalog import GeoCatalog
from geoitaly.config import settings
from geoitaly.observability.logging import correlation_id, setup_logging

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the catalog on startup unless one was injected.

    A dataset that fails to load aborts startup: the service never runs on
    a partial catalog.
    """
    setup_logging(json_format=settings.log_json, level=settings.log_level)

    if app.state.catalog is None:
        logger.info("Loading catalog from %s", settings.data_dir)
        app.state.catalog = GeoCatalog.from_data_dir(settings.data_dir)

    logger.info("geoitaly API ready")
    yield
    logger.info("geoitaly API stopped")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID (client-supplied or fresh) and log its duration."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = correlation_id.set(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
            logger.debug(
                "%s %s handled", request.method, request.url.path,
                extra={"path": request.url.path, "duration_ms": elapsed_ms},
            )
            correlation_id.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def create_app(catalog: GeoCatalog | None = None) -> FastAPI:
    """Build the application; pass ``catalog`` to skip loading from disk."""
    app = FastAPI(
        title="geoitaly",
        description="Search and lookup over Italian regions, provinces and municipalities.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.catalog = catalog

    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request):
        """Reports "loading" until the catalog is in place, then its totals."""
        loaded = request.app.state.catalog
        if loaded is None:
            return HealthResponse(status="loading")
        return HealthResponse(status="healthy", stats=StatsResponse(**asdict(loaded.stats())))

    return app


app = create_app()


def run() -> None:
    """Entry point for the geoitaly-api console script."""
    uvicorn.run("geoitaly.api.main:app", host="0.0.0.0", port=8000)
