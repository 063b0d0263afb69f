"""
Trailwalk API

FastAPI application for virtual trail walking from daily step counts.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trailwalk import __version__
from trailwalk.config import settings
from trailwalk.db.session import init_db
from trailwalk.api.v1.router import api_router
from trailwalk.shared.errors import (
    NonMonotonicDistanceError,
    NotEntitledError,
    RunAlreadyCompletedError,
    RunNotFoundError,
    TrailEngineError,
    UnknownTrailError,
)


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Trailwalk API...")
    init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="Trailwalk API",
    description="Walk famous trails with your daily steps",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Error Mapping ===
def status_for(exc: TrailEngineError) -> int:
    """HTTP status for an engine error."""
    if isinstance(exc, (UnknownTrailError, RunNotFoundError)):
        return 404
    if isinstance(exc, NotEntitledError):
        return 403
    if isinstance(exc, (NonMonotonicDistanceError, RunAlreadyCompletedError)):
        return 409
    return 400


@app.exception_handler(TrailEngineError)
async def engine_error_handler(request: Request, exc: TrailEngineError):
    status = status_for(exc)
    logger.info(f"{request.method} {request.url.path} rejected ({status}): {exc}")
    return JSONResponse(status_code=status, content={"detail": str(exc)})


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
