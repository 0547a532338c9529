"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.logging import configure_logging
from infrastructure.settings import get_isolation_settings, get_settings
from infrastructure.version import __version__
from isolation.dependencies import configure_identifier_interning


@asynccontextmanager
async def isolation_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - structlog configuration
    - identifier registry selection from isolation settings
    """
    configure_logging()
    configure_identifier_interning(get_isolation_settings())
    yield


app = FastAPI(
    title=get_settings().app_name,
    description="Multi-level data isolation for multi-tenant platforms",
    version=__version__,
    lifespan=isolation_lifespan,
)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
