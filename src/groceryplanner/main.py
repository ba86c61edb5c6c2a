"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from groceryplanner import __version__
from groceryplanner.config import get_settings
from groceryplanner.logging_config import configure_logging, get_logger
from groceryplanner.normalize.catalog import build_unit_catalog
from groceryplanner.routers import grocery_lists_router

settings = get_settings()

# Configure logging on module load
configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Starting Groceryplanner API")

    # Loaded lazily on first lookup
    app.state.unit_catalog = build_unit_catalog(settings)
    logger.info(f"Unit catalog configured from '{settings.unit_source}' source")

    yield

    logger.info("Shutting down Groceryplanner API")


app = FastAPI(
    title="Groceryplanner API",
    description="Grocery quantity normalization and aggregation for meal plans",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(grocery_lists_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "groceryplanner-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Groceryplanner API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
