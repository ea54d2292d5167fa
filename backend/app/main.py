"""
Document Gateway - FastAPI Application

Generic CRUD over MongoDB collections, with the database and collection
picked from the request path.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from app.config import get_settings
from app.core.errors import (
    GatewayError,
    database_error_handler,
    gateway_error_handler,
    request_validation_error_handler,
)
from app.core.logging_setup import setup_logging
from app.database.databases import ALL_DB_MANIFESTS
from app.database.registry import ModelRegistry
from app.dependencies.registry import get_connection_registry, get_model_registry
from app.routers import documents, health

logger = logging.getLogger(__name__)


async def warmup(registry: ModelRegistry) -> None:
    """
    Open every configured database from the manifests and report the
    approximate size of each registered collection.

    Failures are logged and skipped; requests will retry on their own.
    """
    for manifest in ALL_DB_MANIFESTS:
        db_name = manifest["db_name"]
        if not registry.connections.is_configured(db_name):
            logger.warning(f"Skipping warmup for {db_name}: no URI configured")
            continue

        try:
            await registry.connections.get_connection(db_name)
            logger.info(f"Successfully connected to MongoDB database: {db_name}")

            for collection_name in manifest["collections"]:
                accessor = await registry.get_accessor(db_name, collection_name)
                count = await accessor.estimated_count()
                logger.info(
                    f"Found approximately {count} documents in {collection_name} collection of {db_name}"
                )
        except GatewayError as e:
            logger.warning(f"Warmup failed for {db_name}: {e.kind}: {e.message}")
        except PyMongoError as e:
            logger.warning(f"Warmup failed for {db_name}: {type(e).__name__}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Configure logging
    - Warm up configured database connections

    Shutdown:
    - Close all database connections
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting up Document Gateway...")
    logger.info(f"Configured databases: {sorted(settings.database_uri_map())}")

    if settings.warmup_on_startup:
        await warmup(get_model_registry())

    yield

    logger.info("Shutting down Document Gateway...")
    get_connection_registry().close()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title="Document Gateway API",
    description="""
## MongoDB Document Gateway

CRUD over any configured database and registered collection.

### Endpoints
- `GET /find/{database}/{collection}`: list every document
- `POST /insert/{database}/{collection}`: body `{"document": {...}}` or `{"documents": [...]}`
- `DELETE /delete/{database}/{collection}/{id}`: delete by ID
- `PUT /update/{database}/{collection}/{id}`: body `{"update": {...}}`

Errors are returned as `{"detail": "...", "kind": "..."}`.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(GatewayError, gateway_error_handler)
app.add_exception_handler(PyMongoError, database_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

# Include routers
app.include_router(health.router)
app.include_router(documents.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Document Gateway API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }


def run() -> None:
    """Run the API with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
