# app/main.py
"""Main FastAPI application entry point.

Initializes the FastAPI application with:
- In-memory store seeded with mock reference data
- CORS and GZip middleware
- API route registration
- Domain exception handling
- Logging setup using Loguru
- Health check endpoints
"""
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from loguru import logger

from app.core.config import Settings, get_settings
from app.core.exceptions import SameVarietyError
from app.core.logging import setup_logging
from app.core.store import InMemoryStore, check_store, get_store

# Import API routers
from app.api.applications import router as applications_router
from app.api.approvals import router as approvals_router
from app.api.groups import router as groups_router
from app.api.products import router as products_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage FastAPI application lifespan.

    Logs the seeded store on startup; nothing needs releasing on shutdown
    because all state lives in memory.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    if check_store():
        logger.success(f"In-memory store ready: {get_store().stats()}")
    else:
        logger.error("Product catalog is empty")

    yield

    logger.info(f"Shutting down {settings.app_name}")


# Initialize settings
settings = get_settings()

# Configure logging with Loguru
setup_logging(settings)

# Initialize FastAPI with environment-specific config and ORJSONResponse
app = FastAPI(
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
    **settings.fastapi_kwargs
)

# CORS middleware with settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# GZip compression middleware for response size optimization
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.exception_handler(SameVarietyError)
async def same_variety_exception_handler(request: Request, exc: SameVarietyError):
    """Turn domain failures into consistent JSON error responses."""
    logger.warning(
        f"{request.method} {request.url.path} failed: {exc.message} (code: {exc.code})"
    )
    return ORJSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Register API routers
app.include_router(products_router, prefix=settings.api_prefix)
app.include_router(groups_router, prefix=settings.api_prefix)
app.include_router(applications_router, prefix=settings.api_prefix)
app.include_router(approvals_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint providing basic application information.

    Returns:
        dict: Application name, version, environment, and status.
    """
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "status": "running",
    }


@app.get("/health")
async def health_check(
    settings: Settings = Depends(get_settings),
    store: InMemoryStore = Depends(get_store),
):
    """Health check endpoint for monitoring application status.

    Args:
        settings: Injected application settings.
        store: Injected in-memory store.

    Returns:
        dict: Health status, environment, and store sizes.
    """
    return {
        "status": "healthy",
        "environment": settings.environment,
        "store": store.stats(),
    }
