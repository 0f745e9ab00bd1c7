"""FastAPI application initialization and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from .core.config import settings
from .core.database import MongoGateway, create_gateway
from .core.exceptions import (
    ProblemDetailsException,
    generic_exception_handler,
    problem_details_handler,
    request_validation_handler,
    store_error_handler,
)
from .core.middleware import setup_middleware
from .core.observability import (
    SERVICE_NAME,
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_pymongo,
    setup_structured_logging,
    setup_tracing,
)
from .routers import auth, health, listings, metrics, seo, testimonial, tour
from .services.media_service import CloudinaryUploader

# Configure structured logging
setup_structured_logging()

# Configure traditional logging for compatibility
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects to the document store once at startup, so a bad URI or
    rejected credentials stop the process before it accepts traffic.
    """
    logger.info("Starting FastAPI application")
    logger.info(f"Environment: {settings.environment}")

    gateway: MongoGateway = app.state.gateway
    try:
        setup_tracing(SERVICE_NAME)
        instrument_pymongo()
        logger.info("Observability setup completed")

        await gateway.connect()
        await gateway.ensure_indexes()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down FastAPI application")
    await gateway.close()
    logger.info("Application shutdown complete")


def create_app(
    gateway: Optional[MongoGateway] = None,
    uploader: Optional[CloudinaryUploader] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        gateway: Document store gateway, built from settings when omitted
        uploader: Image uploader, built from settings when omitted

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Tour Catalog API",
        description="Travel package listings with admin management, SEO metadata and testimonials",
        version=SERVICE_VERSION,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.gateway = gateway or create_gateway()
    app.state.uploader = uploader or CloudinaryUploader.from_settings()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_middleware(app, enable_logging=True)
    instrument_fastapi(app)

    # Register exception handlers
    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, store_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Register API routers
    app.include_router(health.router)
    app.include_router(listings.router)
    app.include_router(tour.router)
    app.include_router(seo.router)
    app.include_router(testimonial.router)
    app.include_router(auth.router)
    app.include_router(metrics.router)

    logger.info("FastAPI application created and configured")

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tour_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
