"""FastAPI routers package."""

from .auth import router as auth_router
from .health import router as health_router
from .listings import router as listings_router
from .metrics import router as metrics_router
from .seo import router as seo_router
from .testimonial import router as testimonial_router
from .tour import router as tour_router

__all__ = [
    "auth_router",
    "health_router",
    "listings_router",
    "metrics_router",
    "seo_router",
    "testimonial_router",
    "tour_router",
]
