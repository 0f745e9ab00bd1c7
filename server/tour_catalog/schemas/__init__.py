"""Pydantic schemas for request/response validation."""

from .auth import *  # noqa: F403
from .common import *  # noqa: F403
from .health import *  # noqa: F403
from .seo import *  # noqa: F403
from .testimonial import *  # noqa: F403
from .tour import *  # noqa: F403
