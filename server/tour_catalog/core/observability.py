"""Observability setup for OpenTelemetry, metrics, and structured logging."""

import logging

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

from .config import settings

SERVICE_NAME = "tour-catalog-api"
SERVICE_VERSION = "1.0.0"

# Prometheus metrics
REGISTRY = CollectorRegistry()

# Request metrics
REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code'],
    registry=REGISTRY
)

REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=REGISTRY
)

# Business metrics
TOURS_CREATED = Counter(
    'tours_created_total',
    'Total tour listings created',
    registry=REGISTRY
)

TOURS_UPDATED = Counter(
    'tours_updated_total',
    'Total tour listings updated',
    registry=REGISTRY
)

TOURS_DELETED = Counter(
    'tours_deleted_total',
    'Total tour listings deleted',
    registry=REGISTRY
)

SEO_UPDATES = Counter(
    'tour_seo_updates_total',
    'Total SEO update requests by result',
    ['result'],
    registry=REGISTRY
)

TESTIMONIALS_ADDED = Counter(
    'testimonials_added_total',
    'Total testimonials added',
    registry=REGISTRY
)

IMAGE_UPLOADS = Counter(
    'image_uploads_total',
    'Image uploads to the image host by outcome',
    ['outcome'],
    registry=REGISTRY
)

LOGIN_ATTEMPTS = Counter(
    'admin_login_attempts_total',
    'Admin login attempts by outcome',
    ['outcome'],
    registry=REGISTRY
)

STORE_UP = Gauge(
    'document_store_up',
    'Whether the document store answered the last ping (1) or not (0)',
    registry=REGISTRY
)


def setup_structured_logging():
    """Configure structured logging with structlog."""

    def add_trace_context(logger, method_name, event_dict):
        """Add trace context to log events."""
        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            event_dict['trace_id'] = format(ctx.trace_id, '032x')
            event_dict['span_id'] = format(ctx.span_id, '016x')
        return event_dict

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_tracing(app_name: str = SERVICE_NAME):
    """Setup OpenTelemetry tracing."""
    resource = Resource.create({
        "service.name": app_name,
        "service.version": SERVICE_VERSION,
        "environment": settings.environment,
    })

    provider = TracerProvider(resource=resource)

    # Export only when a collector is configured
    if settings.otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)
    return trace.get_tracer(__name__)


def instrument_fastapi(app):
    """Instrument FastAPI with OpenTelemetry."""
    FastAPIInstrumentor.instrument_app(app)


def instrument_pymongo():
    """Instrument the MongoDB driver with OpenTelemetry."""
    PymongoInstrumentor().instrument()


class MetricsCollector:
    """Collector for business metrics."""

    @staticmethod
    def record_request(method: str, endpoint: str, status_code: int, duration: float):
        """Record an HTTP request and its duration."""
        REQUEST_COUNT.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
        REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)

    @staticmethod
    def record_tour_created():
        TOURS_CREATED.inc()

    @staticmethod
    def record_tour_updated():
        TOURS_UPDATED.inc()

    @staticmethod
    def record_tour_deleted():
        TOURS_DELETED.inc()

    @staticmethod
    def record_seo_update(modified: bool):
        """Record an SEO update, split by whether anything changed."""
        SEO_UPDATES.labels(result="modified" if modified else "unchanged").inc()

    @staticmethod
    def record_testimonial_added():
        TESTIMONIALS_ADDED.inc()

    @staticmethod
    def record_image_upload(success: bool):
        IMAGE_UPLOADS.labels(outcome="success" if success else "failure").inc()

    @staticmethod
    def record_login(success: bool):
        LOGIN_ATTEMPTS.labels(outcome="success" if success else "failure").inc()

    @staticmethod
    def record_store_status(up: bool):
        STORE_UP.set(1 if up else 0)


def get_prometheus_metrics():
    """Get Prometheus metrics for the /metrics endpoint."""
    return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()


def get_logger(name: str):
    """Get a structured logger bound to a component name."""
    # Lazy proxy; module-level loggers pick up the configuration applied later
    return structlog.get_logger(component=name)
