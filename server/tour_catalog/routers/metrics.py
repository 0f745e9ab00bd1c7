"""Metrics endpoint for Prometheus scraping."""

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST

from ..core.observability import get_prometheus_metrics, metrics_collector

router = APIRouter(tags=["Observability"])


@router.get("/metrics", summary="Prometheus Metrics", response_class=Response)
async def metrics(request: Request) -> Response:
    """
    Return Prometheus metrics in text format.

    The document store is pinged on each scrape so ``document_store_up``
    reflects its current reachability.
    """
    metrics_collector.record_store_status(await request.app.state.gateway.ping())
    return Response(content=get_prometheus_metrics(), media_type=CONTENT_TYPE_LATEST)
