"""Observability: structured logging, Prometheus/OTel metrics and tracing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from searchx.observability.context import (
    bound_trace_context,
    get_trace_context,
    set_trace_context,
    trace_context,
)
from searchx.observability.logging import (
    JsonFormatter,
    configure_log_exporter,
    configure_logging,
    init_log_exporter,
)
from searchx.observability.metrics import (
    DOCUMENT_COUNT,
    SEARCH_COUNT,
    SEARCH_LATENCY,
    configure_metrics_exporter,
    get_metrics,
    get_metrics_content_type,
    init_metrics,
    track_latency,
)
from searchx.observability.tracing import (
    configure_trace_exporter,
    create_span,
    get_tracer,
    init_tracing,
)


if TYPE_CHECKING:
    from searchx.config import Settings


def configure_observability(settings: Settings) -> None:
    """Apply logging configuration and, when enabled, OTLP exporters."""
    configure_logging(settings.log_level, settings.log_json)
    collector = settings.observability
    if not collector.enabled:
        return
    configure_trace_exporter(collector, init_tracing(settings.service_name, collector.resource_attributes))
    configure_metrics_exporter(collector, service_name=settings.service_name)
    configure_log_exporter(collector, init_log_exporter(settings.service_name, collector.resource_attributes))


__all__ = [
    "DOCUMENT_COUNT",
    "SEARCH_COUNT",
    "SEARCH_LATENCY",
    "JsonFormatter",
    "bound_trace_context",
    "configure_log_exporter",
    "configure_logging",
    "configure_metrics_exporter",
    "configure_observability",
    "configure_trace_exporter",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_log_exporter",
    "init_metrics",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
