"""OpenTelemetry tracing helpers."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter as GrpcOTLPSpanExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter as HttpOTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import SpanKind, Status, StatusCode

from searchx.config import ObservabilityCollectorConfig
from searchx.errors import SearchCancelledError, SearchError
from searchx.observability.context import bound_trace_context


if TYPE_CHECKING:
    from collections.abc import Iterator

    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

_tracer_holder: dict[str, Any] = {"tracer": None, "provider": None}


def init_tracing(
    service_name: str = "searchx",
    resource_attributes: dict[str, str] | None = None,
) -> TracerProvider:
    provider = TracerProvider(resource=Resource.create({"service.name": service_name, **(resource_attributes or {})}))
    trace.set_tracer_provider(provider)
    _tracer_holder["provider"] = provider
    _tracer_holder["tracer"] = provider.get_tracer(__name__)
    logger.info("Tracing initialized for service: %s", service_name)
    return provider


def configure_trace_exporter(
    config: ObservabilityCollectorConfig | None,
    provider: TracerProvider | None = None,
) -> None:
    """Export spans to the OTLP collector when export is enabled.

    A collector that cannot be reached is logged and skipped; searches keep
    running with local spans only.
    """
    if not config or not config.enabled:
        return

    active_provider = provider or _tracer_holder["provider"]
    if not isinstance(active_provider, TracerProvider):
        active_provider = init_tracing(resource_attributes=config.resource_attributes)

    exporter_cls = GrpcOTLPSpanExporter if config.otlp_protocol == "grpc" else HttpOTLPSpanExporter
    try:
        exporter = exporter_cls(**config.exporter_kwargs("traces"))
    except Exception as exc:
        logger.error("Failed to configure OTLP span exporter: %s", exc, exc_info=True)
        return

    active_provider.add_span_processor(BatchSpanProcessor(exporter))
    logger.info("OTLP trace export enabled (%s) to %s", config.otlp_protocol, config.endpoint_for("traces"))


def get_tracer() -> Tracer:
    if _tracer_holder["tracer"] is None:
        init_tracing()
    return _tracer_holder["tracer"]


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Open a span and bind its ids to the logging context for the duration.

    Cancellation is an expected outcome and leaves the span status unset;
    any other exception marks the span as failed. ``SearchError`` codes are
    recorded as ``searchx.error_code``.
    """
    with get_tracer().start_as_current_span(
        name,
        kind=kind,
        attributes=attributes,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        ctx = span.get_span_context()
        with bound_trace_context(trace_id=format(ctx.trace_id, "032x"), span_id=format(ctx.span_id, "016x")):
            try:
                yield span
            except Exception as exc:
                if isinstance(exc, SearchError):
                    span.set_attribute("searchx.error_code", int(exc.code))
                if not isinstance(exc, SearchCancelledError):
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    span.record_exception(exc)
                raise
