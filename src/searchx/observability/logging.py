"""Structured JSON logging.

Each record carries the bound trace context (``trace_id``, ``span_id`` and the
``store`` label while a store operation runs) so log lines can be joined with
spans and metrics. Failures raised as ``SearchError`` add their stable error
code.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import sys
from typing import Any

from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter as GrpcOTLPLogExporter
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter as HttpOTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource
import orjson

from searchx.config import ObservabilityCollectorConfig
from searchx.errors import SearchError
from searchx.observability.context import get_trace_context


# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

_logger_holder: dict[str, Any] = {"provider": None, "handler_added": False}


class JsonFormatter(logging.Formatter):
    REDACT_KEYS = frozenset({"password", "token", "api_key", "secret", "authorization"})
    MAX_MESSAGE_LEN = 2000
    MAX_EXTRA_LEN = 500

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": _clip(record.getMessage(), self.MAX_MESSAGE_LEN),
        }
        entry.update(get_trace_context())

        _, _, component = record.name.rpartition(".")
        if component != record.name:
            entry["component"] = component

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
            error = record.exc_info[1]
            if isinstance(error, SearchError):
                entry["error_code"] = int(error.code)
                entry["error_type"] = error.error_type

        entry.update(
            (key, self._extra_value(key, value))
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        )
        return orjson.dumps(entry, default=_json_default).decode("utf-8")

    def _extra_value(self, key: str, value: Any) -> Any:
        if key.lower() in self.REDACT_KEYS:
            return "[REDACTED]"
        if isinstance(value, str):
            return _clip(value, self.MAX_EXTRA_LEN)
        return value


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value)
        except TypeError:
            return list(value)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return str(value) if isinstance(value, Exception) else repr(value)


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Replace the root handlers with a single stdout handler.

    Args:
        level: Root log level name, case-insensitive.
        json_output: Use ``JsonFormatter`` instead of a plain text line.
        logger_levels: Per-logger level overrides, e.g. ``{"searchx.inmemory": "debug"}``.
    """
    root = logging.getLogger()
    root.setLevel(_level(level))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JsonFormatter() if json_output else logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    root.addHandler(handler)

    for logger_name, logger_level in (logger_levels or {}).items():
        logging.getLogger(logger_name).setLevel(_level(logger_level))


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def init_log_exporter(
    service_name: str = "searchx",
    resource_attributes: dict[str, str] | None = None,
) -> LoggerProvider:
    provider = LoggerProvider(resource=Resource.create({"service.name": service_name, **(resource_attributes or {})}))
    set_logger_provider(provider)
    _logger_holder["provider"] = provider
    return provider


def configure_log_exporter(
    config: ObservabilityCollectorConfig | None,
    provider: LoggerProvider | None = None,
) -> None:
    """Ship log records to the OTLP collector when export is enabled."""
    if not config or not config.enabled or _logger_holder["handler_added"]:
        return

    active_provider = provider or _logger_holder["provider"]
    if not isinstance(active_provider, LoggerProvider):
        active_provider = init_log_exporter(resource_attributes=config.resource_attributes)

    exporter_cls = GrpcOTLPLogExporter if config.otlp_protocol == "grpc" else HttpOTLPLogExporter
    active_provider.add_log_record_processor(BatchLogRecordProcessor(exporter_cls(**config.exporter_kwargs("logs"))))
    logging.getLogger().addHandler(LoggingHandler(level=logging.INFO, logger_provider=active_provider))
    _logger_holder["handler_added"] = True
