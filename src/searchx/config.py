"""Centralized configuration for searchx using Pydantic Settings."""

from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilityCollectorConfig(BaseModel):
    """Configuration for OTLP trace, metric and log export."""

    model_config = {"extra": "forbid"}

    enabled: Annotated[
        bool,
        Field(
            description="Enable OTLP export to an external collector",
        ),
    ] = False

    otlp_protocol: Annotated[
        Literal["http", "grpc"],
        Field(
            description="OTLP transport protocol",
        ),
    ] = "grpc"

    collector_endpoint: Annotated[
        str,
        Field(
            description="OTLP collector endpoint (HTTP uses /v1/traces)",
            examples=["http://localhost:4317", "http://localhost:4318/v1/traces"],
        ),
    ] = "http://localhost:4317"

    headers: Annotated[
        dict[str, str],
        Field(
            description="Optional headers to include with OTLP requests",
        ),
    ] = Field(default_factory=dict)

    timeout_seconds: Annotated[
        int,
        Field(
            ge=1,
            le=60,
            description="OTLP exporter timeout in seconds",
        ),
    ] = 10

    grpc_insecure: Annotated[
        bool,
        Field(
            description="Allow insecure gRPC (plaintext) connections",
        ),
    ] = True

    resource_attributes: Annotated[
        dict[str, str],
        Field(
            description="Additional OpenTelemetry resource attributes",
        ),
    ] = Field(default_factory=dict)

    def endpoint_for(self, signal: Literal["traces", "metrics", "logs"]) -> str:
        """Collector endpoint for one OTLP signal.

        HTTP collectors serve each signal on its own path, so a configured
        ``/v1/traces`` endpoint is rewritten for metrics and logs.
        """
        endpoint = self.collector_endpoint
        if self.otlp_protocol == "http" and endpoint.endswith("/v1/traces"):
            return endpoint.removesuffix("/v1/traces") + f"/v1/{signal}"
        return endpoint

    def exporter_kwargs(self, signal: Literal["traces", "metrics", "logs"]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "endpoint": self.endpoint_for(signal),
            "headers": self.headers,
            "timeout": self.timeout_seconds,
        }
        if self.otlp_protocol == "grpc":
            kwargs["insecure"] = self.grpc_insecure
        return kwargs


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``SEARCHX_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SEARCHX_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    default_limit: int = Field(default=10, ge=1, description="Page size applied when a search leaves the limit at 0")
    store_name: str = Field(default="default", min_length=1, description="Store label used in logs and metrics")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    service_name: str = Field(default="searchx", description="OpenTelemetry service.name resource attribute")
    observability: ObservabilityCollectorConfig = Field(default_factory=ObservabilityCollectorConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once from the environment."""
    return Settings()
