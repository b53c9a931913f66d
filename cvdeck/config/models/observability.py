"""Logging and metrics settings."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class LoggingConfig(BaseModel):
    level: LogLevel = "INFO"
    format: LogFormat = Field(default="json", description="console for local development")
    redact_pii: bool = Field(
        default=True,
        description="Mask visitor emails, phone numbers and credentials in log events",
    )


class MetricsConfig(BaseModel):
    enabled: bool = Field(default=True, description="Mount the Prometheus /metrics route")


class ObservabilityConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
