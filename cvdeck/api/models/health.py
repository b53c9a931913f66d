"""Body of ``GET /health``."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

# degraded: the API works but contact notifications are off
HealthStatus = Literal["healthy", "degraded", "unhealthy"]


class ComponentHealth(BaseModel):
    """One store, the database pool or the email notifier."""

    name: str
    status: HealthStatus
    latency_ms: float | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    status: HealthStatus = Field(..., description="Worst status among the components")
    version: str
    components: list[ComponentHealth] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
