"""HTTP server settings: bind address, CORS for the deck page, rate limiting."""

from pydantic import BaseModel, Field, field_validator


class RateLimitConfig(BaseModel):
    """Per-address sliding window applied to ``/api/*``."""

    enabled: bool = True
    requests_per_minute: int = Field(
        default=30,
        gt=0,
        description="Requests allowed per client address in any 60s window",
    )


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API; the deck page and widget hosts",
    )
    cors_allow_credentials: bool = True
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v: str | list[str]) -> list[str]:
        """Accept ``CVDECK_API__CORS_ORIGINS="https://a, https://b"``."""
        if isinstance(v, str):
            return [origin for origin in (part.strip() for part in v.split(",")) if origin]
        return v
