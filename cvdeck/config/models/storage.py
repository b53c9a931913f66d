"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory", "postgres"]


class PostgresConfig(BaseModel):
    """PostgreSQL connection pool configuration.

    The DSN itself comes from CVDECK_DATABASE_URL or DATABASE_URL.
    """

    min_pool_size: int = Field(
        default=1,
        gt=0,
        description="Minimum connections to keep open",
    )
    max_pool_size: int = Field(
        default=10,
        gt=0,
        description="Maximum connections in pool",
    )
    max_inactive_connection_lifetime: float = Field(
        default=300.0,
        gt=0,
        description="Close connections idle longer than this (seconds)",
    )
    command_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Default timeout for queries (seconds)",
    )


class StorageConfig(BaseModel):
    """Configuration for the server-side stores."""

    profile: BackendType = Field(
        default="inmemory",
        description="Backend for profile, skills, experience and education",
    )
    contact: BackendType = Field(
        default="inmemory",
        description="Backend for contact form submissions",
    )
    postgres: PostgresConfig = Field(
        default_factory=PostgresConfig,
        description="Shared PostgreSQL pool settings",
    )
