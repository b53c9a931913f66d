"""Configuration model exports.

    from cvdeck.config.models import APIConfig, StorageConfig
"""

from cvdeck.config.models.api import APIConfig, RateLimitConfig
from cvdeck.config.models.email import EmailSettings
from cvdeck.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from cvdeck.config.models.persona import PersonaConfig
from cvdeck.config.models.providers import (
    LLMProvidersConfig,
    LLMStepConfig,
    ProvidersConfig,
)
from cvdeck.config.models.storage import PostgresConfig, StorageConfig
from cvdeck.config.models.widget import WidgetConfig

__all__ = [
    "APIConfig",
    "RateLimitConfig",
    "EmailSettings",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "PersonaConfig",
    "LLMProvidersConfig",
    "LLMStepConfig",
    "ProvidersConfig",
    "PostgresConfig",
    "StorageConfig",
    "WidgetConfig",
]
