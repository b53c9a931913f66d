"""Settings for the CV deck API and chat widget.

Values are resolved from, lowest precedence first: model defaults, the
merged TOML layers, ``CVDECK_*`` environment variables and constructor
arguments. Nested sections take ``__`` in variable names, e.g.
``CVDECK_API__RATE_LIMIT__ENABLED=false``.
"""

from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from cvdeck.config.models.api import APIConfig
from cvdeck.config.models.email import EmailSettings
from cvdeck.config.models.observability import ObservabilityConfig
from cvdeck.config.models.persona import PersonaConfig
from cvdeck.config.models.providers import ProvidersConfig
from cvdeck.config.models.storage import StorageConfig
from cvdeck.config.models.widget import WidgetConfig

_toml_layers: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Install the merged TOML layers read by subsequent ``Settings()`` calls."""
    global _toml_layers
    _toml_layers = dict(config)


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Feeds the installed TOML layers into pydantic-settings."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        if field_name not in _toml_layers:
            return None, field_name, False
        return _toml_layers[field_name], field_name, True

    def __call__(self) -> dict[str, Any]:
        return {
            name: _toml_layers[name]
            for name in self.settings_cls.model_fields
            if name in _toml_layers
        }


class Settings(BaseSettings):
    """Every configuration section of the service."""

    model_config = SettingsConfigDict(
        env_prefix="CVDECK_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="cvdeck", description="Name used in logs")
    debug: bool = Field(default=False, description="Enable debug mode")

    api: APIConfig = Field(default_factory=APIConfig)
    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Profile and contact store backends",
    )
    providers: ProvidersConfig = Field(
        default_factory=ProvidersConfig,
        description="Chat and extraction models",
    )
    email: EmailSettings = Field(
        default_factory=EmailSettings,
        description="Resend notification settings",
    )
    persona: PersonaConfig = Field(default_factory=PersonaConfig)
    widget: WidgetConfig = Field(
        default_factory=WidgetConfig,
        description="Chat widget client settings",
    )
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Highest precedence first; no .env or secrets-dir sources
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
