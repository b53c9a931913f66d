"""Process-wide settings access.

    from cvdeck.config import get_settings

    limit = get_settings().api.rate_limit.requests_per_minute

The API factory and ``create_chat_widget`` accept an explicit ``Settings``
so tests never need the cached instance.
"""

from functools import lru_cache

from cvdeck.config.loader import load_config
from cvdeck.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load TOML layers and environment once per process.

    Without a config directory the model defaults apply.
    """
    try:
        layers = load_config()
    except FileNotFoundError:
        layers = {}
    set_toml_config(layers)
    return Settings()


def reload_settings() -> Settings:
    get_settings.cache_clear()
    return get_settings()


__all__ = ["Settings", "get_settings", "reload_settings"]
