"""Reads the layered TOML files under ``config/``.

``default.toml`` is the base layer and ``{CVDECK_ENV}.toml`` is merged on
top of it when present. Environment variables are applied later by
``Settings`` itself.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "CVDECK_CONFIG_DIR"
ENVIRONMENT_ENV = "CVDECK_ENV"
DEFAULT_ENVIRONMENT = "development"
BASE_FILE = "default.toml"

# Repository checkout: cvdeck/config/loader.py -> <root>/config
_PROJECT_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


def get_config_dir() -> Path:
    """Resolve the directory holding the TOML layers.

    ``CVDECK_CONFIG_DIR`` wins and must exist. Otherwise ``./config`` is
    used when present, then the directory shipped next to the package.
    """
    explicit = os.environ.get(CONFIG_DIR_ENV)
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    for candidate in (Path.cwd() / "config", _PROJECT_CONFIG_DIR):
        if candidate.is_dir():
            return candidate
    return Path("config")


def get_environment() -> str:
    return os.environ.get(ENVIRONMENT_ENV) or DEFAULT_ENVIRONMENT


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    try:
        raw = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {file_path}") from None
    return tomllib.loads(raw.decode("utf-8"))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with ``override`` layered over ``base``.

    Tables are merged key by key; any other value in ``override``
    replaces the base value. Neither argument is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def load_config() -> dict[str, Any]:
    """Merge the base layer with the environment layer.

    Raises:
        FileNotFoundError: If ``default.toml`` is missing
    """
    config_dir = get_config_dir()
    base_path = config_dir / BASE_FILE
    if not base_path.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {base_path}. "
            f"Create config/{BASE_FILE} or set {CONFIG_DIR_ENV}."
        )

    config = load_toml(base_path)
    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.is_file():
        config = deep_merge(config, load_toml(env_path))
    return config
