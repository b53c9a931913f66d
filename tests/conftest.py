"""Shared test fixtures for the CV deck test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

from cvdeck.config import get_settings
from cvdeck.config.settings import set_toml_config

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Load config/test.toml and keep real credentials out of tests."""
    monkeypatch.setenv("CVDECK_ENV", "test")
    monkeypatch.setenv("CVDECK_CONFIG_DIR", str(CONFIG_DIR))
    for var in ("RESEND_API_KEY", "RESEND_FROM_EMAIL", "RESEND_TO_EMAIL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Drop structlog config bound to a per-test captured stream."""
    yield
    structlog.reset_defaults()
