"""Tests for settings and logging setup."""

import pytest
import structlog

from cartstore.infrastructure.config import Settings, get_settings
from cartstore.infrastructure.log_config import configure_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CARTSTORE_CART_API_URL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.cart_api_url.startswith("https://")
        assert settings.request_timeout == 10.0
        assert settings.auto_totals is True
        assert settings.reset_quantities_after_load is False
        assert settings.log_level == "INFO"

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings are read from CARTSTORE_* variables."""
        monkeypatch.setenv("CARTSTORE_CART_API_URL", "http://cart.test/items")
        monkeypatch.setenv("CARTSTORE_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("CARTSTORE_RESET_QUANTITIES_AFTER_LOAD", "true")

        settings = get_settings()

        assert settings.cart_api_url == "http://cart.test/items"
        assert settings.request_timeout == 2.5
        assert settings.reset_quantities_after_load is True

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            Settings(_env_file=None, request_timeout=0)


class TestConfigureLogging:
    """Tests for structlog configuration."""

    def test_sets_level_and_configures_structlog(self) -> None:
        configure_logging(Settings(_env_file=None, log_level="debug", log_json=False))
        try:
            assert structlog.is_configured()
            assert isinstance(
                structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer
            )
        finally:
            structlog.reset_defaults()

    def test_json_renderer(self) -> None:
        configure_logging(Settings(_env_file=None, log_level="warning"))
        try:
            assert isinstance(
                structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer
            )
        finally:
            structlog.reset_defaults()
