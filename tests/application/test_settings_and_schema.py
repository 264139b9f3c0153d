"""Tests for workflow settings, log level selection and schema utilities."""

from storefront.config import WorkflowSettings
from storefront.utils.db import drop_db, setup_db
from storefront.utils.logging import get_log_level


class TestWorkflowSettings:
    def test_defaults(self):
        settings = WorkflowSettings.from_env()
        assert settings.user_cancel_window_minutes == 30
        assert settings.restock_on_fulfillment is True
        assert settings.media_url_prefix == "/uploads/products"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("USER_CANCEL_WINDOW_MINUTES", "15")
        monkeypatch.setenv("RESTOCK_ON_FULFILLMENT", "no")
        monkeypatch.setenv("MEDIA_URL_PREFIX", "/media/")

        settings = WorkflowSettings.from_env()

        assert settings.user_cancel_window_minutes == 15
        assert settings.restock_on_fulfillment is False
        assert settings.media_url_prefix == "/media"


class TestLogLevel:
    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert get_log_level() == "INFO"

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"


def test_schema_utilities_skip_the_memory_provider(_storefront_domain):
    setup_db(_storefront_domain)
    drop_db(_storefront_domain)
