"""
Tests for environment-driven settings and logging setup.
"""

import logging

import pytest
from pydantic import ValidationError

from config.logging import LoggerMixin, setup_logging
from config.settings import Settings, get_settings, is_development, is_production


def test_defaults():
    settings = Settings()

    assert settings.supabase_url is None
    assert settings.has_store_credentials is False
    assert settings.tasks_table == "Tasks"
    assert settings.categories_table == "Categories"
    assert settings.log_level == "INFO"
    assert settings.environment == "development"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co/")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ENVIRONMENT", "Production")

    settings = get_settings()

    assert settings.supabase_url == "https://example.supabase.co"
    assert settings.has_store_credentials is True
    assert settings.log_level == "DEBUG"
    assert is_production() is True
    assert is_development() is False


def test_settings_cached():
    assert get_settings() is get_settings()


@pytest.mark.parametrize("field,value", [
    ("log_level", "LOUD"),
    ("environment", "qa"),
    ("health_check_interval_seconds", -1),
])
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "api.log"
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level

    try:
        setup_logging(log_level="warning", log_file=str(log_file))
        logging.getLogger("taskproxy.test").warning("hello from test")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.WARNING
        assert "hello from test" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_logger_mixin_name():
    class Widget(LoggerMixin):
        pass

    assert Widget().logger.name.endswith("test_settings.Widget")


@pytest.mark.parametrize("environment,httpx_level,taskproxy_level", [
    ("production", logging.WARNING, logging.NOTSET),
    ("development", logging.NOTSET, logging.DEBUG),
])
def test_module_levels_follow_environment(monkeypatch, environment, httpx_level, taskproxy_level):
    monkeypatch.setenv("ENVIRONMENT", environment)
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    for name in ("httpx", "taskproxy"):
        logging.getLogger(name).setLevel(logging.NOTSET)

    try:
        setup_logging()

        assert logging.getLogger("httpx").level == httpx_level
        assert logging.getLogger("taskproxy").level == taskproxy_level
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        for name in ("httpx", "taskproxy"):
            logging.getLogger(name).setLevel(logging.NOTSET)
