"""Tests for structlog configuration driven by resolved settings."""

from __future__ import annotations

import logging

import pytest
import structlog
from fastapi.testclient import TestClient

from mlmonitor.config.loader import load_config, settings_from_config
from mlmonitor.config.settings import Settings
from mlmonitor.main import create_app
from mlmonitor.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    configure_logging(Settings(app_env="development", log_level="INFO"))


def _renderer():
    return structlog.get_config()["processors"][-1]


def test_production_renders_json():
    configure_logging(Settings(app_env="production", log_level="WARNING"))

    assert isinstance(_renderer(), structlog.processors.JSONRenderer)
    assert logging.getLogger().level == logging.WARNING


def test_development_renders_console():
    configure_logging(Settings(app_env="development", log_level="DEBUG"))

    assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)
    assert logging.getLogger().level == logging.DEBUG


def test_yaml_production_env_renders_json(tmp_path, monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "config.yaml"
    path.write_text("app:\n  env: production\n")

    configure_logging(settings_from_config(load_config(str(path))))

    assert isinstance(_renderer(), structlog.processors.JSONRenderer)


def test_renderer_ignores_raw_process_environment(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")

    configure_logging(Settings(app_env="development"))

    assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)


def test_default_without_settings():
    configure_logging()

    assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)
    assert logging.getLogger().level == logging.INFO


def test_noisy_library_loggers_capped():
    configure_logging(Settings(log_level="DEBUG"))

    assert logging.getLogger("aiosqlite").level == logging.WARNING
    assert logging.getLogger("uvicorn.access").level == logging.CRITICAL


def test_app_startup_applies_its_own_settings():
    app = create_app(app_settings=Settings(store_backend="memory", app_env="production"))
    with TestClient(app):
        assert isinstance(_renderer(), structlog.processors.JSONRenderer)
