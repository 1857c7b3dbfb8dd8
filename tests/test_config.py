import logging

import pytest

from indicator_dashboard.config import (
    DEFAULT_PACING_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TITLE,
    Settings,
)
from indicator_dashboard.logging_setup import configure_logging

ENV_NAMES = ("APPS_SCRIPT_URL", "DASHBOARD_TITLE", "REQUEST_TIMEOUT_SECONDS", "SUBMIT_PACING_SECONDS", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()
    assert settings.apps_script_url == ""
    assert not settings.has_endpoint
    assert settings.title == DEFAULT_TITLE
    assert settings.request_timeout == DEFAULT_TIMEOUT_SECONDS
    assert settings.submit_pacing == DEFAULT_PACING_SECONDS
    assert settings.log_level == "INFO"


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("APPS_SCRIPT_URL", "  https://script.google.com/x/exec ")
    monkeypatch.setenv("DASHBOARD_TITLE", "Painel")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("SUBMIT_PACING_SECONDS", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.apps_script_url == "https://script.google.com/x/exec"
    assert settings.has_endpoint
    assert settings.title == "Painel"
    assert settings.request_timeout == 12.5
    assert settings.submit_pacing == 0
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["abc", "-3"])
def test_invalid_numbers_fall_back(monkeypatch, raw):
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", raw)
    assert Settings.from_env().request_timeout == DEFAULT_TIMEOUT_SECONDS


def test_configure_logging_sets_package_level():
    configure_logging("warning")
    assert logging.getLogger("indicator_dashboard").level == logging.WARNING
    configure_logging("nonsense")
    assert logging.getLogger("indicator_dashboard").level == logging.INFO
