from __future__ import annotations

import logging

import pytest

from triage_acuity.config import Settings
from triage_acuity.core.logging import LOG_FORMAT, setup_logging


def test_defaults(monkeypatch, reset_settings):
    for name in ("ACUITY_PRESET", "ACUITY_RANGES", "ACUITY_LOG_LEVEL", "ACUITY_EXPORT_SOURCE"):
        monkeypatch.delenv(name, raising=False)
    settings = reset_settings()
    assert settings.preset == "default"
    assert settings.reference_ranges == "adult"
    assert settings.log_level == "INFO"
    assert settings.export_source == ""


def test_environment_overrides(monkeypatch, reset_settings):
    monkeypatch.setenv("ACUITY_PRESET", " Research ")
    monkeypatch.setenv("ACUITY_RANGES", "PEDIATRIC")
    monkeypatch.setenv("ACUITY_LOG_LEVEL", "debug")
    settings = reset_settings()
    assert settings.preset == "research"
    assert settings.reference_ranges == "pediatric"
    assert settings.log_level == "DEBUG"


def test_settings_are_cached(reset_settings):
    assert reset_settings() is reset_settings()


def test_blank_log_level_falls_back():
    assert Settings(log_level="  ").log_level == "INFO"


@pytest.fixture
def package_logger():
    logger = logging.getLogger("triage_acuity")
    previous = logger.level
    yield logger
    logger.setLevel(previous)


def test_setup_logging_explicit_level(package_logger):
    setup_logging("debug")
    assert package_logger.level == logging.DEBUG


def test_setup_logging_reads_settings(package_logger, monkeypatch, reset_settings):
    monkeypatch.setenv("ACUITY_LOG_LEVEL", "WARNING")
    reset_settings.cache_clear()
    setup_logging()
    assert package_logger.level == logging.WARNING


def test_setup_logging_unknown_level(package_logger):
    setup_logging("chatty")
    assert package_logger.level == logging.INFO


def test_log_format():
    assert LOG_FORMAT == "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
