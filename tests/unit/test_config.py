"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from totem.core.config import AppSettings, DynamoDBConfig, ReportConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.persistence_backend == "memory"
    assert settings.dynamodb.table_name == "totem-records"


def test_report_config_defaults():
    config = ReportConfig()
    assert config.default_range_days == 90
    assert config.days_per_year == 365


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TOTEM_DYNAMO_TABLE_SUFFIX", "-uat")
    monkeypatch.setenv("TOTEM_DYNAMO_ENDPOINT_URL", "http://localhost:4566")
    config = DynamoDBConfig()
    assert config.table_suffix == "-uat"
    assert config.endpoint_url == "http://localhost:4566"


def test_root_env_prefix(monkeypatch):
    monkeypatch.setenv("TOTEM_PERSISTENCE_BACKEND", "dynamodb")
    monkeypatch.setenv("TOTEM_LOG_LEVEL", "DEBUG")
    settings = AppSettings()
    assert settings.persistence_backend == "dynamodb"
    assert settings.log_level == "DEBUG"
