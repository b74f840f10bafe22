"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class DynamoDBConfig(BaseSettings):
    """DynamoDB record store configuration."""

    model_config = {"env_prefix": "TOTEM_DYNAMO_"}

    table_name: str = "totem-records"
    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class ReportConfig(BaseSettings):
    """Defaults for report ranges and salary proration."""

    model_config = {"env_prefix": "TOTEM_REPORT_"}

    default_range_days: int = 90
    days_per_year: int = 365


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "TOTEM_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    persistence_backend: Literal["memory", "dynamodb"] = "memory"

    dynamodb: DynamoDBConfig = DynamoDBConfig()
    reports: ReportConfig = ReportConfig()
