"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class DeadlineConfig(BaseSettings):
    """Deadline calculator configuration."""

    model_config = {"env_prefix": "DOCKET_DEADLINE_"}

    holidays_path: str = "config/holidays.yml"
    rules_path: str = "config/deadline_rules.yml"
    start_adjustment_limit: int = 1000
    count_slack: int = 100
    end_adjustment_limit: int = 30


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "DOCKET_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    deadline: DeadlineConfig = Field(default_factory=DeadlineConfig)
