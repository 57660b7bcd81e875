"""
sandlog Configuration Module.

Nested settings: each sub-module owns one concern and its own environment
variable prefix.

Multi-Environment Support:
    Set `SAND_ENV` to one of: development, testing, staging, production
    The .env files are loaded in this order (later overrides earlier):
    1. .env
    2. .env.local
    3. .env.{environment}
    4. .env.{environment}.local

Usage:
    from sandlog.config import settings

    settings.logging.default_namespace  # "app"
    settings.logging.filter_var         # "SAND_LOG"
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .environment import EnvironmentSettings
from .logging import ColorMode, LoggingSettings


def _get_env_files() -> tuple[str, ...]:
    """Determine which .env files to load based on SAND_ENV."""
    return EnvironmentSettings().env_files


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=_get_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def environment(self) -> EnvironmentSettings:
        return EnvironmentSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings(_env_file=self.environment.env_files)

    def environment_files(self) -> tuple[str, ...]:
        return self.environment.env_files


# Singleton instance
settings = Settings()

__all__ = [
    "ColorMode",
    "EnvironmentSettings",
    "LoggingSettings",
    "Settings",
    "settings",
]
