"""
Logging Configuration.
"""

import os
from enum import Enum
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ColorMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class LoggingSettings(BaseSettings):
    """Logging infrastructure configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SAND_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    filter_var: str = Field(default="SAND_LOG", description="Environment variable holding the namespace filter")
    default_namespace: str = Field(default="app", description="Namespace used when none is given")
    show_file: bool = Field(default=False, description="Prefix log lines with the caller's file:line")
    stream: Literal["stderr", "stdout"] = Field(default="stderr", description="Console sink stream")
    color: ColorMode = Field(default=ColorMode.AUTO, description="ANSI color output")
    timestamp_format: str = Field(
        default="%b {day} %I:%M:%S %p",
        description="Console timestamp format ({day} is the ordinal day of month)",
    )
    app_path: str = Field(default_factory=os.getcwd, description="Base path for file:line markers")
