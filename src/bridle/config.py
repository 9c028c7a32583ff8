"""Centralized configuration using pydantic-settings.

Values can be overridden via environment variables with BRIDLE_ prefix.

Example:
    BRIDLE_PROFILES_DIR=/tmp/profiles
    BRIDLE_LOGGING__LEVEL=DEBUG
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_profiles_dir() -> Path:
    return Path.home() / ".config" / "bridle" / "profiles"


class StagingSettings(BaseSettings):
    """Naming of the transient files written around a commit."""

    model_config = SettingsConfigDict(env_prefix="BRIDLE_STAGING__")

    prefix: str = Field(
        default=".bridle-stage-",
        description="Prefix for staging directories created beside the target profile",
    )
    backup_prefix: str = Field(
        default=".bridle-backup-",
        description="Prefix for the previous target while the swap is in flight",
    )
    journal_suffix: str = Field(
        default=".bridle-commit",
        description="Suffix of the journal file marking an unfinished commit",
    )


class LoggingSettings(BaseSettings):
    """Root logger configuration applied by the CLI."""

    model_config = SettingsConfigDict(env_prefix="BRIDLE_LOGGING__")

    level: str = Field(default="WARNING", description="Root log level")
    format: str = Field(
        default="%(levelname)s %(name)s: %(message)s",
        description="logging.Formatter format string",
    )


class BridleSettings(BaseSettings):
    """Root configuration for bridle.

    Nested settings use double underscore: BRIDLE_STAGING__PREFIX=.stage-
    """

    model_config = SettingsConfigDict(
        env_prefix="BRIDLE_",
        env_nested_delimiter="__",
    )

    profiles_dir: Path = Field(
        default_factory=_default_profiles_dir,
        description="Root directory holding <harness>/<profile> trees",
    )
    staging: StagingSettings = Field(default_factory=StagingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Singleton instance
settings = BridleSettings()
