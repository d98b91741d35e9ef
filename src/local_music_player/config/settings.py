"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import AudioConstants, DatabaseURLSchemes, LogLevels
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import Fraction, TickIntervalSeconds


class DatabaseSettings(BaseModel):
    """Database configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/player.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: int = Field(
        default=5000,
        ge=1000,
        le=30000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: int = Field(
        default=10,
        ge=1,
        le=60,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate database URL format."""
        if not v.startswith(DatabaseURLSchemes.SQLITE):
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return v


class AudioSettings(BaseModel):
    """Audio playback configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_volume: Fraction = Field(default=AudioConstants.DEFAULT_VOLUME)
    ffplay_path: str = Field(
        default=AudioConstants.FFPLAY_BINARY,
        min_length=1,
        validation_alias=AliasChoices("ffplay_path", "ffplay"),
    )
    ffprobe_path: str = Field(
        default=AudioConstants.FFPROBE_BINARY,
        min_length=1,
        validation_alias=AliasChoices("ffprobe_path", "ffprobe"),
    )


class ClockSettings(BaseModel):
    """Progress clock configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    tick_interval_seconds: TickIntervalSeconds = Field(
        default=AudioConstants.TICK_INTERVAL_SECONDS,
        validation_alias=AliasChoices("tick_interval_seconds", "interval"),
    )


class LibrarySettings(BaseModel):
    """Music library configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    music_dir: Path | None = Field(
        default=None, validation_alias=AliasChoices("music_dir", "dir", "root")
    )
    audio_extensions: tuple[str, ...] = AudioConstants.AUDIO_EXTENSIONS
    cover_names: tuple[str, ...] = AudioConstants.COVER_NAMES

    @field_validator("audio_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: tuple[str, ...] | list[str] | str) -> tuple[str, ...]:
        """Accept comma-separated strings and add missing leading dots."""
        if isinstance(v, str):
            v = [part for part in v.split(",") if part.strip()]
        return tuple(
            ext.strip().lower() if ext.strip().startswith(".") else f".{ext.strip().lower()}"
            for ext in v
        )


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - AUDIO__DEFAULT_VOLUME, AUDIO__FFPLAY_PATH, ... (nested with ``__``)
    - CLOCK__TICK_INTERVAL_SECONDS
    - LIBRARY__MUSIC_DIR, LIBRARY__AUDIO_EXTENSIONS
    - DATABASE__URL
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = LogLevels.INFO

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    clock: ClockSettings = Field(default_factory=ClockSettings)
    library: LibrarySettings = Field(default_factory=LibrarySettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        v_upper = v.upper()
        if v_upper not in LogLevels.ALL:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(
                    level=v, valid_levels=sorted(LogLevels.ALL)
                )
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
