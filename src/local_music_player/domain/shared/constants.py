"""Centralized constants for configuration, database schema, and other shared values.

This module provides reusable constants that reduce magic strings and improve maintainability.
"""

from __future__ import annotations


class SQLPragmas:
    """SQLite PRAGMA statements for database configuration.

    These pragmas are applied to each connection to ensure consistent behavior.
    """

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    FOREIGN_KEYS_ON = "PRAGMA foreign_keys=ON"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"


class AudioConstants:
    """Audio playback constants."""

    DEFAULT_VOLUME = 0.7
    TICK_INTERVAL_SECONDS = 0.25
    FFPLAY_BINARY = "ffplay"
    FFPROBE_BINARY = "ffprobe"
    AUDIO_EXTENSIONS = (".mp3", ".m4a", ".aac", ".flac", ".wav", ".ogg", ".opus", ".aiff")
    COVER_NAMES = ("cover.jpg", "cover.png", "folder.jpg", "folder.png", "front.jpg")


class DatabaseURLSchemes:
    """Valid database URL schemes for validation."""

    SQLITE = "sqlite://"

    # For in-memory testing
    MEMORY = ":memory:"
    MEMORY_SHARED_URI = "file:local-music-player-{name}?mode=memory&cache=shared"


class LogLevels:
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    ALL = frozenset({DEBUG, INFO, WARNING, ERROR, CRITICAL})
