"""
Unit Tests for Application Settings Configuration

Tests for:
- Default values of every nested settings group
- Loading settings from environment variables (nested with ``__``)
- Custom validators (database URL, log level, audio extensions)
- Settings caching and clearing
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from local_music_player.config.settings import (
    AudioSettings,
    ClockSettings,
    DatabaseSettings,
    LibrarySettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

# =============================================================================
# Nested Settings Tests
# =============================================================================


class TestDatabaseSettings:
    """Unit tests for DatabaseSettings configuration."""

    def test_create_with_defaults(self):
        db = DatabaseSettings()

        assert db.url == "sqlite:///data/player.db"
        assert db.busy_timeout_ms == 5000
        assert db.connection_timeout_s == 10

    def test_url_aliases(self):
        assert DatabaseSettings(database_url="sqlite:///a.db").url == "sqlite:///a.db"
        assert DatabaseSettings(db_url="sqlite:///b.db").url == "sqlite:///b.db"

    def test_non_sqlite_url_rejected(self):
        with pytest.raises(ValidationError, match="Database URL must start with sqlite://"):
            DatabaseSettings(url="postgresql://localhost/db")

    @pytest.mark.parametrize("value", [999, 30001])
    def test_busy_timeout_bounds(self, value):
        with pytest.raises(ValidationError):
            DatabaseSettings(busy_timeout_ms=value)

    def test_immutability(self):
        db = DatabaseSettings()

        with pytest.raises(ValidationError):
            db.url = "sqlite:///new.db"


class TestAudioSettings:
    def test_defaults(self):
        audio = AudioSettings()

        assert audio.default_volume == pytest.approx(0.7)
        assert audio.ffplay_path == "ffplay"
        assert audio.ffprobe_path == "ffprobe"

    @pytest.mark.parametrize("value", [-0.1, 1.1])
    def test_volume_must_be_fraction(self, value):
        with pytest.raises(ValidationError):
            AudioSettings(default_volume=value)

    def test_binary_aliases(self):
        audio = AudioSettings(ffplay="/opt/ffplay", ffprobe="/opt/ffprobe")

        assert audio.ffplay_path == "/opt/ffplay"
        assert audio.ffprobe_path == "/opt/ffprobe"


class TestClockSettings:
    def test_default_interval(self):
        assert ClockSettings().tick_interval_seconds == pytest.approx(0.25)

    @pytest.mark.parametrize("value", [0, -1, 11])
    def test_interval_bounds(self, value):
        with pytest.raises(ValidationError):
            ClockSettings(tick_interval_seconds=value)


class TestLibrarySettings:
    def test_defaults(self):
        library = LibrarySettings()

        assert library.music_dir is None
        assert ".mp3" in library.audio_extensions
        assert "cover.jpg" in library.cover_names

    def test_extensions_normalized(self):
        library = LibrarySettings(audio_extensions=["MP3", ".Flac", " ogg "])

        assert library.audio_extensions == (".mp3", ".flac", ".ogg")

    def test_extensions_from_comma_string(self):
        library = LibrarySettings(audio_extensions="mp3, wav,,")

        assert library.audio_extensions == (".mp3", ".wav")

    def test_music_dir_alias(self):
        assert LibrarySettings(dir="/srv/music").music_dir == Path("/srv/music")


# =============================================================================
# Settings Tests
# =============================================================================


class TestSettings:
    """Unit tests for the top-level Settings container."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        for name in ("ENVIRONMENT", "DEBUG", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        clear_settings_cache()
        yield
        clear_settings_cache()

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.clock, ClockSettings)

    def test_load_from_environment_variables(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        settings = Settings(_env_file=None)

        assert settings.environment == "production"
        assert settings.debug is True
        assert settings.log_level == "WARNING"

    def test_load_nested_settings_from_env(self, monkeypatch, tmp_path):
        """String values from the environment are coerced into nested fields."""
        monkeypatch.setenv("DATABASE__URL", "sqlite:///tmp/env.db")
        monkeypatch.setenv("AUDIO__DEFAULT_VOLUME", "0.4")
        monkeypatch.setenv("CLOCK__TICK_INTERVAL_SECONDS", "0.5")
        monkeypatch.setenv("LIBRARY__MUSIC_DIR", str(tmp_path))

        settings = Settings(_env_file=None)

        assert settings.database.url == "sqlite:///tmp/env.db"
        assert settings.audio.default_volume == pytest.approx(0.4)
        assert settings.clock.tick_interval_seconds == pytest.approx(0.5)
        assert settings.library.music_dir == tmp_path

    def test_log_level_uppercased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError, match="Invalid log level"):
            Settings(_env_file=None)

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self):
        first = get_settings()
        clear_settings_cache()

        assert get_settings() is not first
