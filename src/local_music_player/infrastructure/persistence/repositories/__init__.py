"""SQLite repository implementations."""

from local_music_player.infrastructure.persistence.repositories.lyrics_repository import (
    SQLiteLyricsRepository,
)
from local_music_player.infrastructure.persistence.repositories.preferences_repository import (
    SQLitePreferencesRepository,
)

__all__ = [
    "SQLiteLyricsRepository",
    "SQLitePreferencesRepository",
]
