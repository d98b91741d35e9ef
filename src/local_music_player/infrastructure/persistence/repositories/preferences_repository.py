"""SQLite implementation of the preferences repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from local_music_player.domain.music.entities import PlaybackPreferences
from local_music_player.domain.music.repository import PreferencesRepository
from local_music_player.domain.music.value_objects import PlaybackMode
from local_music_player.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)

VOLUME_KEY = "volume"
MODE_KEY = "playback_mode"


class SQLitePreferencesRepository(PreferencesRepository):
    """Stores each preference as one key/value row."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def load(self) -> PlaybackPreferences | None:
        rows = await self._db.fetch_all(
            "SELECT key, value FROM preferences WHERE key IN (?, ?)",
            (VOLUME_KEY, MODE_KEY),
        )
        if not rows:
            return None

        values = {row["key"]: row["value"] for row in rows}
        defaults = PlaybackPreferences()
        try:
            return PlaybackPreferences(
                volume=float(values.get(VOLUME_KEY, defaults.volume)),
                mode=PlaybackMode(values.get(MODE_KEY, defaults.mode.value)),
            )
        except (ValueError, ValidationError):
            logger.warning("Ignoring invalid stored preferences: %r", values)
            return None

    async def save(self, preferences: PlaybackPreferences) -> None:
        async with self._db.transaction() as conn:
            await conn.executemany(
                """
                INSERT INTO preferences (key, value, updated_at)
                VALUES (?, ?, strftime('%Y-%m-%dT%H:%M:%f','now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                [
                    (VOLUME_KEY, repr(preferences.volume)),
                    (MODE_KEY, preferences.mode.value),
                ],
            )
        logger.debug(LogTemplates.PREFERENCES_SAVED, preferences.volume, preferences.mode.value)
