"""SQLite implementation of the lyrics repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from local_music_player.domain.lyrics.repository import LyricsRepository
from local_music_player.domain.music.value_objects import TrackId

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLiteLyricsRepository(LyricsRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, track_id: TrackId) -> str | None:
        row = await self._db.fetch_one(
            "SELECT content FROM lyrics WHERE track_id = ?",
            (track_id.value,),
        )
        return row["content"] if row else None

    async def save(self, track_id: TrackId, text: str) -> None:
        await self._db.execute(
            """
            INSERT INTO lyrics (track_id, content, imported_at)
            VALUES (?, ?, strftime('%Y-%m-%dT%H:%M:%f','now'))
            ON CONFLICT(track_id) DO UPDATE SET
                content = excluded.content,
                imported_at = excluded.imported_at
            """,
            (track_id.value, text),
        )
        logger.debug("Saved lyrics for %s", track_id)

    async def delete(self, track_id: TrackId) -> bool:
        deleted = await self._db.execute(
            "DELETE FROM lyrics WHERE track_id = ?",
            (track_id.value,),
        )
        return deleted > 0
