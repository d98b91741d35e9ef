"""Lyrics Application Service - keeps the announced track's lyric line current."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ...domain.lyrics.cursor import LyricCursor
from ...domain.lyrics.parser import LrcImporter
from ...domain.shared.events import (
    LyricLineChanged,
    ProgressUpdated,
    SessionStopped,
    TrackLoaded,
    TrackLoadFailed,
)
from ...domain.shared.exceptions import ParseError
from ...domain.shared.messages import LogTemplates
from .lyrics_models import LyricImportResult

if TYPE_CHECKING:
    from ...domain.lyrics.entities import LyricPosition, LyricTrack
    from ...domain.lyrics.repository import LyricsRepository
    from ...domain.music.value_objects import TrackId
    from ...domain.shared.events import EventBus

logger = logging.getLogger(__name__)


class LyricsService:
    """Owns the lyrics of the announced track and follows progress updates.

    ``LyricLineChanged`` is published only when the active line index moves,
    not on every clock tick.
    """

    def __init__(
        self,
        *,
        event_bus: EventBus,
        repository: LyricsRepository | None = None,
        importer: LrcImporter | None = None,
    ) -> None:
        self._bus = event_bus
        self._repo = repository
        self._importer = importer or LrcImporter()
        self._track_id: TrackId | None = None
        self._cursor: LyricCursor | None = None
        self._last_index: int | None = None
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._bus.subscribe(TrackLoaded, self._on_track_loaded)
        self._bus.subscribe(ProgressUpdated, self._on_progress)
        self._bus.subscribe(SessionStopped, self._on_session_stopped)
        self._bus.subscribe(TrackLoadFailed, self._on_track_load_failed)
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        self._bus.unsubscribe(TrackLoaded, self._on_track_loaded)
        self._bus.unsubscribe(ProgressUpdated, self._on_progress)
        self._bus.unsubscribe(SessionStopped, self._on_session_stopped)
        self._bus.unsubscribe(TrackLoadFailed, self._on_track_load_failed)
        self._started = False

    @property
    def track_id(self) -> TrackId | None:
        return self._track_id

    @property
    def lyrics(self) -> LyricTrack | None:
        return self._cursor.lyrics if self._cursor is not None else None

    def resolve(self, position: float) -> LyricPosition | None:
        if self._cursor is None:
            return None
        return self._cursor.resolve(position)

    # === Import ===

    async def import_lyrics(self, track_id: TrackId, text: str) -> LyricImportResult:
        """Parse *text* and make it the lyrics of *track_id*, replacing older ones."""
        try:
            lyrics = self._importer.parse(text)
        except ParseError as e:
            logger.warning(LogTemplates.LYRICS_IMPORT_FAILED, track_id, e.message)
            return LyricImportResult(success=False, track_id=track_id, message=e.message)

        return await self._store(track_id, text, lyrics)

    async def import_lyrics_file(self, track_id: TrackId, path: Path) -> LyricImportResult:
        """Import an ``.lrc`` file; any other extension is rejected."""
        try:
            lyrics = self._importer.parse_file(path)
            text = path.read_text(encoding="utf-8-sig")
        except ParseError as e:
            logger.warning(LogTemplates.LYRICS_IMPORT_FAILED, track_id, e.message)
            return LyricImportResult(success=False, track_id=track_id, message=e.message)
        except OSError as e:
            logger.warning(LogTemplates.LYRICS_IMPORT_FAILED, track_id, e)
            return LyricImportResult(success=False, track_id=track_id, message=str(e))

        return await self._store(track_id, text, lyrics)

    async def _store(self, track_id: TrackId, text: str, lyrics: LyricTrack) -> LyricImportResult:
        if self._repo is not None:
            await self._repo.save(track_id, text)

        if track_id == self._track_id:
            self._set_lyrics(track_id, lyrics)

        logger.info(LogTemplates.LYRICS_IMPORTED, len(lyrics), track_id)
        return LyricImportResult(
            success=True,
            track_id=track_id,
            line_count=len(lyrics),
            message=f"Imported {len(lyrics)} lines",
        )

    async def clear_lyrics(self, track_id: TrackId) -> bool:
        removed = False
        if self._repo is not None:
            removed = await self._repo.delete(track_id)
        if track_id == self._track_id:
            self._cursor = None
            self._last_index = None
        logger.info(LogTemplates.LYRICS_CLEARED, track_id)
        return removed

    # === Announced track ===

    async def load_for(self, track_id: TrackId) -> LyricTrack | None:
        """Make *track_id* the followed track and load its stored lyrics."""
        self._track_id = track_id
        self._cursor = None
        self._last_index = None

        if self._repo is None:
            return None

        text = await self._repo.get(track_id)
        if text is None:
            return None

        try:
            lyrics = self._importer.parse(text)
        except ParseError as e:
            logger.warning(LogTemplates.LYRICS_IMPORT_FAILED, track_id, e.message)
            return None

        self._set_lyrics(track_id, lyrics)
        logger.debug(LogTemplates.LYRICS_LOADED, len(lyrics), track_id)
        return lyrics

    def _set_lyrics(self, track_id: TrackId, lyrics: LyricTrack) -> None:
        self._track_id = track_id
        self._cursor = LyricCursor(lyrics)
        self._last_index = None

    # === Event handlers ===

    async def _on_track_loaded(self, event: TrackLoaded) -> None:
        await self.load_for(event.track_id)

    async def _on_session_stopped(self, event: SessionStopped) -> None:
        self._forget()

    async def _on_track_load_failed(self, event: TrackLoadFailed) -> None:
        # The previous track was torn down before the failed open.
        self._forget()

    def _forget(self) -> None:
        self._track_id = None
        self._cursor = None
        self._last_index = None

    async def _on_progress(self, event: ProgressUpdated) -> None:
        cursor = self._cursor
        if cursor is None or event.track_id != self._track_id:
            return

        resolved = cursor.resolve(event.position_seconds)
        if resolved.index == self._last_index:
            return

        self._last_index = resolved.index
        await self._bus.publish(
            LyricLineChanged(
                track_id=self._track_id,
                index=resolved.index,
                text=resolved.active.text if resolved.active else None,
                next_text=resolved.next.text if resolved.next else None,
                line_count=len(cursor.lyrics),
            )
        )
