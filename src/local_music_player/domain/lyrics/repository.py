"""Lyrics repository interface."""

from abc import ABC, abstractmethod

from local_music_player.domain.music.value_objects import TrackId


class LyricsRepository(ABC):
    """Abstract storage of raw lyric text, one file per track.

    Raw text is stored rather than parsed lines so that parser improvements
    apply to lyrics imported earlier.
    """

    @abstractmethod
    async def get(self, track_id: TrackId) -> str | None:
        """Return the stored lyric text for a track, or None."""
        ...

    @abstractmethod
    async def save(self, track_id: TrackId, text: str) -> None:
        """Store lyric text for a track, replacing any previous import."""
        ...

    @abstractmethod
    async def delete(self, track_id: TrackId) -> bool:
        """Delete a track's lyrics. Returns True if something was removed."""
        ...
