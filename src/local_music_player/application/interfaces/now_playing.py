"""Port interface for the OS now-playing surface (lock screen, media keys)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from local_music_player.domain.shared.types import NonNegativeFloat, PlaybackRate


class NowPlayingMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    artist: str = ""
    duration: NonNegativeFloat = 0.0
    artwork: bytes | None = None


class PlaybackInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    elapsed_time: NonNegativeFloat = 0.0
    rate: PlaybackRate = 0.0


class NowPlayingPublisher(ABC):
    """Receives the session-level now-playing contract."""

    @abstractmethod
    def publish_metadata(self, metadata: NowPlayingMetadata) -> None:
        """Replace the announced track metadata."""
        ...

    @abstractmethod
    def publish_playback(self, info: PlaybackInfo) -> None:
        """Update elapsed time and rate, keeping the metadata."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove all now-playing information."""
        ...
