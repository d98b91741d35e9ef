"""Result models returned by the playback session."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ...domain.music.value_objects import LoadStatus, TrackId
from ...domain.shared.types import Fraction, NonNegativeFloat


class LoadResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: LoadStatus
    track_id: TrackId | None = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status.succeeded


class ProgressSample(BaseModel):
    """One read of the live position, clamped to the track duration."""

    model_config = ConfigDict(frozen=True)

    track_id: TrackId | None = None
    position: NonNegativeFloat = 0.0
    duration: NonNegativeFloat = 0.0
    progress: Fraction = 0.0

    @classmethod
    def from_reading(
        cls, track_id: TrackId | None, position: float, duration: float
    ) -> ProgressSample:
        duration = max(0.0, duration)
        position = max(0.0, min(position, duration))
        progress = position / duration if duration > 0 else 0.0
        return cls(
            track_id=track_id,
            position=position,
            duration=duration,
            progress=min(1.0, progress),
        )
