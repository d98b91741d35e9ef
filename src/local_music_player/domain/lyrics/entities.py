"""Entities for time-synchronized lyrics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from local_music_player.domain.shared.messages import ErrorMessages
from local_music_player.domain.shared.types import NonNegativeFloat


class LyricLine(BaseModel):
    """A single lyric line shown from ``timestamp`` onwards."""

    model_config = ConfigDict(frozen=True)

    timestamp: NonNegativeFloat
    text: str = ""


class LyricTrack(BaseModel):
    """Parsed lyrics for one track, ordered by timestamp.

    Timestamps are non-decreasing. Lines sharing a timestamp keep their
    original file order.
    """

    model_config = ConfigDict(frozen=True)

    lines: tuple[LyricLine, ...] = Field(default_factory=tuple)
    title: str | None = None
    artist: str | None = None

    @model_validator(mode="after")
    def _check_order(self) -> LyricTrack:
        for earlier, later in zip(self.lines, self.lines[1:]):
            if later.timestamp < earlier.timestamp:
                raise ValueError(ErrorMessages.LYRICS_NOT_SORTED)
        return self

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def timestamps(self) -> tuple[float, ...]:
        return tuple(line.timestamp for line in self.lines)


class LyricPosition(BaseModel):
    """Resolution of a playback position against a lyric track."""

    model_config = ConfigDict(frozen=True)

    index: int = -1
    active: LyricLine | None = None
    next: LyricLine | None = None

    @property
    def has_active(self) -> bool:
        return self.active is not None
