"""Immutable value objects for the music bounded context."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

from local_music_player.domain.shared.messages import ErrorMessages


@dataclass(frozen=True)
class TrackId:
    """Opaque identifier of a library track."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(ErrorMessages.EMPTY_TRACK_ID)

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)

    @classmethod
    def from_file_name(cls, file_name: str) -> TrackId:
        """Derive a stable ID from a file name relative to the music root."""
        normalized = PurePath(file_name).as_posix()
        return cls(hashlib.md5(normalized.encode()).hexdigest()[:16])


class PlaybackMode(Enum):
    """How the session continues once a track finishes.

    The cycle order is LOOP_ALL -> LOOP_ONE -> RANDOM -> LOOP_ALL.
    """

    LOOP_ALL = "loop_all"
    LOOP_ONE = "loop_one"
    RANDOM = "random"

    def next_mode(self) -> PlaybackMode:
        """Cycle to next playback mode."""
        modes = list(PlaybackMode)
        current_index = modes.index(self)
        next_index = (current_index + 1) % len(modes)
        return modes[next_index]


class LoadStatus(Enum):
    """Outcome of a load request."""

    LOADED = "loaded"
    ALREADY_LOADED = "already_loaded"
    FAILED = "failed"
    SUPERSEDED = "superseded"

    @property
    def succeeded(self) -> bool:
        return self in {LoadStatus.LOADED, LoadStatus.ALREADY_LOADED}
