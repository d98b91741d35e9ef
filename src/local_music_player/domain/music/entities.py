"""Core domain entities for the music bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from local_music_player.domain.music.value_objects import PlaybackMode, TrackId
from local_music_player.domain.shared.messages import ErrorMessages
from local_music_player.domain.shared.types import (
    Fraction,
    NonEmptyStr,
    NonNegativeFloat,
    Seconds,
    TrackTitleStr,
)


class Track(BaseModel):
    """Immutable value object representing a playable library track."""

    model_config = ConfigDict(frozen=True)

    id: TrackId
    title: TrackTitleStr
    artist: str = ""
    file_name: NonEmptyStr
    duration_seconds: Seconds | None = None

    @property
    def duration_formatted(self) -> str:
        """Format duration as MM:SS or H:MM:SS."""
        if self.duration_seconds is None:
            return "Unknown"

        hours, remainder = divmod(int(self.duration_seconds), 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @property
    def display_title(self) -> str:
        if self.artist:
            return f"{self.artist} - {self.title}"
        return self.title


class SessionState(BaseModel):
    """The single live record of playback state.

    Owned and written exclusively by the playback session. Other components
    only ever see copies returned by ``PlaybackSession.snapshot()``.
    """

    model_config = ConfigDict(validate_assignment=True)

    loaded_track_id: TrackId | None = None
    announced_track_id: TrackId | None = None
    is_playing: bool = False
    position: NonNegativeFloat = 0.0
    duration: NonNegativeFloat = 0.0
    mode: PlaybackMode = PlaybackMode.LOOP_ALL
    volume: Fraction = 0.7
    system_output_level: Fraction = 1.0
    is_user_seeking: bool = False

    @property
    def is_loaded(self) -> bool:
        return self.loaded_track_id is not None

    @property
    def effective_volume(self) -> float:
        """Engine volume: the user's baseline scaled by the system output level."""
        return self.volume * self.system_output_level

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 0.0
        return min(1.0, self.position / self.duration)

    def reset(self) -> None:
        """Return to the empty form, keeping mode and volume preferences."""
        self.is_playing = False
        self.loaded_track_id = None
        self.announced_track_id = None
        self.position = 0.0
        self.duration = 0.0
        self.is_user_seeking = False


class Playlist(BaseModel):
    """Ordered, user-editable list of tracks the session plays through."""

    tracks: list[Track] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tracks)

    def __contains__(self, track_id: object) -> bool:
        return any(t.id == track_id for t in self.tracks)

    @property
    def is_empty(self) -> bool:
        return not self.tracks

    def snapshot(self) -> tuple[TrackId, ...]:
        """Immutable view of the track order for a single traversal decision."""
        return tuple(t.id for t in self.tracks)

    def get(self, track_id: TrackId) -> Track | None:
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def index_of(self, track_id: TrackId) -> int | None:
        for index, track in enumerate(self.tracks):
            if track.id == track_id:
                return index
        return None

    def append(self, track: Track) -> int:
        """Add a track to the end and return its position.

        A track already in the playlist is not added twice; its current
        position is returned instead.
        """
        existing = self.index_of(track.id)
        if existing is not None:
            return existing
        self.tracks.append(track)
        return len(self.tracks) - 1

    def extend(self, tracks: list[Track]) -> int:
        """Append several tracks and return how many were new."""
        before = len(self.tracks)
        for track in tracks:
            self.append(track)
        return len(self.tracks) - before

    def insert(self, position: int, track: Track) -> int:
        if self.index_of(track.id) is not None:
            raise ValueError(ErrorMessages.DUPLICATE_PLAYLIST_TRACK.format(title=track.title))
        position = max(0, min(position, len(self.tracks)))
        self.tracks.insert(position, track)
        return position

    def remove(self, track_id: TrackId) -> Track | None:
        index = self.index_of(track_id)
        if index is None:
            return None
        return self.tracks.pop(index)

    def move(self, from_pos: int, to_pos: int) -> bool:
        if not (0 <= from_pos < len(self.tracks) and 0 <= to_pos < len(self.tracks)):
            return False

        track = self.tracks.pop(from_pos)
        self.tracks.insert(to_pos, track)
        return True

    def clear(self) -> int:
        count = len(self.tracks)
        self.tracks.clear()
        return count


class PlaybackPreferences(BaseModel):
    """User preferences restored across launches."""

    model_config = ConfigDict(frozen=True)

    volume: Fraction = 0.7
    mode: PlaybackMode = PlaybackMode.LOOP_ALL
