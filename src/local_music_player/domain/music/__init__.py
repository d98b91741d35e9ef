"""
Music Bounded Context

Domain logic for tracks, the playlist, session state and playlist traversal.
"""

from local_music_player.domain.music.entities import (
    PlaybackPreferences,
    Playlist,
    SessionState,
    Track,
)
from local_music_player.domain.music.repository import PreferencesRepository
from local_music_player.domain.music.sequencer import PlaylistSequencer
from local_music_player.domain.music.value_objects import LoadStatus, PlaybackMode, TrackId

__all__ = [
    # Entities
    "Track",
    "SessionState",
    "Playlist",
    "PlaybackPreferences",
    # Value Objects
    "TrackId",
    "PlaybackMode",
    "LoadStatus",
    # Repository
    "PreferencesRepository",
    # Services
    "PlaylistSequencer",
]
