"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from local_music_player.application.interfaces.audio_engine import AudioEngine, AudioSource
from local_music_player.application.interfaces.audio_output import AudioOutput
from local_music_player.application.interfaces.library import Library
from local_music_player.application.interfaces.now_playing import (
    NowPlayingMetadata,
    NowPlayingPublisher,
    PlaybackInfo,
)
from local_music_player.application.interfaces.remote_commands import RemoteCommandSource

__all__ = [
    "AudioEngine",
    "AudioSource",
    "AudioOutput",
    "Library",
    "NowPlayingMetadata",
    "NowPlayingPublisher",
    "PlaybackInfo",
    "RemoteCommandSource",
]
