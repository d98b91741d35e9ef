"""Audio infrastructure - ffplay engine and output path."""

from local_music_player.infrastructure.audio.ffplay_engine import (
    FFplayAudioEngine,
    FFplayConfig,
    FFplaySource,
)
from local_music_player.infrastructure.audio.system_output import DefaultAudioOutput

__all__ = [
    "DefaultAudioOutput",
    "FFplayAudioEngine",
    "FFplayConfig",
    "FFplaySource",
]
