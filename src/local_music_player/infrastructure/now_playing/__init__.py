"""Now-playing infrastructure."""

from local_music_player.infrastructure.now_playing.logging_publisher import (
    LoggingNowPlayingPublisher,
)

__all__ = ["LoggingNowPlayingPublisher"]
