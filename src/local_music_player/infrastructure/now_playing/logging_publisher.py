"""Now-playing publisher that keeps the announced info in memory and logs it."""

from __future__ import annotations

import logging
from typing import Any

from local_music_player.application.interfaces.now_playing import (
    NowPlayingMetadata,
    NowPlayingPublisher,
    PlaybackInfo,
)
from local_music_player.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

TITLE = "title"
ARTIST = "artist"
DURATION = "playback_duration"
ARTWORK = "artwork"
ELAPSED = "elapsed_playback_time"
RATE = "playback_rate"


class LoggingNowPlayingPublisher(NowPlayingPublisher):
    """Mirrors the now-playing dictionary a media-control surface would receive."""

    def __init__(self) -> None:
        self._info: dict[str, Any] = {}

    @property
    def info(self) -> dict[str, Any]:
        return dict(self._info)

    @property
    def has_metadata(self) -> bool:
        return TITLE in self._info

    def publish_metadata(self, metadata: NowPlayingMetadata) -> None:
        self._info = {
            TITLE: metadata.title,
            ARTIST: metadata.artist,
            DURATION: metadata.duration,
        }
        if metadata.artwork is not None:
            self._info[ARTWORK] = metadata.artwork
        logger.info(
            LogTemplates.NOW_PLAYING_METADATA, metadata.artist, metadata.title, metadata.duration
        )

    def publish_playback(self, info: PlaybackInfo) -> None:
        self._info[ELAPSED] = info.elapsed_time
        self._info[RATE] = info.rate
        logger.debug(LogTemplates.NOW_PLAYING_PLAYBACK, info.elapsed_time, info.rate)

    def clear(self) -> None:
        if self._info:
            logger.debug(LogTemplates.NOW_PLAYING_CLEARED)
        self._info = {}
