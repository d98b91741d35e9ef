"""Tests for LoggingNowPlayingPublisher."""

import logging

import pytest

from local_music_player.application.interfaces.now_playing import NowPlayingMetadata, PlaybackInfo
from local_music_player.infrastructure.now_playing.logging_publisher import (
    LoggingNowPlayingPublisher,
)


@pytest.fixture
def publisher():
    return LoggingNowPlayingPublisher()


class TestLoggingNowPlayingPublisher:
    def test_starts_empty(self, publisher):
        assert publisher.info == {}
        assert publisher.has_metadata is False

    def test_metadata_replaces_previous_info(self, publisher):
        publisher.publish_metadata(NowPlayingMetadata(title="Old", artist="A", duration=10))
        publisher.publish_playback(PlaybackInfo(elapsed_time=5, rate=1.0))

        publisher.publish_metadata(NowPlayingMetadata(title="New", artist="B", duration=20))

        assert publisher.info == {"title": "New", "artist": "B", "playback_duration": 20}

    def test_artwork_included_when_present(self, publisher):
        publisher.publish_metadata(
            NowPlayingMetadata(title="T", artist="A", duration=1, artwork=b"img")
        )

        assert publisher.info["artwork"] == b"img"

    def test_playback_updates_elapsed_and_rate(self, publisher):
        publisher.publish_metadata(NowPlayingMetadata(title="T", artist="A", duration=100))

        publisher.publish_playback(PlaybackInfo(elapsed_time=42.5, rate=0.0))

        assert publisher.info["elapsed_playback_time"] == pytest.approx(42.5)
        assert publisher.info["playback_rate"] == 0.0
        assert publisher.info["title"] == "T"

    def test_clear(self, publisher):
        publisher.publish_metadata(NowPlayingMetadata(title="T", artist="A", duration=1))

        publisher.clear()

        assert publisher.info == {}
        assert publisher.has_metadata is False

    def test_info_is_a_copy(self, publisher):
        publisher.publish_metadata(NowPlayingMetadata(title="T", artist="A", duration=1))

        publisher.info["title"] = "changed"

        assert publisher.info["title"] == "T"

    def test_metadata_logged(self, publisher, caplog):
        with caplog.at_level(logging.INFO):
            publisher.publish_metadata(NowPlayingMetadata(title="Song", artist="Band", duration=61))

        assert "Song" in caplog.text


class TestSessionPublishing:
    """The session keeps the publisher in step with playback."""

    @pytest.mark.asyncio
    async def test_load_publishes_metadata_and_rate(self, session, publisher, library, tracks):
        library.covers[tracks[0].file_name] = b"cover"

        await session.load(tracks[0])

        info = publisher.info
        assert info["title"] == "Alpha"
        assert info["artist"] == "Test Artist"
        assert info["playback_duration"] == pytest.approx(200.0)
        assert info["artwork"] == b"cover"
        assert info["playback_rate"] == 1.0
        assert info["elapsed_playback_time"] == 0.0

    @pytest.mark.asyncio
    async def test_pause_publishes_zero_rate(self, session, publisher, engine, tracks):
        await session.load(tracks[0])
        engine.opened[0].advance(7.0)

        await session.pause()

        assert publisher.info["playback_rate"] == 0.0
        assert publisher.info["elapsed_playback_time"] == pytest.approx(7.0)

    @pytest.mark.asyncio
    async def test_stop_clears(self, session, publisher, tracks):
        await session.load(tracks[0])

        await session.stop()

        assert publisher.info == {}
