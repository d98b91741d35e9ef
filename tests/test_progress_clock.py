"""
Unit Tests for the Progress Clock

Tests for:
- Single ticks (publish, skip when idle or scrubbing, clamping)
- Background loop start/restart/stop
- format_time rendering
"""

import asyncio

import pytest
from conftest import settle

from local_music_player.application.services.progress_clock import ProgressClock, format_time
from local_music_player.domain.shared.events import ProgressUpdated


@pytest.fixture
def clock(session, event_bus):
    return ProgressClock(session=session, event_bus=event_bus, interval=0.01)


def progress_events(events):
    return [e for e in events if isinstance(e, ProgressUpdated)]


class TestTick:
    """Tests for a single clock tick."""

    @pytest.mark.asyncio
    async def test_tick_publishes_progress(self, clock, session, engine, tracks, recorded_events):
        await session.load(tracks[0])
        engine.opened[0].advance(50.0)

        sample = await clock.tick()

        assert sample.position == pytest.approx(50.0)
        assert sample.progress == pytest.approx(0.25)
        [event] = progress_events(recorded_events)
        assert event.track_id == tracks[0].id
        assert event.position_seconds == pytest.approx(50.0)
        assert event.duration_seconds == pytest.approx(200.0)

    @pytest.mark.asyncio
    async def test_tick_updates_cached_position(self, clock, session, engine, tracks):
        await session.load(tracks[0])
        engine.opened[0].advance(30.0)

        await clock.tick()

        assert session.snapshot().position == pytest.approx(30.0)
        assert clock.last_sample.position == pytest.approx(30.0)

    @pytest.mark.asyncio
    async def test_tick_skipped_when_idle(self, clock, recorded_events):
        assert await clock.tick() is None
        assert progress_events(recorded_events) == []
        assert clock.last_sample is None

    @pytest.mark.asyncio
    async def test_tick_skipped_while_user_seeking(self, clock, session, engine, tracks, recorded_events):
        """The slider owns the position while the user scrubs."""
        await session.load(tracks[0])
        await session.begin_user_seek()
        engine.opened[0].advance(80.0)

        assert await clock.tick() is None
        assert session.snapshot().position == 0.0
        assert progress_events(recorded_events) == []

    @pytest.mark.asyncio
    async def test_position_clamped_to_duration(self, clock, session, engine, tracks):
        await session.load(tracks[0])
        engine.opened[0].advance(500.0)

        sample = await clock.tick()

        assert sample.position == pytest.approx(200.0)
        assert sample.progress == 1.0

    @pytest.mark.asyncio
    async def test_zero_duration_reports_zero_progress(self, session, event_bus, engine, tracks):
        engine.duration = 0.0
        clock = ProgressClock(session=session, event_bus=event_bus)
        await session.load(tracks[0])
        engine.opened[0].advance(3.0)

        sample = await clock.tick()

        assert sample.progress == 0.0
        assert sample.position == 0.0


class TestLoop:
    """Tests for the background ticker."""

    @pytest.mark.asyncio
    async def test_start_ticks_until_stopped(self, clock, session, tracks, recorded_events):
        await session.load(tracks[0])

        clock.start()
        await asyncio.sleep(0.05)
        await clock.stop()

        count = len(progress_events(recorded_events))
        assert count >= 2
        await asyncio.sleep(0.03)
        assert len(progress_events(recorded_events)) == count
        assert clock.is_running is False

    @pytest.mark.asyncio
    async def test_restart_does_not_duplicate(self, clock):
        clock.start()
        first = clock._task
        clock.start()
        await settle()

        assert first.cancelled()
        assert clock.is_running is True
        await clock.stop()

    @pytest.mark.asyncio
    async def test_stop_when_not_started(self, clock):
        await clock.stop()

        assert clock.is_running is False

    @pytest.mark.asyncio
    async def test_tick_failure_keeps_running(self, clock, session, caplog, monkeypatch):
        calls = 0

        async def broken_sample():
            nonlocal calls
            calls += 1
            raise RuntimeError("sensor glitch")

        monkeypatch.setattr(session, "sample_progress", broken_sample)

        clock.start()
        await asyncio.sleep(0.05)
        await clock.stop()

        assert calls >= 2
        assert "sensor glitch" in caplog.text

    def test_interval_must_be_positive(self, session, event_bus):
        with pytest.raises(ValueError):
            ProgressClock(session=session, event_bus=event_bus, interval=0)


class TestFormatTime:
    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "00:00"),
            (5.9, "00:05"),
            (65, "01:05"),
            (3599, "59:59"),
            (3600, "1:00:00"),
            (3725, "1:02:05"),
            (-4, "00:00"),
        ],
    )
    def test_format_time(self, seconds, expected):
        assert format_time(seconds) == expected
