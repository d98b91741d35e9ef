import asyncio
from pathlib import Path

import pytest
import pytest_asyncio

from local_music_player.application.interfaces.audio_engine import AudioEngine, AudioSource
from local_music_player.application.interfaces.library import Library
from local_music_player.domain.music.entities import Track
from local_music_player.domain.music.value_objects import TrackId
from local_music_player.domain.shared.exceptions import LoadError

# ============================================================================
# Fake Engine
# ============================================================================


class FakeSource(AudioSource):
    """In-memory audio source recording every call made on it."""

    def __init__(self, name: str, duration: float, *, requires_seek_commit: bool = False) -> None:
        self.name = name
        self._duration = duration
        self._playing = False
        self._position = 0.0
        self.volume: float | None = None
        self.closed = False
        self.calls: list[str] = []
        self.requires_seek_commit = requires_seek_commit
        self.fail_play = False
        self.fail_volume = False

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def is_playing(self) -> bool:
        return self._playing

    def position(self) -> float:
        return self._position

    def advance(self, seconds: float) -> None:
        self._position += seconds

    async def play(self) -> None:
        self.calls.append("play")
        if self.fail_play:
            raise LoadError(f"cannot start {self.name}", file_ref=self.name)
        self._playing = True

    async def pause(self) -> None:
        self.calls.append("pause")
        self._playing = False

    async def set_position(self, seconds: float) -> None:
        self.calls.append(f"set_position:{seconds:g}")
        self._position = seconds

    async def set_volume(self, volume: float) -> None:
        self.calls.append(f"set_volume:{volume:g}")
        if self.fail_volume:
            raise LoadError(f"cannot restart {self.name}", file_ref=self.name)
        self.volume = volume

    async def close(self) -> None:
        self.calls.append("close")
        self._playing = False
        self.closed = True


class FakeEngine(AudioEngine):
    """Engine whose opens can be held back with gates to stage load races."""

    def __init__(self, duration: float = 200.0, *, requires_seek_commit: bool = False) -> None:
        self.duration = duration
        self.requires_seek_commit = requires_seek_commit
        self.gates: dict[str, asyncio.Event] = {}
        self.failing: set[str] = set()
        self.failing_play: set[str] = set()
        self.opened: list[FakeSource] = []
        self.on_finished = None

    def gate(self, name: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[name] = event
        return event

    def set_on_finished(self, callback) -> None:
        self.on_finished = callback

    async def open(self, file_ref: Path) -> FakeSource:
        name = Path(file_ref).name
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        if name in self.failing:
            raise LoadError(f"cannot decode {name}", file_ref=name)

        source = FakeSource(name, self.duration, requires_seek_commit=self.requires_seek_commit)
        source.fail_play = name in self.failing_play
        self.opened.append(source)
        return source

    async def finish(self, source: FakeSource) -> None:
        """Simulate the source playing to its natural end."""
        source._playing = False
        source._position = source.duration
        await self.on_finished(source)


class FakeLibrary(Library):
    def __init__(self, tracks: list[Track] | None = None) -> None:
        self.tracks = list(tracks or [])
        self.missing: set[str] = set()
        self.covers: dict[str, bytes] = {}

    def resolve_file(self, track: Track) -> Path | None:
        if track.file_name in self.missing:
            return None
        return Path("/music") / track.file_name

    def cover_image(self, track: Track) -> bytes | None:
        return self.covers.get(track.file_name)

    def scan(self) -> list[Track]:
        return list(self.tracks)


def make_track(name: str, artist: str = "Test Artist") -> Track:
    return Track(
        id=TrackId(name),
        title=name.replace("-", " ").title(),
        artist=artist,
        file_name=f"{name}.mp3",
    )


async def settle() -> None:
    """Let tasks blocked on the event loop run until they park again."""
    for _ in range(5):
        await asyncio.sleep(0)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from local_music_player.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def preferences_repository(in_memory_database):
    from local_music_player.infrastructure.persistence.repositories.preferences_repository import (
        SQLitePreferencesRepository,
    )

    return SQLitePreferencesRepository(in_memory_database)


@pytest_asyncio.fixture
async def lyrics_repository(in_memory_database):
    from local_music_player.infrastructure.persistence.repositories.lyrics_repository import (
        SQLiteLyricsRepository,
    )

    return SQLiteLyricsRepository(in_memory_database)


# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def tracks():
    """Three tracks A, B, C in playlist order."""
    return [make_track("alpha"), make_track("bravo"), make_track("charlie")]


@pytest.fixture
def sample_track(tracks):
    return tracks[0]


@pytest.fixture
def playlist(tracks):
    from local_music_player.domain.music.entities import Playlist

    return Playlist(tracks=list(tracks))


@pytest.fixture
def event_bus():
    from local_music_player.domain.shared.events import EventBus

    return EventBus()


@pytest.fixture
def recorded_events(event_bus):
    """Every session, clock and lyric event published on the bus, in order."""
    from local_music_player.domain.shared.events import (
        LyricLineChanged,
        PlaybackModeChanged,
        PlaybackStateChanged,
        ProgressUpdated,
        SessionStopped,
        TrackLoaded,
        TrackLoadFailed,
    )

    events = []

    async def record(event):
        events.append(event)

    for event_type in (
        TrackLoaded,
        TrackLoadFailed,
        PlaybackStateChanged,
        PlaybackModeChanged,
        SessionStopped,
        ProgressUpdated,
        LyricLineChanged,
    ):
        event_bus.subscribe(event_type, record)
    return events


# ============================================================================
# Session Fixtures
# ============================================================================


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def library(tracks):
    return FakeLibrary(tracks)


@pytest.fixture
def publisher():
    from local_music_player.infrastructure.now_playing.logging_publisher import (
        LoggingNowPlayingPublisher,
    )

    return LoggingNowPlayingPublisher()


@pytest.fixture
def sequencer():
    import random

    from local_music_player.domain.music.sequencer import PlaylistSequencer

    return PlaylistSequencer(random.Random(1234))


@pytest.fixture
def session(engine, library, publisher, playlist, sequencer, event_bus):
    """A playback session wired to fakes, with no preference persistence."""
    from local_music_player.application.services.playback_session import PlaybackSession

    return PlaybackSession(
        engine=engine,
        library=library,
        now_playing=publisher,
        playlist=playlist,
        sequencer=sequencer,
        event_bus=event_bus,
    )
