"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the playback session, its collaborators, and
the persistence layer. Components are created on-demand and cached for reuse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.interfaces.audio_engine import AudioEngine
    from ..application.interfaces.audio_output import AudioOutput
    from ..application.interfaces.library import Library
    from ..application.interfaces.now_playing import NowPlayingPublisher
    from ..application.services.lyrics_service import LyricsService
    from ..application.services.playback_session import PlaybackSession
    from ..application.services.progress_clock import ProgressClock
    from ..application.services.transport_router import TransportEventRouter
    from ..domain.lyrics.repository import LyricsRepository
    from ..domain.music.entities import Playlist
    from ..domain.music.repository import PreferencesRepository
    from ..domain.music.sequencer import PlaylistSequencer
    from ..domain.shared.events import EventBus
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Holds exactly one playback session per process; nothing in the package
    reaches for a global. Any component may be supplied up front (tests pass
    fakes for the engine and library); the rest are built on first access.
    """

    settings: Settings
    music_dir: Path | None = None

    # Persistence layer
    _database: Database | None = None
    _preferences_repository: PreferencesRepository | None = None
    _lyrics_repository: LyricsRepository | None = None

    # Infrastructure adapters
    _audio_engine: AudioEngine | None = None
    _audio_output: AudioOutput | None = None
    _library: Library | None = None
    _now_playing: NowPlayingPublisher | None = None

    # Domain
    _event_bus: EventBus | None = None
    _playlist: Playlist | None = None
    _sequencer: PlaylistSequencer | None = None

    # Application services
    _playback_session: PlaybackSession | None = None
    _transport_router: TransportEventRouter | None = None
    _progress_clock: ProgressClock | None = None
    _lyrics_service: LyricsService | None = None

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    # === Repositories ===

    @property
    def preferences_repository(self) -> PreferencesRepository:
        if self._preferences_repository is None:
            from ..infrastructure.persistence.repositories.preferences_repository import (
                SQLitePreferencesRepository,
            )

            self._preferences_repository = SQLitePreferencesRepository(self.database)
        return self._preferences_repository

    @property
    def lyrics_repository(self) -> LyricsRepository:
        if self._lyrics_repository is None:
            from ..infrastructure.persistence.repositories.lyrics_repository import (
                SQLiteLyricsRepository,
            )

            self._lyrics_repository = SQLiteLyricsRepository(self.database)
        return self._lyrics_repository

    # === Infrastructure Adapters ===

    @property
    def audio_engine(self) -> AudioEngine:
        if self._audio_engine is None:
            from ..infrastructure.audio.ffplay_engine import FFplayAudioEngine

            self._audio_engine = FFplayAudioEngine(self.settings.audio)
        return self._audio_engine

    @property
    def audio_output(self) -> AudioOutput:
        if self._audio_output is None:
            from ..infrastructure.audio.system_output import DefaultAudioOutput

            self._audio_output = DefaultAudioOutput()
        return self._audio_output

    @property
    def library_root(self) -> Path:
        """The CLI directory, else the configured one, else the working directory."""
        return self.music_dir or self.settings.library.music_dir or Path.cwd()

    @property
    def library(self) -> Library:
        if self._library is None:
            from ..infrastructure.library.filesystem_library import FilesystemLibrary

            self._library = FilesystemLibrary(self.library_root, self.settings.library)
        return self._library

    @property
    def now_playing(self) -> NowPlayingPublisher:
        if self._now_playing is None:
            from ..infrastructure.now_playing.logging_publisher import (
                LoggingNowPlayingPublisher,
            )

            self._now_playing = LoggingNowPlayingPublisher()
        return self._now_playing

    # === Domain ===

    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            from ..domain.shared.events import EventBus

            self._event_bus = EventBus()
        return self._event_bus

    @property
    def playlist(self) -> Playlist:
        if self._playlist is None:
            from ..domain.music.entities import Playlist

            self._playlist = Playlist()
        return self._playlist

    @property
    def sequencer(self) -> PlaylistSequencer:
        if self._sequencer is None:
            from ..domain.music.sequencer import PlaylistSequencer

            self._sequencer = PlaylistSequencer()
        return self._sequencer

    # === Application Services ===

    @property
    def playback_session(self) -> PlaybackSession:
        if self._playback_session is None:
            from ..application.services.playback_session import PlaybackSession

            self._playback_session = PlaybackSession(
                engine=self.audio_engine,
                library=self.library,
                now_playing=self.now_playing,
                playlist=self.playlist,
                sequencer=self.sequencer,
                event_bus=self.event_bus,
                preferences_repository=self.preferences_repository,
                initial_volume=self.settings.audio.default_volume,
            )
        return self._playback_session

    @property
    def transport_router(self) -> TransportEventRouter:
        if self._transport_router is None:
            from ..application.services.transport_router import TransportEventRouter

            self._transport_router = TransportEventRouter(
                session=self.playback_session,
                audio_output=self.audio_output,
            )
        return self._transport_router

    @property
    def progress_clock(self) -> ProgressClock:
        if self._progress_clock is None:
            from ..application.services.progress_clock import ProgressClock

            self._progress_clock = ProgressClock(
                session=self.playback_session,
                event_bus=self.event_bus,
                interval=self.settings.clock.tick_interval_seconds,
            )
        return self._progress_clock

    @property
    def lyrics_service(self) -> LyricsService:
        if self._lyrics_service is None:
            from ..application.services.lyrics_service import LyricsService

            self._lyrics_service = LyricsService(
                event_bus=self.event_bus,
                repository=self.lyrics_repository,
            )
        return self._lyrics_service

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()
        await self.playback_session.restore_preferences()

        # Start cross-cutting subscribers.
        self.lyrics_service.start()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._progress_clock is not None:
            await self._progress_clock.stop()

        if self._playback_session is not None:
            try:
                await self._playback_session.shutdown()
            except Exception as exc:
                logger.warning("Failed stopping playback session: %r", exc)

        if self._lyrics_service is not None:
            self._lyrics_service.stop()

        if self._database is not None:
            await self._database.close()

        if self._event_bus is not None:
            self._event_bus.clear()


def create_container(settings: Settings, music_dir: Path | None = None) -> Container:
    """Create a container for the given settings and optional library root."""
    return Container(settings=settings, music_dir=music_dir)
