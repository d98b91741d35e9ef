"""Interactive console front end wiring the command source to the session."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from local_music_player.application.services.progress_clock import format_time
from local_music_player.application.services.transport_models import CommandStatus
from local_music_player.domain.shared.events import (
    LyricLineChanged,
    PlaybackModeChanged,
    SessionStopped,
    TrackLoaded,
    TrackLoadFailed,
)
from local_music_player.domain.shared.messages import ErrorMessages, LogTemplates
from local_music_player.infrastructure.console.command_source import (
    HELP_TEXT,
    ImportLyrics,
    PlayTrackAt,
    ShowInfo,
)

if TYPE_CHECKING:
    from local_music_player.application.interfaces.remote_commands import RemoteCommandSource
    from local_music_player.application.services.transport_models import TransportEvent
    from local_music_player.config.container import Container

logger = logging.getLogger(__name__)


class ConsolePlayerApp:
    """Runs one listening session: scan, restore, then route commands until quit."""

    def __init__(
        self,
        container: Container,
        source: RemoteCommandSource,
        *,
        out: TextIO | None = None,
        autoplay: bool = False,
    ) -> None:
        self._container = container
        self._source = source
        self._out = out or sys.stdout
        self._autoplay = autoplay

    def _print(self, message: str) -> None:
        print(message, file=self._out, flush=True)

    async def run(self) -> int:
        container = self._container
        await container.initialize()
        try:
            tracks = container.library.scan()
            if not tracks:
                self._print(ErrorMessages.LIBRARY_EMPTY.format(path=container.library_root))
                return 1

            container.playlist.extend(tracks)
            self._subscribe()
            self._print_playlist()
            self._print("Type 'help' for commands.")

            if self._autoplay:
                await container.playback_session.load(tracks[0], autoplay=True)
            container.progress_clock.start()

            async for event in self._source.events():
                await self.dispatch(event)
            return 0
        finally:
            self._unsubscribe()
            await container.shutdown()
            logger.info(LogTemplates.APP_SHUTDOWN)

    async def dispatch(self, event: TransportEvent) -> None:
        container = self._container
        session = container.playback_session

        match event:
            case PlayTrackAt(index=index):
                tracks = container.playlist.tracks
                if index >= len(tracks):
                    self._print(f"No track number {index + 1}")
                    return
                await session.load(tracks[index], autoplay=True)
            case ImportLyrics(path=path):
                track_id = session.announced_track_id
                if track_id is None:
                    self._print(ErrorMessages.LYRICS_NO_TRACK)
                    return
                result = await container.lyrics_service.import_lyrics_file(track_id, path)
                self._print(result.message)
            case ShowInfo(topic="list"):
                self._print_playlist()
            case ShowInfo(topic="help"):
                self._print(HELP_TEXT)
            case ShowInfo():
                self._print_status()
            case _:
                status = await container.transport_router.handle(event)
                if status is CommandStatus.COMMAND_FAILED:
                    self._print(f"'{event.kind}' is not available right now")

    # === Output ===

    def _print_playlist(self) -> None:
        announced = self._container.playback_session.announced_track_id
        for number, track in enumerate(self._container.playlist.tracks, start=1):
            marker = ">" if track.id == announced else " "
            self._print(f"{marker} {number:3d}. {track.display_title}")

    def _print_status(self) -> None:
        state = self._container.playback_session.snapshot()
        track = self._container.playback_session.announced_track
        if track is None:
            self._print(f"Stopped | mode {state.mode.value} | volume {state.volume:.2f}")
            return

        status = "Playing" if state.is_playing else "Paused"
        self._print(
            f"{status} {track.display_title} "
            f"{format_time(state.position)} / {format_time(state.duration)} "
            f"| mode {state.mode.value} | volume {state.volume:.2f}"
        )

    # === Event subscribers ===

    def _subscribe(self) -> None:
        bus = self._container.event_bus
        bus.subscribe(TrackLoaded, self._on_track_loaded)
        bus.subscribe(TrackLoadFailed, self._on_track_load_failed)
        bus.subscribe(SessionStopped, self._on_session_stopped)
        bus.subscribe(PlaybackModeChanged, self._on_mode_changed)
        bus.subscribe(LyricLineChanged, self._on_lyric_line)

    def _unsubscribe(self) -> None:
        bus = self._container.event_bus
        bus.unsubscribe(TrackLoaded, self._on_track_loaded)
        bus.unsubscribe(TrackLoadFailed, self._on_track_load_failed)
        bus.unsubscribe(SessionStopped, self._on_session_stopped)
        bus.unsubscribe(PlaybackModeChanged, self._on_mode_changed)
        bus.unsubscribe(LyricLineChanged, self._on_lyric_line)

    async def _on_track_loaded(self, event: TrackLoaded) -> None:
        verb = "Playing" if event.autoplay else "Loaded"
        self._print(f"{verb}: {event.track_title} [{format_time(event.duration_seconds)}]")

    async def _on_track_load_failed(self, event: TrackLoadFailed) -> None:
        self._print(f"Could not play track: {event.reason}")

    async def _on_session_stopped(self, event: SessionStopped) -> None:
        self._print("Stopped")

    async def _on_mode_changed(self, event: PlaybackModeChanged) -> None:
        self._print(f"Mode: {event.mode.value}")

    async def _on_lyric_line(self, event: LyricLineChanged) -> None:
        if event.text:
            self._print(f"  ♪ {event.text}")
