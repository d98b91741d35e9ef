"""Playback Session - the single owner of "what is playing, where, and how"."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ...domain.music.entities import PlaybackPreferences, SessionState, Track
from ...domain.music.value_objects import LoadStatus, PlaybackMode, TrackId
from ...domain.shared.events import (
    DomainEvent,
    PlaybackModeChanged,
    PlaybackStateChanged,
    SessionStopped,
    TrackLoaded,
    TrackLoadFailed,
)
from ...domain.shared.exceptions import LoadError
from ...domain.shared.messages import ErrorMessages, LogTemplates
from ...domain.shared.types import clamp_fraction
from ..interfaces.now_playing import NowPlayingMetadata, PlaybackInfo
from .session_models import LoadResult, ProgressSample

if TYPE_CHECKING:
    from ...domain.music.entities import Playlist
    from ...domain.music.repository import PreferencesRepository
    from ...domain.music.sequencer import PlaylistSequencer
    from ...domain.shared.events import EventBus
    from ..interfaces.audio_engine import AudioEngine, AudioSource
    from ..interfaces.library import Library
    from ..interfaces.now_playing import NowPlayingPublisher

logger = logging.getLogger(__name__)


class PlaybackSession:
    """Owns the session state and the single audio source.

    Every mutation runs under one ``asyncio.Lock`` so user commands, transport
    events, engine callbacks and the progress clock are serialized. ``load()``
    drops the lock while the engine opens a file; a generation counter makes
    sure only the most recent load (or stop) ever takes effect.
    """

    def __init__(
        self,
        *,
        engine: AudioEngine,
        library: Library,
        now_playing: NowPlayingPublisher,
        playlist: Playlist,
        sequencer: PlaylistSequencer,
        event_bus: EventBus,
        preferences_repository: PreferencesRepository | None = None,
        initial_volume: float = 0.7,
    ) -> None:
        self._engine = engine
        self._library = library
        self._now_playing = now_playing
        self._playlist = playlist
        self._sequencer = sequencer
        self._bus = event_bus
        self._preferences_repo = preferences_repository

        self._state = SessionState(volume=clamp_fraction(initial_volume))
        self._source: AudioSource | None = None
        self._lock = asyncio.Lock()
        self._load_generation = 0
        self._pending_events: list[DomainEvent] = []

        self._engine.set_on_finished(self._on_source_finished)

    # === Read access ===

    def snapshot(self) -> SessionState:
        """Copy of the current state; never the live object."""
        return self._state.model_copy()

    @property
    def playlist(self) -> Playlist:
        return self._playlist

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def is_loaded(self) -> bool:
        return self._source is not None

    @property
    def announced_track_id(self) -> TrackId | None:
        return self._state.announced_track_id

    @property
    def announced_track(self) -> Track | None:
        track_id = self._state.announced_track_id
        return self._playlist.get(track_id) if track_id is not None else None

    @property
    def mode(self) -> PlaybackMode:
        return self._state.mode

    @property
    def volume(self) -> float:
        return self._state.volume

    @property
    def is_user_seeking(self) -> bool:
        return self._state.is_user_seeking

    # === Loading ===

    async def load(self, track: Track, *, autoplay: bool = True) -> LoadResult:
        """Open *track* for playback.

        Loading the already-announced track only (re)starts playback when
        *autoplay* is set. Failures leave the session fully stopped.
        """
        async with self._lock:
            if self._source is not None and track.id == self._state.announced_track_id:
                if autoplay:
                    await self._play_locked()
                else:
                    logger.debug(LogTemplates.LOAD_ALREADY_LOADED, track.title)
                if self._source is None:
                    result = LoadResult(
                        status=LoadStatus.FAILED,
                        track_id=track.id,
                        message=ErrorMessages.PLAYBACK_START_FAILED,
                    )
                else:
                    result = LoadResult(status=LoadStatus.ALREADY_LOADED, track_id=track.id)
            else:
                result = None
                self._load_generation += 1
                generation = self._load_generation
                await self._release_source_locked()
                self._state.reset()
                self._now_playing.clear()
                self._state.loaded_track_id = track.id

        if result is not None:
            await self._flush_events()
            return result

        logger.info(LogTemplates.LOAD_STARTED, track.title, track.id)

        error: LoadError | None = None
        source: AudioSource | None = None
        try:
            source = await self._open(track)
        except LoadError as e:
            error = e
        except Exception as e:
            logger.exception("Unexpected error opening %s", track.file_name)
            error = LoadError(str(e), file_ref=track.file_name)

        async with self._lock:
            if generation != self._load_generation:
                if source is not None:
                    await self._close_quietly(source)
                logger.debug(LogTemplates.LOAD_SUPERSEDED, track.title)
                return LoadResult(status=LoadStatus.SUPERSEDED, track_id=track.id)

            if source is not None and error is None:
                try:
                    await self._adopt_source_locked(track, source, autoplay=autoplay)
                except LoadError as e:
                    error = e
                    await self._release_source_locked()

            if error is not None or source is None:
                message = error.message if error else ErrorMessages.ENGINE_RETURNED_NONE
                result = self._fail_load_locked(track, message)
            else:
                result = LoadResult(status=LoadStatus.LOADED, track_id=track.id)

        await self._flush_events()
        return result

    def _fail_load_locked(self, track: Track, message: str) -> LoadResult:
        logger.warning(LogTemplates.LOAD_FAILED, track.title, message)
        self._state.reset()
        self._now_playing.clear()
        self._pending_events.append(TrackLoadFailed(track_id=track.id, reason=message))
        return LoadResult(status=LoadStatus.FAILED, track_id=track.id, message=message)

    async def _open(self, track: Track) -> AudioSource:
        file_ref = self._library.resolve_file(track)
        if file_ref is None:
            raise LoadError(
                ErrorMessages.TRACK_FILE_MISSING.format(file_name=track.file_name),
                file_ref=track.file_name,
            )
        return await self._engine.open(file_ref)

    async def _adopt_source_locked(self, track: Track, source: AudioSource, *, autoplay: bool) -> None:
        self._source = source
        self._state.loaded_track_id = track.id
        self._state.announced_track_id = track.id
        self._state.duration = max(0.0, source.duration)
        self._state.position = 0.0
        await source.set_volume(self._state.effective_volume)
        if autoplay:
            await source.play()
        self._state.is_playing = autoplay

        self._publish_metadata_locked(track)
        self._publish_playback_locked()
        logger.info(LogTemplates.TRACK_LOADED, track.title, self._state.duration)
        self._pending_events.append(
            TrackLoaded(
                track_id=track.id,
                track_title=track.title,
                duration_seconds=self._state.duration,
                autoplay=autoplay,
            )
        )

    # === Transport ===

    async def play(self) -> bool:
        """Resume a loaded, paused track. Returns False when nothing changed."""
        async with self._lock:
            applied = await self._play_locked()
        await self._flush_events()
        return applied

    async def pause(self) -> bool:
        """Pause a playing track. Returns False when nothing changed."""
        async with self._lock:
            applied = await self._pause_locked()
        await self._flush_events()
        return applied

    async def toggle_play_pause(self) -> bool:
        async with self._lock:
            if self._state.is_playing:
                applied = await self._pause_locked()
            else:
                applied = await self._play_locked()
        await self._flush_events()
        return applied

    async def stop(self) -> bool:
        """Tear everything down and cancel any in-flight load.

        Returns True if a track was loaded or loading.
        """
        async with self._lock:
            had_track = await self._stop_locked()
        await self._flush_events()
        return had_track

    async def _play_locked(self) -> bool:
        source = self._source
        if source is None or self._state.is_playing:
            return False

        try:
            await source.play()
        except LoadError as e:
            await self._abandon_source_locked(e)
            return False
        self._state.is_playing = True
        self._refresh_position_locked()
        self._publish_playback_locked()
        self._emit_state_changed_locked()
        logger.debug(LogTemplates.PLAYBACK_RESUMED, self._state.announced_track_id)
        return True

    async def _pause_locked(self) -> bool:
        source = self._source
        if source is None or not self._state.is_playing:
            return False

        await source.pause()
        self._state.is_playing = False
        self._refresh_position_locked()
        self._publish_playback_locked()
        self._emit_state_changed_locked()
        logger.debug(LogTemplates.PLAYBACK_PAUSED, self._state.announced_track_id)
        return True

    async def _stop_locked(self) -> bool:
        self._load_generation += 1
        last_track_id = self._state.announced_track_id
        had_track = self._state.loaded_track_id is not None or self._source is not None

        await self._release_source_locked()
        self._state.reset()
        self._now_playing.clear()

        if had_track:
            logger.info(LogTemplates.PLAYBACK_STOPPED, last_track_id)
            self._pending_events.append(SessionStopped(last_track_id=last_track_id))
        return had_track

    async def _abandon_source_locked(self, error: LoadError) -> None:
        """The source could not (re)start; stop instead of staying half-loaded."""
        logger.warning(LogTemplates.PLAYBACK_FAILED, self._state.announced_track_id, error.message)
        await self._stop_locked()

    async def _restart_locked(self) -> bool:
        """Replay the loaded track from the beginning."""
        source = self._source
        if source is None:
            return False

        try:
            await source.set_position(0.0)
            await source.play()
        except LoadError as e:
            await self._abandon_source_locked(e)
            return False
        self._state.position = 0.0
        self._state.is_playing = True
        self._publish_playback_locked()
        self._emit_state_changed_locked()
        return True

    # === Seeking ===

    async def seek(self, fraction: float) -> bool:
        """Relocate to ``fraction * duration`` keeping the play/pause state."""
        async with self._lock:
            applied = await self._seek_locked(fraction)
        await self._flush_events()
        return applied

    async def seek_to_seconds(self, seconds: float) -> bool:
        async with self._lock:
            duration = self._state.duration
            fraction = seconds / duration if duration > 0 else 0.0
            applied = await self._seek_locked(fraction)
        await self._flush_events()
        return applied

    async def begin_user_seek(self) -> None:
        """The UI started scrubbing; the clock stops overwriting the position."""
        async with self._lock:
            self._state.is_user_seeking = True

    async def end_user_seek(self, fraction: float) -> bool:
        """Commit the scrub position and hand the position back to the clock."""
        async with self._lock:
            applied = await self._seek_locked(fraction)
            self._state.is_user_seeking = False
        await self._flush_events()
        return applied

    async def _seek_locked(self, fraction: float) -> bool:
        source = self._source
        if source is None:
            return False

        target = clamp_fraction(fraction) * self._state.duration
        try:
            await source.set_position(target)
            if self._state.is_playing:
                if not source.is_playing:
                    await source.play()
            elif source.requires_seek_commit:
                await source.play()
                await source.pause()
        except LoadError as e:
            await self._abandon_source_locked(e)
            return False
        self._state.position = target

        self._publish_playback_locked()
        logger.debug(LogTemplates.SEEKED, target, self._state.duration)
        return True

    # === Volume & mode ===

    async def set_volume(self, fraction: float) -> float:
        """Set the baseline volume (clamped), persist it, and apply it."""
        async with self._lock:
            self._state.volume = clamp_fraction(fraction)
            await self._apply_volume_locked()
            volume = self._state.volume
        await self._flush_events()
        await self._save_preferences()
        return volume

    async def apply_system_output_level(self, level: float) -> float:
        """Scale the engine volume by the system output level; returns the effective volume."""
        async with self._lock:
            self._state.system_output_level = clamp_fraction(level)
            await self._apply_volume_locked()
            effective = self._state.effective_volume
        await self._flush_events()
        return effective

    async def refresh_volume(self) -> float:
        async with self._lock:
            await self._apply_volume_locked()
            effective = self._state.effective_volume
        await self._flush_events()
        return effective

    async def _apply_volume_locked(self) -> None:
        if self._source is not None:
            try:
                await self._source.set_volume(self._state.effective_volume)
            except LoadError as e:
                await self._abandon_source_locked(e)
        logger.debug(
            LogTemplates.VOLUME_APPLIED,
            self._state.volume,
            self._state.system_output_level,
        )

    async def cycle_playback_mode(self) -> PlaybackMode:
        """Advance LOOP_ALL -> LOOP_ONE -> RANDOM -> LOOP_ALL."""
        async with self._lock:
            self._state.mode = self._state.mode.next_mode()
            mode = self._state.mode
            self._pending_events.append(PlaybackModeChanged(mode=mode))
        logger.info(LogTemplates.MODE_CHANGED, mode.value)
        await self._flush_events()
        await self._save_preferences()
        return mode

    # === Preferences ===

    async def restore_preferences(self) -> PlaybackPreferences:
        """Apply the persisted volume and mode, if any were saved."""
        preferences: PlaybackPreferences | None = None
        if self._preferences_repo is not None:
            try:
                preferences = await self._preferences_repo.load()
            except Exception:
                logger.exception("Failed to load playback preferences")

        async with self._lock:
            if preferences is not None:
                self._state.volume = preferences.volume
                self._state.mode = preferences.mode
                await self._apply_volume_locked()
                logger.info(LogTemplates.PREFERENCES_RESTORED, preferences.volume, preferences.mode.value)
            restored = PlaybackPreferences(volume=self._state.volume, mode=self._state.mode)
        await self._flush_events()
        return restored

    async def _save_preferences(self) -> None:
        if self._preferences_repo is None:
            return
        preferences = PlaybackPreferences(volume=self._state.volume, mode=self._state.mode)
        try:
            await self._preferences_repo.save(preferences)
        except Exception:
            logger.exception("Failed to save playback preferences")

    # === Navigation ===

    async def skip_to_next(self) -> LoadResult | None:
        """Manually move to the next track. None if there is nowhere to go."""
        return await self._skip(forward=True)

    async def skip_to_previous(self) -> LoadResult | None:
        """Manually move to the previous track. None if there is nowhere to go."""
        return await self._skip(forward=False)

    async def _skip(self, *, forward: bool) -> LoadResult | None:
        async with self._lock:
            current_id = self._state.announced_track_id
            if current_id is None:
                return None

            target = self._pick_locked(current_id, forward=forward)
            if target is None:
                return None

            restarted = False
            if target.id == current_id and self._source is not None:
                restarted = await self._restart_locked()
                target = None

        await self._flush_events()
        if target is None:
            if not restarted:
                return LoadResult(
                    status=LoadStatus.FAILED,
                    track_id=current_id,
                    message=ErrorMessages.PLAYBACK_START_FAILED,
                )
            return LoadResult(status=LoadStatus.ALREADY_LOADED, track_id=current_id)
        return await self.load(target, autoplay=True)

    def _pick_locked(self, current_id: TrackId, *, forward: bool) -> Track | None:
        snapshot = self._playlist.snapshot()
        if forward:
            target_id = self._sequencer.next(current_id, snapshot, self._state.mode)
        else:
            target_id = self._sequencer.previous(current_id, snapshot, self._state.mode)
        if target_id is None:
            return None
        return self._playlist.get(target_id)

    # === Engine completion ===

    async def on_engine_finished(self) -> None:
        """Continue after the loaded track played to its end."""
        await self._handle_finished(None)

    async def _on_source_finished(self, source: AudioSource) -> None:
        await self._handle_finished(source)

    async def _handle_finished(self, finished: AudioSource | None) -> None:
        next_track: Track | None = None
        async with self._lock:
            if finished is not None and finished is not self._source:
                logger.debug(LogTemplates.STALE_FINISH_IGNORED)
                return
            if self._source is None:
                # Nothing finished; a pending load must not be replaced.
                logger.debug(LogTemplates.IDLE_FINISH_IGNORED)
                return

            current_id = self._state.announced_track_id
            logger.debug(LogTemplates.TRACK_FINISHED, current_id, self._state.mode.value)

            if self._state.mode is PlaybackMode.LOOP_ONE:
                await self._restart_locked()
            else:
                snapshot = self._playlist.snapshot()
                next_id = self._sequencer.next(current_id, snapshot, self._state.mode)
                if next_id is None:
                    logger.info(LogTemplates.PLAYLIST_EXHAUSTED)
                    await self._stop_locked()
                elif next_id == current_id:
                    await self._restart_locked()
                else:
                    next_track = self._playlist.get(next_id)
                    if next_track is None:
                        await self._stop_locked()

        await self._flush_events()
        if next_track is not None:
            await self.load(next_track, autoplay=True)

    # === Progress & now playing ===

    async def sample_progress(self) -> ProgressSample | None:
        """Read the live position for the progress clock.

        Returns None when nothing is loaded or the user is scrubbing, in which
        case the cached position is left untouched.
        """
        async with self._lock:
            source = self._source
            if source is None or self._state.is_user_seeking:
                return None

            sample = ProgressSample.from_reading(
                self._state.announced_track_id, source.position(), source.duration
            )
            self._state.duration = sample.duration
            self._state.position = sample.position
            return sample

    async def republish_now_playing(self) -> None:
        """Resync elapsed time and rate with the now-playing surface."""
        async with self._lock:
            self._refresh_position_locked()
            self._publish_playback_locked()

    def _refresh_position_locked(self) -> None:
        source = self._source
        if source is None or self._state.is_user_seeking:
            return
        self._state.position = max(0.0, min(source.position(), self._state.duration))

    def _publish_metadata_locked(self, track: Track) -> None:
        artwork = None
        try:
            artwork = self._library.cover_image(track)
        except Exception:
            logger.exception("Failed to read cover image for %s", track.file_name)

        self._now_playing.publish_metadata(
            NowPlayingMetadata(
                title=track.title,
                artist=track.artist,
                duration=self._state.duration,
                artwork=artwork,
            )
        )

    def _publish_playback_locked(self) -> None:
        if self._source is None:
            return
        self._now_playing.publish_playback(
            PlaybackInfo(
                elapsed_time=self._state.position,
                rate=1.0 if self._state.is_playing else 0.0,
            )
        )

    def _emit_state_changed_locked(self) -> None:
        self._pending_events.append(
            PlaybackStateChanged(
                track_id=self._state.announced_track_id,
                is_playing=self._state.is_playing,
                position_seconds=self._state.position,
            )
        )

    # === Helpers ===

    async def _release_source_locked(self) -> None:
        source, self._source = self._source, None
        if source is not None:
            await self._close_quietly(source)

    async def _close_quietly(self, source: AudioSource) -> None:
        try:
            await source.close()
        except Exception:
            logger.exception("Error closing audio source")

    async def _flush_events(self) -> None:
        # Published outside the lock so handlers may call back into the session.
        events, self._pending_events = self._pending_events, []
        for event in events:
            await self._bus.publish(event)

    async def shutdown(self) -> None:
        """Release the engine source at process exit."""
        await self.stop()
