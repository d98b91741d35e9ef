"""
Playlist Sequencer

Pure traversal logic deciding which track follows (or precedes) the current
one under a playback mode. The sequencer holds no state besides its random
source; every decision works on an immutable snapshot of the playlist.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from local_music_player.domain.music.value_objects import PlaybackMode, TrackId


class PlaylistSequencer:
    """Chooses next/previous track IDs from a playlist snapshot.

    Random mode never repeats the current track immediately when there is an
    alternative, and keeps no history: ``previous`` in random mode is simply
    another independent draw.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def next(
        self,
        current_id: TrackId | None,
        snapshot: Sequence[TrackId],
        mode: PlaybackMode,
    ) -> TrackId | None:
        """Return the track to play after *current_id*, or None for an empty list.

        ``LOOP_ONE`` only affects natural track completion, which the session
        handles itself; manual navigation under it moves through the list like
        ``LOOP_ALL``.
        """
        return self._step(current_id, tuple(snapshot), mode, forward=True)

    def previous(
        self,
        current_id: TrackId | None,
        snapshot: Sequence[TrackId],
        mode: PlaybackMode,
    ) -> TrackId | None:
        """Mirror of :meth:`next` walking the list in reverse order."""
        return self._step(current_id, tuple(snapshot), mode, forward=False)

    def _step(
        self,
        current_id: TrackId | None,
        snapshot: tuple[TrackId, ...],
        mode: PlaybackMode,
        *,
        forward: bool,
    ) -> TrackId | None:
        if not snapshot:
            return None

        if current_id is None or current_id not in snapshot:
            return snapshot[0]

        if mode is PlaybackMode.RANDOM:
            return self._draw(current_id, snapshot)

        index = snapshot.index(current_id)
        offset = 1 if forward else -1
        return snapshot[(index + offset) % len(snapshot)]

    def _draw(self, current_id: TrackId, snapshot: tuple[TrackId, ...]) -> TrackId:
        if len(snapshot) == 1:
            return snapshot[0]

        candidates = [track_id for track_id in snapshot if track_id != current_id]
        return self._rng.choice(candidates)
