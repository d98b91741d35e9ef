"""Resolve the active lyric line for a playback position."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator

from local_music_player.domain.lyrics.entities import LyricPosition, LyricTrack


class LyricCursor:
    """Stateless cursor over a :class:`LyricTrack`.

    Every lookup is a fresh binary search, so positions may jump backwards or
    forwards arbitrarily (seeking) without any incremental state going stale.
    """

    def __init__(self, lyrics: LyricTrack) -> None:
        self._lyrics = lyrics
        self._timestamps = lyrics.timestamps

    @property
    def lyrics(self) -> LyricTrack:
        return self._lyrics

    def resolve(self, position: float) -> LyricPosition:
        """Find the last line at or before *position* and the line after it.

        Among lines sharing a timestamp the later one in file order wins.
        Before the first line there is no active line; the first line is next.
        """
        lines = self._lyrics.lines
        index = bisect_right(self._timestamps, position) - 1
        if index < 0:
            return LyricPosition(index=-1, active=None, next=lines[0] if lines else None)

        next_line = lines[index + 1] if index + 1 < len(lines) else None
        return LyricPosition(index=index, active=lines[index], next=next_line)

    def interpolation(self, position: float) -> float:
        """Fraction (0..1) of the way from the active line to the next one."""
        resolved = self.resolve(position)
        if resolved.active is None or resolved.next is None:
            return 0.0

        span = resolved.next.timestamp - resolved.active.timestamp
        if span <= 0:
            return 1.0
        return max(0.0, min(1.0, (position - resolved.active.timestamp) / span))

    def changes(self, positions: Iterable[float]) -> Iterator[LyricPosition]:
        """Lazily yield a resolution each time the active line changes.

        The first position always yields. Restart by calling again with a new
        iterable; nothing is carried over between calls.
        """
        last_index: int | None = None
        for position in positions:
            resolved = self.resolve(position)
            if resolved.index != last_index:
                last_index = resolved.index
                yield resolved

    async def achanges(self, positions: AsyncIterable[float]) -> AsyncIterator[LyricPosition]:
        """Async counterpart of :meth:`changes`."""
        last_index: int | None = None
        async for position in positions:
            resolved = self.resolve(position)
            if resolved.index != last_index:
                last_index = resolved.index
                yield resolved
