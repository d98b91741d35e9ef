"""Periodic sampler of the session's live playback position."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ...domain.shared.events import ProgressUpdated
from ...domain.shared.messages import LogTemplates
from .session_models import ProgressSample

if TYPE_CHECKING:
    from ...domain.shared.events import EventBus
    from .playback_session import PlaybackSession

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 0.25


def format_time(seconds: float) -> str:
    """Render seconds as ``MM:SS``, or ``H:MM:SS`` from one hour up."""
    hours, remainder = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


class ProgressClock:
    """Samples the session every *interval* seconds and publishes ProgressUpdated.

    Ticks are skipped while nothing is loaded or the user is scrubbing.
    """

    def __init__(
        self,
        *,
        session: PlaybackSession,
        event_bus: EventBus,
        interval: float = DEFAULT_TICK_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._session = session
        self._bus = event_bus
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._last: ProgressSample | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def last_sample(self) -> ProgressSample | None:
        return self._last

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking. A running clock is restarted, never duplicated."""
        if self._task is not None:
            self._task.cancel()
        self._task = asyncio.create_task(self._run_loop())
        logger.info(LogTemplates.CLOCK_STARTED, self._interval)

    async def stop(self) -> None:
        """Cancel the ticker; no tick runs after this returns."""
        task, self._task = self._task, None
        if task is None:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info(LogTemplates.CLOCK_STOPPED)

    async def tick(self) -> ProgressSample | None:
        """Take one sample. Returns None when the tick was skipped."""
        sample = await self._session.sample_progress()
        if sample is None:
            return None

        self._last = sample
        await self._bus.publish(
            ProgressUpdated(
                track_id=sample.track_id,
                position_seconds=sample.position,
                duration_seconds=sample.duration,
                progress=sample.progress,
            )
        )
        return sample

    async def _run_loop(self) -> None:
        while True:
            try:
                await self.tick()
            except Exception:
                logger.exception(LogTemplates.CLOCK_TICK_FAILED)

            await asyncio.sleep(self._interval)
