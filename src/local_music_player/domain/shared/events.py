"""Domain event bus for publishing and subscribing to events."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from local_music_player.domain.music.value_objects import PlaybackMode, TrackId
from local_music_player.domain.shared.types import (
    Fraction,
    NonEmptyStr,
    NonNegativeFloat,
    NonNegativeInt,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="DomainEvent")
EventHandler = Callable[[T], Awaitable[None]]


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    model_config = ConfigDict(frozen=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


# === Session Events ===


class TrackLoaded(DomainEvent):
    track_id: TrackId
    track_title: str = ""
    duration_seconds: NonNegativeFloat = 0.0
    autoplay: bool = False


class TrackLoadFailed(DomainEvent):
    track_id: TrackId
    reason: str = ""


class PlaybackStateChanged(DomainEvent):
    track_id: TrackId | None = None
    is_playing: bool = False
    position_seconds: NonNegativeFloat = 0.0


class PlaybackModeChanged(DomainEvent):
    mode: PlaybackMode


class SessionStopped(DomainEvent):
    last_track_id: TrackId | None = None


# === Clock Events ===


class ProgressUpdated(DomainEvent):
    track_id: TrackId | None = None
    position_seconds: NonNegativeFloat = 0.0
    duration_seconds: NonNegativeFloat = 0.0
    progress: Fraction = 0.0


# === Lyric Events ===


class LyricLineChanged(DomainEvent):
    track_id: TrackId | None = None
    index: int = -1
    text: str | None = None
    next_text: str | None = None
    line_count: NonNegativeInt = 0


# === Event Bus ===


class EventBus:
    """In-memory pub/sub event bus for domain events.

    Handlers are called concurrently. Exceptions in handlers are logged
    but do not prevent other handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler[Any]]] = defaultdict(list)

    def subscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        self._handlers[event_type].append(handler)
        logger.debug("Subscribed handler to: %s", event_type.__name__)

    def unsubscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)
            logger.debug("Unsubscribed handler from %s", event_type.__name__)

    async def publish(self, event: DomainEvent) -> None:
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            return

        logger.debug("Publishing %s to %d handlers", event_type.__name__, len(handlers))

        async def safe_call(handler: EventHandler[Any]) -> None:
            try:
                await handler(event)
            except Exception as e:
                logger.exception("Error in handler for %s: %s", event_type.__name__, e)

        async with asyncio.TaskGroup() as tg:
            for handler in handlers:
                tg.create_task(safe_call(handler))

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        logger.debug("Cleared all event handlers")
