"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across bounded contexts is defined here once,
so models can simply annotate their fields::

    from local_music_player.domain.shared.types import Fraction, NonEmptyStr

    class MyModel(BaseModel):
        volume: Fraction
        name: NonEmptyStr
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
"""Float >= 0.0."""

Fraction = Annotated[float, Field(ge=0.0, le=1.0)]
"""Float in [0.0, 1.0]: volume levels and seek/progress fractions."""

Seconds = Annotated[float, Field(ge=0.0, le=86_400.0)]
"""Playback time in seconds: 0 … 86 400 (24 hours)."""

PlaybackRate = Annotated[float, Field(ge=0.0, le=1.0)]
"""Now-playing rate: 0.0 when paused, 1.0 when playing."""

TickIntervalSeconds = Annotated[float, Field(gt=0.0, le=10.0)]
"""Progress clock interval: (0, 10] seconds."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

TrackTitleStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Track title: 1-500 characters."""


def clamp_fraction(value: float) -> float:
    """Clamp *value* into [0.0, 1.0]."""
    return max(0.0, min(1.0, float(value)))
