"""DTOs for the lyrics application service."""

from __future__ import annotations

from pydantic import BaseModel

from ...domain.music.value_objects import TrackId
from ...domain.shared.types import NonNegativeInt


class LyricImportResult(BaseModel):

    success: bool
    track_id: TrackId | None = None
    line_count: NonNegativeInt = 0
    message: str = ""
