"""Port interface for sources of transport events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..services.transport_models import TransportEvent


class RemoteCommandSource(ABC):
    """Delivers hardware/remote/OS events to the transport router."""

    @abstractmethod
    def events(self) -> AsyncIterator[TransportEvent]:
        """Yield events until the source is exhausted or closed."""
        ...
