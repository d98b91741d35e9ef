# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, events, messages and exceptions
- music/: Tracks, playlist, session state and playlist traversal
- lyrics/: Lyric parsing and time-synchronized line resolution
"""

from local_music_player.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
