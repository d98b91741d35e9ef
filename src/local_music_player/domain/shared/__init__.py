"""Shared domain primitives: exceptions, constrained types, events, messages."""

from local_music_player.domain.shared.exceptions import (
    CommandRejected,
    DomainError,
    LoadError,
    ParseError,
)

__all__ = [
    "CommandRejected",
    "DomainError",
    "LoadError",
    "ParseError",
]
