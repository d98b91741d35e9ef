"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LoadError(DomainError):
    """Raised when a track cannot be opened for playback.

    Covers missing, unreadable and undecodable files. Always recoverable: the
    session falls back to a fully stopped state.
    """

    def __init__(self, message: str, file_ref: str | None = None) -> None:
        super().__init__(message, code="LOAD_ERROR")
        self.file_ref = file_ref


class ParseError(DomainError):
    """Raised when a lyric file cannot be parsed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message, code="PARSE_ERROR")
        self.line_number = line_number


class CommandRejected(DomainError):
    """A transport command that does not apply to the current state.

    Handled inside the transport router and reported as a failed command
    status; it never escapes to the event source.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code="COMMAND_REJECTED")
