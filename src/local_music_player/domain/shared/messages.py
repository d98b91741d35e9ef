"""Centralized message constants for error messages, validation, and log output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Validation Errors
    EMPTY_TRACK_ID = "Track ID cannot be empty"
    DUPLICATE_PLAYLIST_TRACK = "Track '{title}' is already in the playlist"

    # Loading Errors
    TRACK_FILE_MISSING = "Audio file '{file_name}' was not found in the library"
    ENGINE_RETURNED_NONE = "Audio engine returned no source"
    ENGINE_BINARY_MISSING = "Audio tool '{binary}' is not installed or not on PATH"
    ENGINE_PROBE_FAILED = "Could not read duration of '{name}': {error}"
    ENGINE_SPAWN_FAILED = "Could not start playback of '{name}': {error}"
    PLAYBACK_START_FAILED = "Audio source could not start playback"

    # Lyric Errors
    LYRICS_NOT_SORTED = "Lyric lines must be ordered by timestamp"
    LYRICS_BAD_TIMESTAMP = "Invalid timestamp on lyric line {line}"
    LYRICS_BAD_TAG = "Unrecognized tag on lyric line {line}"
    LYRICS_NO_TIMED_LINES = "No timed lyric lines found"
    LYRICS_WRONG_EXTENSION = "'{name}' is not an .lrc file"
    LYRICS_UNREADABLE = "Could not read lyric file '{name}': {error}"
    LYRICS_NO_TRACK = "No track is loaded to attach lyrics to"

    # Library Errors
    LIBRARY_NOT_A_DIRECTORY = "Music directory '{path}' does not exist or is not a directory"
    LIBRARY_EMPTY = "No audio files found in '{path}'"

    # Configuration Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Console Errors
    CONSOLE_UNKNOWN_COMMAND = "Unknown command: {command}"
    CONSOLE_BAD_ARGUMENT = "Invalid argument for '{command}': {argument}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Loading
    LOAD_STARTED = "Loading '%s' (%s)"
    LOAD_ALREADY_LOADED = "'%s' is already loaded"
    LOAD_SUPERSEDED = "Load of '%s' was superseded by a newer request"
    LOAD_FAILED = "Failed to load '%s': %s"
    TRACK_LOADED = "Loaded '%s' (%.1fs)"

    # Playback
    PLAYBACK_RESUMED = "Resumed playback of %s"
    PLAYBACK_PAUSED = "Paused playback of %s"
    PLAYBACK_STOPPED = "Stopped playback of %s"
    PLAYBACK_FAILED = "Playback of %s failed; stopping: %s"
    SEEKED = "Seeked to %.2fs of %.2fs"
    VOLUME_APPLIED = "Applied volume %.2f (system output %.2f)"
    MODE_CHANGED = "Playback mode changed to %s"
    TRACK_FINISHED = "Track finished: %s (mode %s)"
    STALE_FINISH_IGNORED = "Ignoring finish notification from a replaced source"
    IDLE_FINISH_IGNORED = "Ignoring finish notification while nothing is loaded"
    PLAYLIST_EXHAUSTED = "Nothing left to play; stopping"

    # Preferences
    PREFERENCES_RESTORED = "Restored preferences: volume=%.2f mode=%s"
    PREFERENCES_SAVED = "Saved preferences: volume=%.2f mode=%s"

    # Transport Events
    TRANSPORT_EVENT_RECEIVED = "Transport event: %s"
    TRANSPORT_EVENT_FAILED = "Transport event %s not applicable"
    INTERRUPTION_BEGAN = "Audio interruption began (was playing: %s)"
    INTERRUPTION_ENDED = "Audio interruption ended (should resume: %s)"
    AUDIO_OUTPUT_ACTIVATION_FAILED = "Failed to activate audio output: %s"

    # Progress Clock
    CLOCK_STARTED = "Progress clock started (interval %.2fs)"
    CLOCK_STOPPED = "Progress clock stopped"
    CLOCK_TICK_FAILED = "Progress clock tick failed"

    # Lyrics
    LYRICS_IMPORTED = "Imported %d lyric lines for %s"
    LYRICS_IMPORT_FAILED = "Lyric import for %s failed: %s"
    LYRICS_LOADED = "Loaded %d stored lyric lines for %s"
    LYRICS_CLEARED = "Cleared lyrics for %s"

    # Audio Engine
    ENGINE_PROCESS_STARTED = "Started player process %s for %s at %.2fs"
    ENGINE_PROCESS_EXITED = "Player process %s exited with code %s"
    ENGINE_SIGNAL_FAILED = "Failed to signal player process %s: %s"

    # Library
    LIBRARY_SCANNED = "Found %d audio files in %s"

    # Now Playing
    NOW_PLAYING_METADATA = "Now playing: %s - %s (%.1fs)"
    NOW_PLAYING_PLAYBACK = "Now playing elapsed=%.2fs rate=%.1f"
    NOW_PLAYING_CLEARED = "Now playing cleared"

    # Application Lifecycle
    APP_STARTING = "Starting local music player in %s"
    APP_SHUTDOWN = "Local music player shut down"
