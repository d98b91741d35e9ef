"""Local music player built around a single playback session coordinator."""

__version__ = "0.1.0"
