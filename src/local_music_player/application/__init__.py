"""
Application Layer

Contains the playback session and the services that feed it.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- services/: the playback session, transport router, progress clock, lyrics
- interfaces/: Port interfaces for infrastructure adapters
"""
