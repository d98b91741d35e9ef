#!/usr/bin/env python3
"""Main entry point for the local music player."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from pathlib import Path

from local_music_player.domain.shared.messages import ErrorMessages, LogTemplates

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.warning(
            "Could not load %s, falling back to basic config", _LOGGING_CONFIG_PATH
        )
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    logging.getLogger().setLevel(resolved_level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="local-music-player",
        description="Play a directory of audio files from the console.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        help="music directory (defaults to LIBRARY__MUSIC_DIR or the working directory)",
    )
    parser.add_argument("--log-level", help="override LOG_LEVEL")
    parser.add_argument(
        "--autoplay", action="store_true", help="start playing the first track right away"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    from local_music_player.config.settings import get_settings

    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    logger = logging.getLogger(__name__)

    from local_music_player.config.container import create_container

    container = create_container(settings, music_dir=args.directory)
    root = container.library_root
    if not root.is_dir():
        logger.error(ErrorMessages.LIBRARY_NOT_A_DIRECTORY.format(path=root))
        return 1

    logger.info(LogTemplates.APP_STARTING, root)

    from local_music_player.infrastructure.console.command_source import ConsoleCommandSource
    from local_music_player.infrastructure.console.player_app import ConsolePlayerApp

    source = ConsoleCommandSource(on_error=lambda message: print(message, flush=True))
    app = ConsolePlayerApp(container, source, autoplay=args.autoplay)

    try:
        return asyncio.run(app.run())
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logger.exception("Fatal error: %s", e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
