"""
Tests for main.py - Main Entry Point

Tests for the main entry point including:
- Logging configuration
- Argument parsing
- Library directory validation
- Error handling
"""

import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, mock_open, patch

import pytest

from local_music_player.config.settings import Settings
from local_music_player.main import build_parser, cli, main, setup_logging


class TestLoggingSetup:
    """Tests for logging configuration."""

    def _make_valid_config(self) -> dict:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "handlers": {},
            "loggers": {"aiosqlite": {"level": "WARNING"}},
            "root": {"level": "INFO", "handlers": []},
        }

    def test_dictconfig_called_when_json_exists(self):
        config = self._make_valid_config()
        m = mock_open(read_data=json.dumps(config))
        with (
            patch("builtins.open", m),
            patch("logging.config.dictConfig") as mock_dc,
        ):
            setup_logging()

            mock_dc.assert_called_once_with(config)

    def test_fallback_to_basicconfig_when_json_missing(self):
        with (
            patch("builtins.open", side_effect=FileNotFoundError),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging()

            mock_bc.assert_called_once()
            assert mock_bc.call_args[1]["level"] == logging.INFO

    def test_fallback_to_basicconfig_when_json_malformed(self):
        m = mock_open(read_data="{invalid json")
        with (
            patch("builtins.open", m),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging()

            mock_bc.assert_called_once()

    def test_root_logger_level_overridden(self):
        config = self._make_valid_config()
        m = mock_open(read_data=json.dumps(config))
        with (
            patch("builtins.open", m),
            patch("logging.config.dictConfig"),
            patch("logging.getLogger") as mock_get_logger,
        ):
            setup_logging("DEBUG")

            mock_get_logger.return_value.setLevel.assert_called_with(logging.DEBUG)

    def test_shipped_config_is_valid(self):
        """The bundled logging_config.json references a loadable formatter."""
        path = Path(__file__).resolve().parents[1] / "logging_config.json"
        config = json.loads(path.read_text())

        assert config["formatters"]["colored"]["()"] == (
            "local_music_player.utils.logging.ColoredFormatter"
        )


class TestArgumentParsing:
    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.directory is None
        assert args.log_level is None
        assert args.autoplay is False

    def test_directory_and_flags(self):
        args = build_parser().parse_args(["/music", "--log-level", "debug", "--autoplay"])

        assert args.directory == Path("/music")
        assert args.log_level == "debug"
        assert args.autoplay is True


class TestMain:
    """Tests for the main() function."""

    @pytest.fixture(autouse=True)
    def _settings(self):
        with (
            patch(
                "local_music_player.config.settings.get_settings",
                return_value=Settings(_env_file=None),
            ),
            patch("local_music_player.main.setup_logging"),
        ):
            yield

    def test_missing_directory_returns_one(self, tmp_path):
        assert main([str(tmp_path / "missing")]) == 1

    def test_runs_console_app(self, tmp_path):
        app = MagicMock()
        app.run = AsyncMock(return_value=0)
        with patch(
            "local_music_player.infrastructure.console.player_app.ConsolePlayerApp",
            return_value=app,
        ) as app_cls:
            assert main([str(tmp_path), "--autoplay"]) == 0

        app.run.assert_awaited_once()
        assert app_cls.call_args.kwargs["autoplay"] is True

    def test_app_exit_code_propagates(self, tmp_path):
        app = MagicMock()
        app.run = AsyncMock(return_value=1)
        with patch(
            "local_music_player.infrastructure.console.player_app.ConsolePlayerApp",
            return_value=app,
        ):
            assert main([str(tmp_path)]) == 1

    def test_keyboard_interrupt_exits_cleanly(self, tmp_path):
        app = MagicMock()
        app.run = AsyncMock(side_effect=KeyboardInterrupt)
        with patch(
            "local_music_player.infrastructure.console.player_app.ConsolePlayerApp",
            return_value=app,
        ):
            assert main([str(tmp_path)]) == 0

    def test_unexpected_error_returns_one(self, tmp_path):
        app = MagicMock()
        app.run = AsyncMock(side_effect=RuntimeError("kaboom"))
        with patch(
            "local_music_player.infrastructure.console.player_app.ConsolePlayerApp",
            return_value=app,
        ):
            assert main([str(tmp_path)]) == 1

    def test_cli_exits_with_main_result(self):
        with (
            patch("local_music_player.main.main", return_value=3),
            pytest.raises(SystemExit) as exc_info,
        ):
            cli()

        assert exc_info.value.code == 3
