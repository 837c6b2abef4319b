"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import signal
from io import StringIO
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest

from weather_exporter.cli import (
    cmd_info,
    cmd_locations,
    cmd_once,
    cmd_run,
    create_parser,
    main,
)
from weather_exporter.datasources.locations import LocationSourceError
from weather_exporter.schemas import Location

if TYPE_CHECKING:
    from collections.abc import Iterator

BERLIN = Location(id="berlin", name="Berlin", latitude=52.52, longitude=13.41)


@pytest.fixture(autouse=True)
def no_logging_setup() -> Iterator[MagicMock]:
    """Keep main() from reconfiguring the root logger during tests."""
    with patch("weather_exporter.cli.configure_logging") as mock_configure:
        yield mock_configure


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        """Parser is created successfully."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "weather-exporter"

    def test_parser_has_version(self) -> None:
        """Parser has version argument."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        """Parser accepts --debug flag."""
        parser = create_parser()
        args = parser.parse_args(["--debug", "info"])
        assert args.debug is True

    def test_parser_run_command(self) -> None:
        """Parser accepts run command with optional --port."""
        parser = create_parser()
        args = parser.parse_args(["run"])
        assert args.command == "run"
        assert args.port is None

    def test_parser_run_with_port(self) -> None:
        """Parser accepts run --port."""
        parser = create_parser()
        args = parser.parse_args(["run", "--port", "9100"])
        assert args.port == 9100

    @pytest.mark.parametrize("command", ["once", "locations", "info"])
    def test_parser_simple_commands(self, command: str) -> None:
        """Parser accepts the argument-free commands."""
        parser = create_parser()
        args = parser.parse_args([command])
        assert args.command == command


class TestCmdRun:
    """Tests for cmd_run function."""

    def _run(self, port: int | None, metrics_port: int = 2112) -> tuple[int, MagicMock, MagicMock]:
        workflow = MagicMock()
        workflow.start.return_value.is_alive.side_effect = [True, False]

        with (
            patch("weather_exporter.cli.get_settings") as mock_settings,
            patch("weather_exporter.cli.MetricsSink") as mock_sink_cls,
            patch("weather_exporter.cli.PollingWorkflow") as mock_workflow_cls,
            patch("weather_exporter.cli.signal.signal"),
        ):
            mock_settings.return_value.metrics_port = metrics_port
            mock_workflow_cls.from_settings.return_value = workflow
            exit_code = cmd_run(argparse.Namespace(port=port))

        return exit_code, mock_sink_cls.return_value, workflow

    def test_serves_on_port_from_args(self) -> None:
        """Run uses --port when provided."""
        exit_code, sink, workflow = self._run(port=9999)
        assert exit_code == 0
        sink.serve.assert_called_once_with(9999)
        workflow.start.assert_called_once()

    def test_serves_on_port_from_settings(self) -> None:
        """Run falls back to metrics_port from settings."""
        _, sink, _ = self._run(port=None, metrics_port=5555)
        sink.serve.assert_called_once_with(5555)

    def test_keyboard_interrupt_stops_workflow(self) -> None:
        """Ctrl+C stops the polling loop and exits cleanly."""
        workflow = MagicMock()
        workflow.start.return_value.is_alive.return_value = True
        workflow.start.return_value.join.side_effect = KeyboardInterrupt

        with (
            patch("weather_exporter.cli.get_settings"),
            patch("weather_exporter.cli.MetricsSink"),
            patch("weather_exporter.cli.PollingWorkflow") as mock_workflow_cls,
            patch("weather_exporter.cli.signal.signal"),
            patch("sys.stdout", new=StringIO()),
        ):
            mock_workflow_cls.from_settings.return_value = workflow
            exit_code = cmd_run(argparse.Namespace(port=9100))

        assert exit_code == 0
        workflow.stop.assert_called_once()

    def test_sigterm_stops_workflow(self) -> None:
        """SIGTERM handler stops the polling loop."""
        workflow = MagicMock()
        workflow.start.return_value.is_alive.return_value = False

        with (
            patch("weather_exporter.cli.get_settings"),
            patch("weather_exporter.cli.MetricsSink"),
            patch("weather_exporter.cli.PollingWorkflow") as mock_workflow_cls,
            patch("weather_exporter.cli.signal.signal") as mock_signal,
        ):
            mock_workflow_cls.from_settings.return_value = workflow
            cmd_run(argparse.Namespace(port=9100))

        signum, handler = mock_signal.call_args.args
        assert signum == signal.SIGTERM
        handler(signal.SIGTERM, None)
        workflow.stop.assert_called_once()


class TestCmdOnce:
    """Tests for cmd_once function."""

    def test_success_returns_zero(self) -> None:
        """A completed cycle returns 0 and lists locations."""
        summary = {
            "skipped": False,
            "attempted": 2,
            "succeeded": ["Berlin"],
            "failed": ["Paris"],
            "api_up": True,
        }
        with (
            patch("weather_exporter.cli.poll_once", return_value=summary),
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            exit_code = cmd_once(argparse.Namespace())
            output = mock_stdout.getvalue()

        assert exit_code == 0
        assert "ok      Berlin" in output
        assert "failed  Paris" in output

    def test_skipped_returns_one(self) -> None:
        """A skipped cycle returns 1."""
        summary = {"skipped": True, "attempted": 0, "succeeded": [], "failed": [], "api_up": None}
        with (
            patch("weather_exporter.cli.poll_once", return_value=summary),
            patch("sys.stderr", new=StringIO()),
        ):
            assert cmd_once(argparse.Namespace()) == 1


class TestCmdLocations:
    """Tests for cmd_locations function."""

    def test_lists_locations(self) -> None:
        with (
            patch("weather_exporter.cli.location_source_from_settings") as mock_factory,
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            mock_factory.return_value.get_all_locations.return_value = [BERLIN]
            exit_code = cmd_locations(argparse.Namespace())
            output = mock_stdout.getvalue()

        assert exit_code == 0
        assert "berlin\tBerlin\t52.5200\t13.4100" in output

    def test_source_error_returns_one(self) -> None:
        with (
            patch("weather_exporter.cli.location_source_from_settings") as mock_factory,
            patch("sys.stderr", new=StringIO()) as mock_stderr,
        ):
            mock_factory.return_value.get_all_locations.side_effect = LocationSourceError("down")
            exit_code = cmd_locations(argparse.Namespace())

        assert exit_code == 1
        assert "down" in mock_stderr.getvalue()


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_returns_zero(self) -> None:
        """Info command returns exit code 0."""
        with patch("sys.stdout", new=StringIO()):
            assert cmd_info(argparse.Namespace()) == 0

    def test_prints_app_info(self) -> None:
        """Info command prints application information."""
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_info(argparse.Namespace())
            output = mock_stdout.getvalue()
            assert "Application" in output
            assert "Metrics port" in output


class TestMain:
    """Tests for main function."""

    def test_no_command_shows_help(self) -> None:
        """No command shows help and exits 0."""
        with patch("sys.argv", ["weather-exporter"]), patch("sys.stdout", new=StringIO()):
            assert main() == 0

    @pytest.mark.parametrize(
        ("command", "handler"),
        [("run", "cmd_run"), ("once", "cmd_once"), ("locations", "cmd_locations")],
    )
    def test_dispatches_command(self, command: str, handler: str) -> None:
        """Each command is routed to its handler."""
        with (
            patch("sys.argv", ["weather-exporter", command]),
            patch(f"weather_exporter.cli.{handler}") as mock_cmd,
        ):
            mock_cmd.return_value = 0
            assert main() == 0
            mock_cmd.assert_called_once()

    def test_debug_flag_sets_debug_logging(self, no_logging_setup: MagicMock) -> None:
        """--debug configures DEBUG logging."""
        with (
            patch("sys.argv", ["weather-exporter", "--debug", "info"]),
            patch("weather_exporter.cli.cmd_info", return_value=0),
        ):
            main()
        no_logging_setup.assert_called_once_with("DEBUG")

    def test_unknown_command_shows_help(self) -> None:
        """Unknown command shows help and returns 1."""
        with (
            patch("sys.argv", ["weather-exporter", "run"]),
            patch("weather_exporter.cli.create_parser") as mock_parser,
        ):
            mock_parser.return_value.parse_args.return_value = argparse.Namespace(command="unknown")
            assert main() == 1
