"""Tests for roost.cli._run — ``roost run`` subcommand."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from controller_sources import EXAMPLE_GET, OTHER_GET

from roost.cli import main
from roost.routing.router import Router

WriteController = Callable[[str, str], Path]


@pytest.fixture
def argv(controllers: Path, cache_file: Path, write_controller: WriteController) -> list[str]:
    write_controller("example.py", EXAMPLE_GET)
    return ["run", str(controllers), "--cache-file", str(cache_file)]


class TestRoostRun:
    @patch("roost.server.dev.run_server")
    def test_default_host_and_port(self, mock_server: MagicMock, argv: list[str]) -> None:
        """run uses the router config defaults when --host/--port are omitted."""
        main(argv)
        mock_server.assert_called_once()
        args = mock_server.call_args[0]
        assert isinstance(args[0], Router)
        assert args[0].table.lookup("GET", "/example") == "example:ExampleController"
        assert args[1] == "127.0.0.1"
        assert args[2] == 8000

    @patch("roost.server.dev.run_server")
    def test_host_override(self, mock_server: MagicMock, argv: list[str]) -> None:
        main([*argv, "--host", "0.0.0.0"])
        assert mock_server.call_args[0][1] == "0.0.0.0"

    @patch("roost.server.dev.run_server")
    def test_port_override(self, mock_server: MagicMock, argv: list[str]) -> None:
        main([*argv, "--port", "3000"])
        assert mock_server.call_args[0][2] == 3000

    @patch("roost.server.dev.run_server")
    def test_refresh_flag(
        self,
        mock_server: MagicMock,
        argv: list[str],
        write_controller: WriteController,
    ) -> None:
        main(argv)
        write_controller("other.py", OTHER_GET)

        main([*argv, "--refresh"])
        router = mock_server.call_args[0][0]
        assert router.table.lookup("GET", "/other") == "other:OtherController"

    @patch("roost.server.dev.run_server")
    def test_missing_server_exits_one(
        self,
        mock_server: MagicMock,
        argv: list[str],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        mock_server.side_effect = ImportError("Serving requires pounce.")
        with pytest.raises(SystemExit) as exc_info:
            main(argv)

        assert exc_info.value.code == 1
        assert "Serving requires pounce." in capsys.readouterr().err

    def test_invalid_directory_exits_one(self, tmp_path: Path, cache_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", str(tmp_path / "missing"), "--cache-file", str(cache_file)])
        assert exc_info.value.code == 1
