"""Tests for roost.cli — entrypoint, ``roost routes`` and ``roost refresh``."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from controller_sources import EXAMPLE_GET, EXAMPLE_GET_POST, OTHER_GET

from roost.cli import main

WriteController = Callable[[str, str], Path]


class TestCLIHelp:
    @pytest.mark.parametrize("command", [[], ["routes"], ["refresh"], ["run"]])
    def test_help_exits_zero(self, command: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([*command, "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    @pytest.mark.parametrize("command", ["routes", "refresh", "run"])
    def test_missing_controllers(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "roost" in capsys.readouterr().out


class TestRoutesCommand:
    def test_lists_routes(
        self,
        controllers: Path,
        cache_file: Path,
        write_controller: WriteController,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_controller("example.py", EXAMPLE_GET_POST)
        main(["routes", str(controllers), "--cache-file", str(cache_file)])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        assert lines[2].split() == ["GET", "/example", "example:ExampleController"]
        assert lines[3].split() == ["POST", "/example", "example:ExampleController"]
        assert cache_file.is_file()

    def test_no_routes(
        self,
        controllers: Path,
        cache_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        main(["routes", str(controllers), "--cache-file", str(cache_file)])
        assert capsys.readouterr().out.strip() == "No routes registered."

    def test_uses_fresh_cache(
        self,
        controllers: Path,
        cache_file: Path,
        write_controller: WriteController,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_controller("example.py", EXAMPLE_GET)
        main(["routes", str(controllers), "--cache-file", str(cache_file)])
        write_controller("other.py", OTHER_GET)
        capsys.readouterr()

        main(["routes", str(controllers), "--cache-file", str(cache_file)])
        assert "/other" not in capsys.readouterr().out

        main(["routes", str(controllers), "--cache-file", str(cache_file), "--refresh"])
        assert "/other" in capsys.readouterr().out

    def test_invalid_directory_exits_one(
        self,
        tmp_path: Path,
        cache_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tmp_path / "missing"), "--cache-file", str(cache_file)])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_broken_controller_exits_one(
        self,
        controllers: Path,
        cache_file: Path,
        write_controller: WriteController,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_controller("broken.py", "raise RuntimeError('bad controller')\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(controllers), "--cache-file", str(cache_file)])

        assert exc_info.value.code == 1
        assert "bad controller" in capsys.readouterr().err


class TestRefreshCommand:
    def test_rewrites_cache(
        self,
        controllers: Path,
        cache_file: Path,
        write_controller: WriteController,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text(json.dumps({"GET": {"/stale": "stale:Stale"}}))
        write_controller("example.py", EXAMPLE_GET)
        write_controller("other.py", OTHER_GET)

        main(["refresh", str(controllers), "--cache-file", str(cache_file)])

        assert capsys.readouterr().out.strip() == f"Wrote 2 route(s) to {cache_file}"
        assert json.loads(cache_file.read_text()) == {
            "GET": {
                "/example": "example:ExampleController",
                "/other": "other:OtherController",
            }
        }
