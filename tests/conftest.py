"""Shared fixtures: controller trees on disk and an isolated cache file."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from roost.config import RouterConfig


@pytest.fixture
def controllers(tmp_path: Path) -> Path:
    directory = tmp_path / "controllers"
    directory.mkdir()
    return directory


@pytest.fixture
def cache_file(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "routes.cache.json"


@pytest.fixture
def config(cache_file: Path) -> RouterConfig:
    return RouterConfig(cache_file=cache_file)


@pytest.fixture
def write_controller(controllers: Path) -> Callable[[str, str], Path]:
    """Write ``source`` to ``controllers/<relative>`` and return the path."""

    def write(relative: str, source: str) -> Path:
        path = controllers / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return write
