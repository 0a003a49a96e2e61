"""Shared pytest fixtures for syntaxmark tests."""

from __future__ import annotations

import io
import logging
import os
from typing import TYPE_CHECKING

import pytest

from syntaxmark.config import get_settings
from syntaxmark.engine import MatchEngine
from syntaxmark.rules import default_catalog

if TYPE_CHECKING:
    from collections.abc import Callable, Generator
    from pathlib import Path

    from syntaxmark.rules import RuleCatalog


@pytest.fixture(autouse=True)
def _isolated_settings(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None]:
    """Keep real environment variables, .env files and handlers out of tests."""
    for key in list(os.environ):
        if key.startswith("SYNTAXMARK_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    package_logger = logging.getLogger("syntaxmark")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[bytes, str], Path]:
    """Factory writing raw bytes to a file under tmp_path."""

    def _write(data: bytes, name: str = "source.c") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def scan_bytes() -> Callable[..., MatchEngine]:
    """Factory running pass one over raw bytes and returning the engine."""

    def _scan(data: bytes, catalog: RuleCatalog | None = None) -> MatchEngine:
        engine = MatchEngine(catalog if catalog is not None else default_catalog())
        engine.scan(io.BytesIO(data))
        return engine

    return _scan
