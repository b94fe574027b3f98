"""Shared pytest fixtures and configuration for the tube-u test suite.

Guidelines
----------
* No internet access in any test.
* yt-dlp and requests must be mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Filesystem tests use ``tmp_path`` only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolated_api_key(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Never read the developer's real key or config file."""
    monkeypatch.delenv("YtKey", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture(autouse=True)
def _reset_tube_u_logger() -> Iterator[None]:
    """Drop handlers ``setup_logging`` installs so streams don't leak across tests."""
    yield
    logger = logging.getLogger("tube_u")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
