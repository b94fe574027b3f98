"""Tests for the local output store (infra/file_store.py)."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from tube_u.exceptions import FileWriteError
from tube_u.infra.file_store import LocalFileStore


class TestExistingSize:
    def test_missing_file_is_zero(self, tmp_path: Path) -> None:
        assert LocalFileStore().existing_size(str(tmp_path / "nope.m4a")) == 0

    def test_reports_size(self, tmp_path: Path) -> None:
        target = tmp_path / "a.m4a"
        target.write_bytes(b"12345")
        assert LocalFileStore().existing_size(str(target)) == 5

    def test_empty_file_is_zero(self, tmp_path: Path) -> None:
        target = tmp_path / "a.m4a"
        target.touch()
        assert LocalFileStore().existing_size(str(target)) == 0


class TestWrite:
    def test_creates_file(self, tmp_path: Path) -> None:
        target = tmp_path / "a.m4a"
        LocalFileStore().write(str(target), b"data")
        assert target.read_bytes() == b"data"

    def test_overwrites_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "a.m4a"
        target.write_bytes(b"older and longer")
        LocalFileStore().write(str(target), b"new")
        assert target.read_bytes() == b"new"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_mode_applied_on_create(self, tmp_path: Path) -> None:
        target = tmp_path / "a.m4a"
        old_umask = os.umask(0o022)
        try:
            LocalFileStore(file_mode=0o644).write(str(target), b"x")
        finally:
            os.umask(old_umask)
        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        target = tmp_path / "missing" / "a.m4a"
        with pytest.raises(FileWriteError, match="write") as exc_info:
            LocalFileStore().write(str(target), b"x")
        assert isinstance(exc_info.value.__cause__, OSError)
        assert exc_info.value.hint is not None
