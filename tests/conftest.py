"""
共通フィクスチャ。
FakeStorage は失敗を注入できるので、永続→メモリへの切り替えを試せる。
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timezone

import pytest

# CIでもQtをヘッドレスで動かす
if sys.platform.startswith("linux"):
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from pdf_viewer_app.errors import StorageUnavailable
from pdf_viewer_app.services.recent_files import RecentFilesStore


class FakeStorage:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def _maybe_fail(self, op: str) -> None:
        self.calls.append(op)
        if op in self.fail_on:
            raise StorageUnavailable(f"simulated {op} failure")

    def get_string(self, key: str) -> str | None:
        self._maybe_fail("get")
        return self.data.get(key)

    def set_string(self, key: str, value: str) -> None:
        self._maybe_fail("set")
        self.data[key] = value

    def remove(self, key: str) -> None:
        self._maybe_fail("remove")
        self.data.pop(key, None)


class FakeFileSystem:
    def __init__(self, *paths: str) -> None:
        self.paths = set(paths)

    def __call__(self, path: str) -> bool:
        return path in self.paths


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("PDF_VIEWER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("PDF_VIEWER_STORAGE", raising=False)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def fs() -> FakeFileSystem:
    return FakeFileSystem()


@pytest.fixture
def store(storage, fs) -> RecentFilesStore:
    return RecentFilesStore(storage, file_exists=fs)


@pytest.fixture
def t0() -> datetime:
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
