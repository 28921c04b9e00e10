# src/pdf_viewer_app/services/recent_files.py
from __future__ import annotations

import json
import os
from enum import Enum
from typing import Callable

from pdf_viewer_app.config import MAX_RECENT_FILES, RECENT_FILES_KEY, storage_backend
from pdf_viewer_app.errors import DecodeError, StorageUnavailable
from pdf_viewer_app.logger import get_logger
from pdf_viewer_app.models.recent_entry import RecentFileEntry
from pdf_viewer_app.services.file_info import local_file_exists
from pdf_viewer_app.services.storage import KeyValueStore, open_key_value_store

log = get_logger(__name__)

# これらの例外でメモリモードへ切り替える
_STORAGE_ERRORS = (StorageUnavailable, DecodeError, OSError)


class Backend(Enum):
    PERSISTENT = "persistent"
    MEMORY = "memory"


class RecentFilesStore:
    """
    最近開いたドキュメント（新しい順）。
    保存に一度でも失敗したら以後はメモリ上のリストだけを使う（戻らない）。
    """

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = RECENT_FILES_KEY,
        limit: int = MAX_RECENT_FILES,
        file_exists: Callable[[str], bool] = local_file_exists,
    ) -> None:
        self._storage = storage
        self._key = key
        self._limit = limit
        self._file_exists = file_exists
        self._backend = Backend.PERSISTENT
        # 最後に読み書きできたリストの写し
        self._memory: list[RecentFileEntry] = []

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def limit(self) -> int:
        return self._limit

    # ---- public ----

    def add_recent_file(self, entry: RecentFileEntry) -> None:
        if self._backend is Backend.PERSISTENT:
            try:
                items = self._with_added(self._existing(self._load()), entry)
                self._save(items)
                self._memory = items
                return
            except _STORAGE_ERRORS as e:
                self._fall_back("add", e)
        self._memory = self._with_added(self._memory, entry)

    def list_recent_files(self) -> list[RecentFileEntry]:
        if self._backend is Backend.PERSISTENT:
            try:
                items = self._load()
                valid = self._existing(items)
                if len(valid) != len(items):
                    log.info("dropping %d missing local file(s) from recent files", len(items) - len(valid))
                    # 書き戻しに失敗してもフィルタ後のリストを残す
                    self._memory = valid
                    self._save(valid)
                self._memory = valid
                return list(valid)
            except _STORAGE_ERRORS as e:
                self._fall_back("list", e)
        return list(self._memory)

    def remove_recent_file(self, identifier: str) -> None:
        if self._backend is Backend.PERSISTENT:
            try:
                items = self._without(self._load(), identifier)
                self._save(items)
                self._memory = items
                return
            except _STORAGE_ERRORS as e:
                self._fall_back("remove", e)
        self._memory = self._without(self._memory, identifier)

    def clear_recent_files(self) -> None:
        if self._backend is Backend.PERSISTENT:
            try:
                self._storage.remove(self._key)
            except _STORAGE_ERRORS as e:
                self._fall_back("clear", e)
        self._memory = []

    # ---- internal ----

    def _with_added(self, items: list[RecentFileEntry], entry: RecentFileEntry) -> list[RecentFileEntry]:
        items = [e for e in items if not entry.same_kind_identifier(e)]
        items.insert(0, entry)
        return items[: self._limit]

    @staticmethod
    def _without(items: list[RecentFileEntry], identifier: str) -> list[RecentFileEntry]:
        return [e for e in items if e.local_path != identifier and e.remote_url != identifier]

    def _load(self) -> list[RecentFileEntry]:
        raw = self._storage.get_string(self._key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DecodeError(f"recent files are not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise DecodeError("recent files must be a JSON array")
        return [RecentFileEntry.from_dict(item) for item in data]

    def _existing(self, items: list[RecentFileEntry]) -> list[RecentFileEntry]:
        return [e for e in items if e.is_remote or self._file_exists(e.local_path)]

    def _save(self, items: list[RecentFileEntry]) -> None:
        self._storage.set_string(self._key, json.dumps([e.to_dict() for e in items], ensure_ascii=False))

    def _fall_back(self, action: str, error: Exception) -> None:
        log.warning("recent files %s failed (%s); switching to in-memory storage", action, error)
        self._backend = Backend.MEMORY


def open_recent_files_store(
    backend: str | None = None,
    path: os.PathLike | str | None = None,
) -> RecentFilesStore:
    return RecentFilesStore(open_key_value_store(backend or storage_backend(), path))
