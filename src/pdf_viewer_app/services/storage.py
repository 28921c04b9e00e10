# src/pdf_viewer_app/services/storage.py
"""
履歴の永続化先（キー・バリュー）。
失敗時はすべて StorageUnavailable を送出する。
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Protocol

from PyQt6.QtCore import QSettings

from pdf_viewer_app.config import APP_NAME, ORGANIZATION, default_store_path
from pdf_viewer_app.errors import StorageUnavailable
from pdf_viewer_app.logger import get_logger

log = get_logger(__name__)


class KeyValueStore(Protocol):
    def get_string(self, key: str) -> str | None: ...

    def set_string(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class JsonFileStore:
    """キー→文字列のJSONオブジェクト1ファイル。"""

    def __init__(self, path: os.PathLike | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageUnavailable(f"cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageUnavailable(f"{self._path} does not hold a JSON object")
        return data

    def _save(self, data: dict[str, str]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageUnavailable(f"cannot write {self._path}: {e}") from e

    def get_string(self, key: str) -> str | None:
        value = self._load().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageUnavailable(f"value for {key!r} in {self._path} is not a string")
        return value

    def set_string(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class QSettingsStore:

    def __init__(self, settings: QSettings | None = None) -> None:
        self._settings = settings if settings is not None else QSettings(ORGANIZATION, APP_NAME)

    @classmethod
    def from_ini(cls, path: os.PathLike | str) -> QSettingsStore:
        return cls(QSettings(str(path), QSettings.Format.IniFormat))

    def _check(self, action: str) -> None:
        self._settings.sync()
        status = self._settings.status()
        if status != QSettings.Status.NoError:
            raise StorageUnavailable(f"QSettings {action} failed: {status.name}")

    def get_string(self, key: str) -> str | None:
        self._check("read")
        if not self._settings.contains(key):
            return None
        return self._settings.value(key, "", type=str)

    def set_string(self, key: str, value: str) -> None:
        self._settings.setValue(key, value)
        self._check("write")

    def remove(self, key: str) -> None:
        self._settings.remove(key)
        self._check("remove")


def open_key_value_store(kind: str, path: os.PathLike | str | None = None) -> KeyValueStore:
    if kind == "json":
        store_path = Path(path) if path is not None else default_store_path()
        log.debug("using JSON file storage at %s", store_path)
        return JsonFileStore(store_path)
    if kind == "qsettings":
        if path is not None:
            log.debug("using QSettings INI storage at %s", path)
            return QSettingsStore.from_ini(path)
        log.debug("using native QSettings storage")
        return QSettingsStore()
    raise ValueError(f"unknown storage backend: {kind!r}")
