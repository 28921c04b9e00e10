# src/pdf_viewer_app/models/recent_entry.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from pdf_viewer_app.errors import DecodeError, InvalidEntry

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

LOCAL_LABEL = "local file"
NETWORK_LABEL = "network file"
SEPARATOR = " • "


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_time(value: datetime) -> datetime:
    # naive はローカル時刻扱い。UTC・ミリ秒精度で保持
    aware = value.astimezone(timezone.utc)
    return aware.replace(microsecond=(aware.microsecond // 1000) * 1000)


def _epoch_millis(value: datetime) -> int:
    delta = value - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def _from_epoch_millis(millis: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=millis)


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 ** 2:
        return f"{size / 1024:.1f} KB"
    if size < 1024 ** 3:
        return f"{size / 1024 ** 2:.1f} MB"
    return f"{size / 1024 ** 3:.1f} GB"


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'} ago"


def format_relative_time(when: datetime, now: datetime | None = None) -> str:
    now = _normalize_time(now) if now is not None else _utcnow()
    seconds = (now - when).total_seconds()
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return _plural(int(seconds // 60), "minute")
    if seconds < 86_400:
        return _plural(int(seconds // 3600), "hour")
    if seconds < 7 * 86_400:
        return _plural(int(seconds // 86_400), "day")
    local = when.astimezone()
    return f"{_MONTHS[local.month - 1]} {local.day}"


@dataclass(frozen=True)
class RecentFileEntry:
    """
    履歴1件（ローカル or ネットワーク）。不変。
    """
    title: str
    local_path: str | None = None
    remote_url: str | None = None
    opened_at: datetime = field(default_factory=_utcnow)
    size_bytes: int | None = None
    thumbnail_path: str | None = None  # 予約（未使用）

    def __post_init__(self) -> None:
        # 空文字は未指定扱い
        object.__setattr__(self, "local_path", self.local_path or None)
        object.__setattr__(self, "remote_url", self.remote_url or None)
        if self.local_path is None and self.remote_url is None:
            raise InvalidEntry("either local_path or remote_url is required")
        if self.local_path is not None and self.remote_url is not None:
            raise InvalidEntry("local_path and remote_url are mutually exclusive")
        object.__setattr__(self, "opened_at", _normalize_time(self.opened_at))

    @property
    def is_remote(self) -> bool:
        return self.remote_url is not None

    @property
    def identifier(self) -> str:
        return self.local_path if self.local_path is not None else self.remote_url  # type: ignore[return-value]

    @property
    def subtitle(self) -> str:
        return self.describe()

    def describe(self, now: datetime | None = None) -> str:
        if self.is_remote:
            parts = [NETWORK_LABEL]
        else:
            parts = [LOCAL_LABEL]
            if self.size_bytes is not None:
                parts.append(format_file_size(self.size_bytes))
        parts.append(format_relative_time(self.opened_at, now))
        return SEPARATOR.join(parts)

    def same_kind_identifier(self, other: RecentFileEntry) -> bool:
        if self.is_remote:
            return other.remote_url == self.remote_url
        return other.local_path == self.local_path

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "localPath": self.local_path,
            "remoteUrl": self.remote_url,
            "openedAtEpochMillis": _epoch_millis(self.opened_at),
            "sizeBytes": self.size_bytes,
            "thumbnailPath": self.thumbnail_path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RecentFileEntry:
        """キーはすべて省略可。型が不正なら DecodeError。"""
        if not isinstance(data, Mapping):
            raise DecodeError(f"recent file record must be an object, got {type(data).__name__}")

        title = _optional(data, "title", str) or ""
        millis = _optional(data, "openedAtEpochMillis", int) or 0
        try:
            return cls(
                title=title,
                local_path=_optional(data, "localPath", str),
                remote_url=_optional(data, "remoteUrl", str),
                opened_at=_from_epoch_millis(millis),
                size_bytes=_optional(data, "sizeBytes", int),
                thumbnail_path=_optional(data, "thumbnailPath", str),
            )
        except (ValueError, OverflowError) as e:
            raise DecodeError(f"invalid recent file record: {e}") from e


def _optional(data: Mapping[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None:
        return None
    # bool は int のサブクラスなので除外
    if not isinstance(value, kind) or isinstance(value, bool):
        raise DecodeError(f"field {key!r} must be {kind.__name__}, got {type(value).__name__}")
    return value
