# src/pdf_viewer_app/services/file_info.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable
from urllib.parse import unquote, urlparse

from pdf_viewer_app.logger import get_logger
from pdf_viewer_app.models.recent_entry import RecentFileEntry, format_file_size

log = get_logger(__name__)

NETWORK_TITLE = "Network PDF"


@dataclass(frozen=True)
class FileInfo:
    name: str
    path: str
    size: int
    last_modified: datetime

    @property
    def formatted_size(self) -> str:
        return format_file_size(self.size)

    @property
    def formatted_date(self) -> str:
        return self.last_modified.strftime("%Y-%m-%d")


def get_file_info(path: os.PathLike | str) -> FileInfo | None:
    p = Path(path)
    try:
        if not p.is_file():
            return None
        st = p.stat()
    except OSError as e:
        log.debug("stat failed for %s: %s", p, e)
        return None
    return FileInfo(
        name=p.name,
        path=str(path),
        size=st.st_size,
        last_modified=datetime.fromtimestamp(st.st_mtime),
    )


def local_file_exists(path: str) -> bool:
    try:
        return Path(path).is_file()
    except OSError:
        return False


def find_pdf_files(directories: Iterable[os.PathLike | str]) -> list[str]:
    """存在するディレクトリ配下の *.pdf を再帰的に集める（大文字小文字は無視）。"""
    found: list[str] = []
    for d in directories:
        base = Path(d).expanduser()
        if not base.is_dir():
            continue
        try:
            for p in sorted(base.rglob("*")):
                if p.suffix.lower() == ".pdf" and p.is_file():
                    found.append(str(p))
        except OSError as e:
            log.warning("cannot scan %s: %s", base, e)
    return found


def entry_for_local_file(
    path: os.PathLike | str,
    title: str | None = None,
    opened_at: datetime | None = None,
) -> RecentFileEntry:
    # 同じファイルが常に同じ識別子になるよう絶対パスに正規化
    resolved = Path(path).expanduser().resolve()
    info = get_file_info(resolved)
    kwargs = {} if opened_at is None else {"opened_at": opened_at}
    return RecentFileEntry(
        title=title or resolved.name,
        local_path=str(resolved),
        size_bytes=info.size if info is not None else None,
        **kwargs,
    )


def title_from_url(url: str) -> str:
    # URLの最後のセグメント（クエリ除く）
    name = unquote(urlparse(url).path.rsplit("/", 1)[-1])
    return name or NETWORK_TITLE


def entry_for_url(
    url: str,
    title: str | None = None,
    opened_at: datetime | None = None,
) -> RecentFileEntry:
    kwargs = {} if opened_at is None else {"opened_at": opened_at}
    return RecentFileEntry(title=title or title_from_url(url), remote_url=url, **kwargs)
