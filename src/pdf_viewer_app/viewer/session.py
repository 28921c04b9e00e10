# src/pdf_viewer_app/viewer/session.py
"""
描画エンジンのコールバックで更新されるビューア側の状態。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pdf_viewer_app.logger import get_logger
from pdf_viewer_app.models.recent_entry import RecentFileEntry

log = get_logger(__name__)


class ViewerListener(Protocol):
    def on_page_changed(self, current_page: int, total_pages: int) -> None: ...

    def on_document_loaded(self, total_pages: int) -> None: ...

    def on_document_load_failed(self, message: str) -> None: ...


@dataclass
class ViewerSession:
    entry: RecentFileEntry
    current_page: int = 1  # 1始まり
    total_pages: int = 0
    loaded: bool = False
    error: str | None = None

    # ---- engine callbacks ----

    def on_page_changed(self, current_page: int, total_pages: int) -> None:
        self.current_page = current_page
        self.total_pages = total_pages

    def on_document_loaded(self, total_pages: int) -> None:
        self.total_pages = total_pages
        self.current_page = 1 if total_pages > 0 else 0
        self.loaded = True
        self.error = None
        log.info("loaded %s (%d pages)", self.entry.identifier, total_pages)

    def on_document_load_failed(self, message: str) -> None:
        self.loaded = False
        self.error = message
        log.warning("failed to load %s: %s", self.entry.identifier, message)

    # ---- navigation ----

    @property
    def page_label(self) -> str:
        if not self.loaded:
            return ""
        return f"Page {self.current_page} of {self.total_pages}"

    @property
    def can_go_previous(self) -> bool:
        return self.loaded and self.current_page > 1

    @property
    def can_go_next(self) -> bool:
        return self.loaded and self.current_page < self.total_pages

    # ページ指定はエンジン向けの0始まり。None はボタン無効

    @property
    def first_page_index(self) -> int | None:
        return 0 if self.loaded and self.total_pages > 0 else None

    @property
    def previous_page_index(self) -> int | None:
        return self.current_page - 2 if self.can_go_previous else None

    @property
    def next_page_index(self) -> int | None:
        return self.current_page if self.can_go_next else None

    @property
    def last_page_index(self) -> int | None:
        return self.total_pages - 1 if self.loaded and self.total_pages > 0 else None

    def document_info(self) -> list[tuple[str, str]]:
        rows = [
            ("Title", self.entry.title),
            ("Total pages", str(self.total_pages)),
            ("Current page", str(self.current_page)),
        ]
        if self.entry.local_path is not None:
            rows.append(("File path", self.entry.local_path))
        if self.entry.remote_url is not None:
            rows.append(("URL", self.entry.remote_url))
        return rows
