# src/pdf_viewer_app/viewer/loader.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pypdfium2 as pdfium

from pdf_viewer_app.logger import get_logger
from pdf_viewer_app.models.recent_entry import RecentFileEntry
from pdf_viewer_app.services.recent_files import RecentFilesStore
from pdf_viewer_app.viewer.session import ViewerListener, ViewerSession

log = get_logger(__name__)

Loader = Callable[[Path, ViewerListener], None]


def load_document(path: os.PathLike | str, listener: ViewerListener) -> None:
    """pdfiumでPDFを開き、ページ数（または失敗）を listener に通知する。"""
    try:
        doc = pdfium.PdfDocument(str(path))
    except (pdfium.PdfiumError, OSError) as e:
        listener.on_document_load_failed(str(e))
        return
    try:
        total = len(doc)
    finally:
        doc.close()
    listener.on_document_loaded(total)


def open_document(
    store: RecentFilesStore,
    entry: RecentFileEntry,
    local_copy: os.PathLike | str | None = None,
    loader: Loader = load_document,
) -> ViewerSession:
    """
    履歴に記録してからセッションに読み込む。
    記録は「開こうとした時点」で行うため、読み込みに失敗しても履歴には残る。
    """
    store.add_recent_file(entry)
    session = ViewerSession(entry=entry)

    if entry.local_path is not None:
        source: Path | None = Path(entry.local_path)
    elif local_copy is not None:
        source = Path(local_copy)
    else:
        source = None

    if source is None:
        log.debug("no local copy for %s; waiting for download", entry.remote_url)
        return session

    loader(source, session)
    return session
