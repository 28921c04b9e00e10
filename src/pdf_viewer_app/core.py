# src/pdf_viewer_app/core.py
"""
コマンドラインのエントリ。
例: pdf-viewer-app open path.pdf / pdf-viewer-app list
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from urllib.parse import urlparse

from pdf_viewer_app.config import SAMPLE_PDF_TITLE, SAMPLE_PDF_URL, STORAGE_BACKENDS
from pdf_viewer_app.logger import setup_logging
from pdf_viewer_app.models.recent_entry import RecentFileEntry
from pdf_viewer_app.services.file_info import entry_for_local_file, entry_for_url, find_pdf_files
from pdf_viewer_app.services.recent_files import RecentFilesStore, open_recent_files_store
from pdf_viewer_app.viewer.loader import open_document


def _is_url(target: str) -> bool:
    return urlparse(target).scheme in ("http", "https")


def _format_entry(index: int, entry: RecentFileEntry) -> str:
    return f"{index}. {entry.title}\n   {entry.subtitle}\n   {entry.identifier}"


def _cmd_list(store: RecentFilesStore, args: argparse.Namespace) -> int:
    items = store.list_recent_files()
    if not items:
        print("(empty)")
        return 0
    for i, entry in enumerate(items, start=1):
        print(_format_entry(i, entry))
    return 0


def _cmd_open(store: RecentFilesStore, args: argparse.Namespace) -> int:
    target: str = args.target
    if _is_url(target):
        entry = entry_for_url(target, title=args.title)
    else:
        p = Path(target).expanduser().resolve()
        if not (p.is_file() and p.suffix.lower() == ".pdf"):
            print(f"ERROR: not a PDF file: {p}")
            return 1
        entry = entry_for_local_file(p, title=args.title)

    session = open_document(store, entry, local_copy=args.local_copy)
    if session.error is not None:
        print(f"ERROR: cannot load {entry.title}: {session.error}")
        return 1
    if session.loaded:
        print(f"{entry.title}: {session.page_label}")
    else:
        print(f"{entry.title}: recorded (not downloaded)")
    return 0


def _cmd_remove(store: RecentFilesStore, args: argparse.Namespace) -> int:
    store.remove_recent_file(args.identifier)
    if not _is_url(args.identifier):
        # ローカルは正規化済みパスで記録されている
        resolved = str(Path(args.identifier).expanduser().resolve())
        if resolved != args.identifier:
            store.remove_recent_file(resolved)
    return 0


def _cmd_clear(store: RecentFilesStore, args: argparse.Namespace) -> int:
    store.clear_recent_files()
    return 0


def _cmd_scan(store: RecentFilesStore, args: argparse.Namespace) -> int:
    for path in find_pdf_files(args.directories):
        print(path)
    return 0


def _cmd_sample(store: RecentFilesStore, args: argparse.Namespace) -> int:
    # ダウンロードの成否に関係なく記録する
    store.add_recent_file(entry_for_url(SAMPLE_PDF_URL, title=SAMPLE_PDF_TITLE))
    print(f"{SAMPLE_PDF_TITLE}: {SAMPLE_PDF_URL}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pdf-viewer-app", description="PDF viewer recent files")
    parser.add_argument("--backend", choices=STORAGE_BACKENDS, default=None,
                        help="Persistent storage (default: json or PDF_VIEWER_STORAGE)")
    parser.add_argument("--store", type=str, default=None,
                        help="Storage file (JSON, or INI for qsettings); default: per-user location")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None,
                        help="Log level (default: WARNING or PDF_VIEWER_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Show recent files")
    p_list.set_defaults(func=_cmd_list)

    p_open = sub.add_parser("open", help="Open a local PDF or URL and record it")
    p_open.add_argument("target", help="PDF path or http(s) URL")
    p_open.add_argument("--title", default=None, help="Display title (default: file name)")
    p_open.add_argument("--local-copy", default=None, help="Already downloaded copy of a URL target")
    p_open.set_defaults(func=_cmd_open)

    p_remove = sub.add_parser("remove", help="Forget a path or URL")
    p_remove.add_argument("identifier")
    p_remove.set_defaults(func=_cmd_remove)

    p_clear = sub.add_parser("clear", help="Forget all recent files")
    p_clear.set_defaults(func=_cmd_clear)

    p_scan = sub.add_parser("scan", help="List PDF files under directories")
    p_scan.add_argument("directories", nargs="+")
    p_scan.set_defaults(func=_cmd_scan)

    p_sample = sub.add_parser("sample", help="Record the sample PDF")
    p_sample.set_defaults(func=_cmd_sample)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    level = getattr(logging, args.log_level) if args.log_level else None
    setup_logging(level=level)

    store = open_recent_files_store(args.backend, args.store)
    code = args.func(store, args)
    if code:
        sys.exit(code)
