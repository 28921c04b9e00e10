# src/pdf_viewer_app/config.py
"""
アプリ全体の定数と環境変数による上書き。
"""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "pdf-viewer-app"
ORGANIZATION = "pdf-viewer-app"

# ---------------------------------------------------------------------------
# 履歴
# ---------------------------------------------------------------------------
RECENT_FILES_KEY = "recent_pdf_files"
MAX_RECENT_FILES = 10

SAMPLE_PDF_TITLE = "Sample PDF"
SAMPLE_PDF_URL = "https://www.w3.org/WAI/ER/tests/xhtml/testfiles/resources/pdf/dummy.pdf"

# ---------------------------------------------------------------------------
# 環境変数名
# ---------------------------------------------------------------------------
ENV_DATA_DIR = "PDF_VIEWER_DATA_DIR"
ENV_STORAGE = "PDF_VIEWER_STORAGE"
ENV_LOG_LEVEL = "PDF_VIEWER_LOG_LEVEL"
ENV_LOG_DIR = "PDF_VIEWER_LOG_DIR"

STORAGE_BACKENDS = ("json", "qsettings")
DEFAULT_STORAGE_BACKEND = "json"


def data_dir() -> Path:
    raw = os.environ.get(ENV_DATA_DIR, "").strip()
    base = Path(raw).expanduser() if raw else Path.home() / ".pdf_viewer_app"
    base.mkdir(parents=True, exist_ok=True)
    return base


def default_store_path(app_name: str = APP_NAME) -> Path:
    return data_dir() / f"{app_name}_recent.json"


def storage_backend() -> str:
    raw = os.environ.get(ENV_STORAGE, "").strip().lower()
    return raw if raw in STORAGE_BACKENDS else DEFAULT_STORAGE_BACKEND
