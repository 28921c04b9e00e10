# src/pdf_viewer_app/logger.py
"""
ログ設定。起動時に setup_logging() を一度呼び、各所で get_logger() を使う。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pdf_viewer_app.config import ENV_LOG_DIR, ENV_LOG_LEVEL

ROOT_NAME = "pdf_viewer_app"
LOG_FILE_NAME = "pdf_viewer_app.log"
_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_setup_done = False


def _level_from_env() -> int:
    raw = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    level = getattr(logging, raw, None) if raw else None
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(
    level: int | None = None,
    log_dir: os.PathLike | str | None = None,
    use_console: bool = True,
) -> None:
    global _setup_done
    if _setup_done:
        return

    root = logging.getLogger(ROOT_NAME)
    if level is None:
        level = _level_from_env()
    root.setLevel(level)
    formatter = logging.Formatter(_DEFAULT_FORMAT, datefmt=_DATE_FORMAT)

    if use_console:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(formatter)
        root.addHandler(console)

    if log_dir is None:
        log_dir = os.environ.get(ENV_LOG_DIR) or None
    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path / LOG_FILE_NAME, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    _setup_done = True


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_NAME and not name.startswith(ROOT_NAME + "."):
        name = f"{ROOT_NAME}.{name}"
    return logging.getLogger(name)
