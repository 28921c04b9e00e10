# src/pdf_viewer_app/errors.py
"""pdf_viewer_app の例外。"""


class PdfViewerError(Exception):
    """基底例外。"""


class InvalidEntry(PdfViewerError, ValueError):
    """ローカルパスもURLも持たない履歴エントリ。"""


class DecodeError(PdfViewerError):
    """保存済み履歴データを復元できない。"""


class StorageUnavailable(PdfViewerError):
    """永続ストレージの読み書きに失敗した。"""
