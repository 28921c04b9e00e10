# apps/main.py
"""
アプリケーションのエントリポイント。
このファイルは"薄く"保つ（設定・ログ・履歴は core.main() 側）。
"""
from pdf_viewer_app.core import main


if __name__ == "__main__":
    main()
