"""
CLIのスモークテスト。tmp_path 上のJSONストアに対して実行する。
"""
import json

import pypdfium2 as pdfium
import pytest

from pdf_viewer_app.config import SAMPLE_PDF_URL
from pdf_viewer_app.core import main


@pytest.fixture
def run(tmp_path, capsys, monkeypatch):
    # pytest のキャプチャにハンドラを付けない
    monkeypatch.setattr("pdf_viewer_app.logger._setup_done", True)
    store = str(tmp_path / "recent.json")

    def _run(*argv):
        main(["--store", store, *argv])
        return capsys.readouterr().out

    return _run


@pytest.fixture
def pdf_path(tmp_path):
    path = tmp_path / "one.pdf"
    doc = pdfium.PdfDocument.new()
    doc.new_page(100, 100)
    doc.save(str(path))
    doc.close()
    return path


def test_list_empty(run):
    assert "(empty)" in run("list")


def test_open_list_remove_clear(run, pdf_path):
    out = run("open", str(pdf_path), "--title", "One")
    assert "One: Page 1 of 1" in out

    run("open", "http://h/b.pdf")
    out = run("list")
    assert out.index("b.pdf") < out.index("One")
    assert "local file" in out
    assert "network file" in out

    run("remove", str(pdf_path))
    out = run("list")
    assert "One" not in out

    run("clear")
    assert "(empty)" in run("list")


def test_open_url_without_copy(run):
    assert "recorded (not downloaded)" in run("open", "https://h/x.pdf")


def test_open_rejects_non_pdf(run, tmp_path):
    txt = tmp_path / "a.txt"
    txt.write_text("x", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        run("open", str(txt))
    assert exc.value.code == 1


def test_sample(run):
    run("sample")
    assert SAMPLE_PDF_URL in run("list")


def test_scan(run, pdf_path, tmp_path):
    assert str(pdf_path) in run("scan", str(tmp_path))


def test_relative_and_absolute_paths_share_one_entry(run, pdf_path, tmp_path, monkeypatch):
    monkeypatch.chdir(pdf_path.parent)
    run("open", pdf_path.name)
    run("open", f"./{pdf_path.name}")
    run("open", str(pdf_path))

    raw = json.loads((tmp_path / "recent.json").read_text(encoding="utf-8"))
    records = json.loads(raw["recent_pdf_files"])
    assert [r["localPath"] for r in records] == [str(pdf_path.resolve())]

    run("remove", f"./{pdf_path.name}")
    assert "(empty)" in run("list")
