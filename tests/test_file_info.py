from datetime import datetime

from pdf_viewer_app.services.file_info import (
    NETWORK_TITLE,
    entry_for_local_file,
    entry_for_url,
    find_pdf_files,
    get_file_info,
    local_file_exists,
    title_from_url,
)


def test_get_file_info(tmp_path):
    p = tmp_path / "report.pdf"
    p.write_bytes(b"x" * 2048)
    info = get_file_info(p)
    assert info is not None
    assert info.name == "report.pdf"
    assert info.size == 2048
    assert info.formatted_size == "2.0 KB"
    assert info.formatted_date == datetime.fromtimestamp(p.stat().st_mtime).strftime("%Y-%m-%d")


def test_get_file_info_missing_or_directory(tmp_path):
    assert get_file_info(tmp_path / "nope.pdf") is None
    assert get_file_info(tmp_path) is None


def test_local_file_exists(tmp_path):
    p = tmp_path / "a.pdf"
    assert not local_file_exists(str(p))
    p.write_bytes(b"")
    assert local_file_exists(str(p))
    assert not local_file_exists(str(tmp_path))


def test_find_pdf_files_recursive_case_insensitive(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.pdf").write_bytes(b"")
    (tmp_path / "sub" / "B.PDF").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    (tmp_path / "dir.pdf").mkdir()

    found = find_pdf_files([tmp_path, tmp_path / "missing"])
    assert sorted(found) == sorted([str(tmp_path / "a.pdf"), str(tmp_path / "sub" / "B.PDF")])


def test_entry_for_local_file(tmp_path):
    p = tmp_path / "book.pdf"
    p.write_bytes(b"x" * 10)
    e = entry_for_local_file(p)
    assert e.title == "book.pdf"
    assert e.local_path == str(p.resolve())
    assert e.size_bytes == 10
    assert not e.is_remote


def test_entry_for_local_file_unknown_size(tmp_path):
    e = entry_for_local_file(tmp_path / "gone.pdf", title="Gone")
    assert e.title == "Gone"
    assert e.size_bytes is None


def test_entry_for_url():
    e = entry_for_url("https://example.com/docs/My%20Doc.pdf?token=1")
    assert e.title == "My Doc.pdf"
    assert e.remote_url == "https://example.com/docs/My%20Doc.pdf?token=1"
    assert e.is_remote


def test_title_from_url_without_name():
    assert title_from_url("https://example.com/") == NETWORK_TITLE


def test_entry_for_local_file_resolves_relative_paths(tmp_path, monkeypatch):
    (tmp_path / "docs").mkdir()
    p = tmp_path / "docs" / "a.pdf"
    p.write_bytes(b"x")
    monkeypatch.chdir(tmp_path / "docs")

    relative = entry_for_local_file("a.pdf")
    dotted = entry_for_local_file("./a.pdf")
    absolute = entry_for_local_file(p)
    assert relative.local_path == dotted.local_path == absolute.local_path == str(p.resolve())
