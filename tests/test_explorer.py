"""Tests for the explorer CLI."""
import json
import sys

import pytest

import explorer


@pytest.fixture
def catalog(tmp_path):
    path = tmp_path / "books.json"
    path.write_text(json.dumps([
        {"title": "Good Omens", "authors": ["Terry Pratchett", "Neil Gaiman"]},
        {"title": "Small Gods", "authors": ["Terry Pratchett"]},
        {"title": "American Gods", "authors": ["Neil Gaiman"]},
        {"title": "The C Programming Language", "authors": ["Brian W. Kernighan", "Dennis M. Ritchie"]},
    ]), encoding="utf-8")
    return str(path)


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["explorer.py", *argv])
    explorer.main()


def test_stats(monkeypatch, capsys, catalog):
    """Test the stats command."""
    run_cli(monkeypatch, "--catalog", catalog, "stats")

    out = capsys.readouterr().out
    assert "Total books: 4" in out
    assert "Total authors: 4" in out
    assert "Most books by one author: 2" in out


def test_by_author_json(monkeypatch, capsys, catalog):
    """Test listing an author's books as JSON."""
    run_cli(monkeypatch, "--catalog", catalog, "by-author", "Terry Pratchett", "--format", "json")

    data = json.loads(capsys.readouterr().out)
    assert [book["title"] for book in data] == ["Good Omens", "Small Gods"]


def test_by_author_unknown(monkeypatch, capsys, catalog):
    """Test an unknown author prints a message instead of failing."""
    run_cli(monkeypatch, "--catalog", catalog, "by-author", "Nobody")

    assert "No books found for author: Nobody" in capsys.readouterr().out


def test_by_title_compact(monkeypatch, capsys, catalog):
    """Test listing the authors of a title."""
    run_cli(monkeypatch, "--catalog", catalog, "by-title", "Good Omens", "--format", "compact")

    out = capsys.readouterr().out
    assert "1. Terry Pratchett" in out
    assert "2. Neil Gaiman" in out


def test_by_title_table(monkeypatch, capsys, catalog):
    """Test the grid table output."""
    run_cli(monkeypatch, "--catalog", catalog, "by-title", "American Gods", "--format", "table")

    out = capsys.readouterr().out
    assert "Neil Gaiman" in out
    assert "+---" in out


def test_list_keeps_catalog_order(monkeypatch, capsys, catalog):
    """Test list prints books in file order."""
    run_cli(monkeypatch, "--catalog", catalog, "list", "--format", "compact")

    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("1. Good Omens")
    assert lines[3].startswith("4. The C Programming Language")


def test_remove_author_cascades(monkeypatch, capsys, catalog):
    """Test removing an author drops their books and orphaned co-authors."""
    run_cli(
        monkeypatch, "--catalog", catalog,
        "remove", "--author", "Neil Gaiman", "--title", "Missing", "--format", "json"
    )

    out = capsys.readouterr().out
    assert "Removed author: Neil Gaiman" in out
    assert "Not found title: Missing" in out
    assert "2 books and 3 authors remain" in out
    data = json.loads(out[out.index("["):])
    assert [book["title"] for book in data] == ["Small Gods", "The C Programming Language"]


def test_missing_catalog_exits(monkeypatch, tmp_path):
    """Test a missing catalog file exits with status 1."""
    with pytest.raises(SystemExit) as exc_info:
        run_cli(monkeypatch, "--catalog", str(tmp_path / "none.json"), "stats")

    assert exc_info.value.code == 1


def test_no_command_prints_help(monkeypatch, capsys):
    """Test running without a command."""
    with pytest.raises(SystemExit) as exc_info:
        run_cli(monkeypatch)

    assert exc_info.value.code == 1
    assert "by-author" in capsys.readouterr().out


def test_remove_titles_before_authors(monkeypatch, capsys, catalog):
    """Test remove applies --title before --author."""
    run_cli(
        monkeypatch, "--catalog", catalog,
        "remove", "--author", "Neil Gaiman", "--title", "Good Omens", "--format", "compact"
    )

    out = capsys.readouterr().out
    assert out.index("Removed title: Good Omens") < out.index("Removed author: Neil Gaiman")
    assert "2 books and 3 authors remain" in out
    assert "1. Small Gods - Terry Pratchett" in out
    assert "2. The C Programming Language" in out
    assert "American Gods" not in out


def test_unknown_default_format_falls_back_to_table(monkeypatch, capsys, catalog):
    """Test an unknown DEFAULT_FORMAT still prints a table."""
    monkeypatch.setattr(explorer.Config, "DEFAULT_FORMAT", "xml")

    run_cli(monkeypatch, "--catalog", catalog, "list")

    out = capsys.readouterr().out
    assert "+---" in out
    assert "Small Gods" in out
