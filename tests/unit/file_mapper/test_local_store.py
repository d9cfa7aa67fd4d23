"""Unit tests for file_mapper.local_store module."""

import logging

import pytest

from kb_sync.file_mapper.errors import FilesystemError, MalformedDocumentError
from kb_sync.file_mapper.local_store import LocalStore
from tests.fixtures.sample_articles import write_markdown


class TestListMarkdownFiles:
    """Test cases for LocalStore.list_markdown_files()."""

    def test_lists_sorted_relative_posix_paths(self, tmp_path):
        write_markdown(tmp_path, "Intro.md", "x", "1-1")
        write_markdown(tmp_path, "Intro/Setup.md", "x", "1-2")
        write_markdown(tmp_path, "Advanced.md", "x", "1-3")
        (tmp_path / "notes.txt").write_text("not markdown")

        assert LocalStore(tmp_path).list_markdown_files() == [
            "Advanced.md",
            "Intro.md",
            "Intro/Setup.md",
        ]

    def test_skips_dot_directories(self, tmp_path):
        write_markdown(tmp_path, "Intro.md", "x", "1-1")
        write_markdown(tmp_path, ".git/README.md", "x")
        write_markdown(tmp_path, "docs/.cache/Old.md", "x")

        assert LocalStore(tmp_path).list_markdown_files() == ["Intro.md"]

    def test_missing_root_is_empty(self, tmp_path):
        assert LocalStore(tmp_path / "nope").list_markdown_files() == []


class TestReadWrite:
    """Test cases for reading and writing files."""

    def test_write_creates_parent_directories(self, tmp_path):
        store = LocalStore(tmp_path)

        store.write_file("Intro/Setup/Deep.md", "hello")

        assert (tmp_path / "Intro" / "Setup" / "Deep.md").read_text(encoding="utf-8") == "hello"

    def test_write_overwrites(self, tmp_path):
        store = LocalStore(tmp_path)
        store.write_file("A.md", "old")
        store.write_file("A.md", "new")

        assert store.read_file("A.md") == "new"

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(FilesystemError) as exc_info:
            LocalStore(tmp_path).read_file("Missing.md")

        assert exc_info.value.operation == "read"
        assert exc_info.value.reason == "not found"

    def test_oversized_file_is_rejected(self, tmp_path, monkeypatch):
        monkeypatch.setattr("kb_sync.file_mapper.local_store.MAX_FILE_SIZE", 10)
        (tmp_path / "Big.md").write_text("x" * 11, encoding="utf-8")

        with pytest.raises(FilesystemError) as exc_info:
            LocalStore(tmp_path).read_file("Big.md")

        assert "exceeds maximum allowed size" in exc_info.value.reason

    def test_path_outside_root_is_rejected(self, tmp_path):
        store = LocalStore(tmp_path / "root")

        with pytest.raises(FilesystemError) as exc_info:
            store.write_file("../escape.md", "x")

        assert exc_info.value.operation == "validate"
        assert not (tmp_path / "escape.md").exists()

    def test_read_article_decodes_frontmatter(self, tmp_path):
        write_markdown(tmp_path, "Intro/Setup.md", "steps", "1-2", "Setup")

        article = LocalStore(tmp_path).read_article("Intro/Setup.md")

        assert article.article_id == "1-2"
        assert article.file_path == "Intro/Setup.md"
        assert article.content == "steps"

    def test_read_article_without_frontmatter_raises(self, tmp_path):
        (tmp_path / "Plain.md").write_text("# no frontmatter", encoding="utf-8")

        with pytest.raises(MalformedDocumentError):
            LocalStore(tmp_path).read_article("Plain.md")


class TestLoadSnapshot:
    """Test cases for LocalStore.load_snapshot()."""

    def test_indexes_by_id_and_path(self, tmp_path):
        write_markdown(tmp_path, "Intro.md", "intro", "1-1")
        write_markdown(tmp_path, "Draft.md", "draft")

        snapshot = LocalStore(tmp_path).load_snapshot()

        assert [a.file_path for a in snapshot.articles] == ["Draft.md", "Intro.md"]
        assert set(snapshot.by_id) == {"1-1"}
        assert set(snapshot.by_path) == {"Draft.md", "Intro.md"}
        assert snapshot.skipped == []

    def test_skips_malformed_files(self, tmp_path, caplog):
        write_markdown(tmp_path, "Good.md", "x", "1-1")
        (tmp_path / "Bad.md").write_text("no frontmatter here", encoding="utf-8")

        with caplog.at_level(logging.INFO, logger="kb_sync"):
            snapshot = LocalStore(tmp_path).load_snapshot()

        assert snapshot.skipped == ["Bad.md"]
        assert [a.file_path for a in snapshot.articles] == ["Good.md"]
        assert "Skipping Bad.md" in caplog.text

    def test_duplicate_id_first_in_path_order_wins(self, tmp_path, caplog):
        write_markdown(tmp_path, "B.md", "second", "1-1")
        write_markdown(tmp_path, "A.md", "first", "1-1")

        with caplog.at_level(logging.WARNING, logger="kb_sync"):
            snapshot = LocalStore(tmp_path).load_snapshot()

        assert snapshot.by_id["1-1"].file_path == "A.md"
        assert snapshot.duplicates == ["B.md"]
        assert len(snapshot.articles) == 2
        assert "same article ID" in caplog.text
