"""Unit tests for file_mapper.frontmatter_handler module."""

import pytest

from kb_sync.file_mapper.errors import MalformedDocumentError
from kb_sync.file_mapper.frontmatter_handler import FrontmatterHandler


class TestDecode:
    """Test cases for FrontmatterHandler.decode()."""

    def test_decode_reads_id_title_and_body(self):
        text = "---\nid: 161-3\ntitle: Setup\nurl: https://yt/articles/KB-A-3\n---\n# Setup\n\nSteps.\n"

        article = FrontmatterHandler.decode(text, "Intro/Setup.md")

        assert article.file_path == "Intro/Setup.md"
        assert article.article_id == "161-3"
        assert article.title == "Setup"
        assert article.content == "# Setup\n\nSteps.\n"

    def test_missing_id_is_none(self):
        article = FrontmatterHandler.decode("---\ntitle: Draft\n---\nbody", "Draft.md")

        assert article.article_id is None
        assert article.title == "Draft"

    def test_missing_title_falls_back_to_file_stem(self):
        article = FrontmatterHandler.decode("---\nid: 1-1\n---\nbody", "Guides/Getting Started.md")

        assert article.title == "Getting Started"

    def test_numeric_id_is_coerced_to_string(self):
        article = FrontmatterHandler.decode("---\nid: 42\ntitle: T\n---\n", "T.md")

        assert article.article_id == "42"
        assert article.content == ""

    def test_empty_frontmatter_block_is_allowed(self):
        article = FrontmatterHandler.decode("---\n\n---\nbody", "Note.md")

        assert article.article_id is None
        assert article.title == "Note"
        assert article.content == "body"

    def test_block_with_no_lines_is_allowed(self):
        article = FrontmatterHandler.decode("---\n---\nbody", "Note.md")

        assert article.article_id is None
        assert article.title == "Note"
        assert article.content == "body"

    def test_block_with_no_lines_stops_at_first_delimiter(self):
        article = FrontmatterHandler.decode("---\n---\nbody\n---\nmore", "Note.md")

        assert article.content == "body\n---\nmore"

    def test_unknown_fields_are_ignored(self):
        article = FrontmatterHandler.decode("---\nid: 1-1\ntags: [a, b]\n---\nbody", "A.md")

        assert article.article_id == "1-1"

    def test_missing_frontmatter_raises(self):
        with pytest.raises(MalformedDocumentError) as exc_info:
            FrontmatterHandler.decode("# Just markdown\n", "Plain.md")

        assert exc_info.value.file_path == "Plain.md"

    def test_invalid_yaml_raises(self):
        with pytest.raises(MalformedDocumentError) as exc_info:
            FrontmatterHandler.decode("---\nid: [unclosed\n---\nbody", "Bad.md")

        assert "Invalid YAML" in str(exc_info.value)

    def test_non_mapping_yaml_raises(self):
        with pytest.raises(MalformedDocumentError) as exc_info:
            FrontmatterHandler.decode("---\n- a\n- b\n---\nbody", "List.md")

        assert "dictionary" in str(exc_info.value)

    def test_deeply_nested_yaml_raises(self):
        nested = "x: " + "[" * 15 + "]" * 15
        with pytest.raises(MalformedDocumentError):
            FrontmatterHandler.decode(f"---\n{nested}\n---\nbody", "Deep.md")

    def test_crlf_line_endings(self):
        article = FrontmatterHandler.decode("---\r\nid: 1-1\r\ntitle: T\r\n---\r\nbody\r\n", "T.md")

        assert article.article_id == "1-1"
        assert article.content == "body\r\n"


class TestEncode:
    """Test cases for FrontmatterHandler.encode()."""

    def test_encode_writes_id_title_url_in_order(self):
        text = FrontmatterHandler.encode("1-1", "Intro", "https://yt/articles/1-1", "hello\n")

        assert text == (
            "---\n"
            "id: 1-1\n"
            "title: Intro\n"
            "url: https://yt/articles/1-1\n"
            "---\n"
            "hello\n"
        )

    def test_encode_omits_empty_id_and_url(self):
        text = FrontmatterHandler.encode(None, "Draft", "", "body")

        assert text == "---\ntitle: Draft\n---\nbody"

    @pytest.mark.parametrize("article_id, title, body", [
        ("1-1", "Intro", "# Intro\n\nText.\n"),
        ("123", "yes", "\n\nleading blank lines"),
        ("1-2", "API: v2 \"quoted\"", "---\nnot frontmatter\n---\n"),
        ("1-3", "Ünïcødé ✓", ""),
    ])
    def test_round_trip(self, article_id, title, body):
        """decode(encode(x)) gives back id, title and body unchanged."""
        text = FrontmatterHandler.encode(article_id, title, "https://yt/articles/x", body)

        article = FrontmatterHandler.decode(text, "x.md")

        assert article.article_id == article_id
        assert article.title == title
        assert article.content == body
