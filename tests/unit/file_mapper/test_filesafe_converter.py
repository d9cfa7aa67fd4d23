"""Unit tests for file_mapper.filesafe_converter module."""

import pytest

from kb_sync.file_mapper.filesafe_converter import FilesafeConverter


class TestSanitize:
    """Test cases for FilesafeConverter.sanitize()."""

    @pytest.mark.parametrize("char", ['/', '\\', '<', '>', ':', '"', '|', '?', '*'])
    def test_replaces_each_unsafe_character(self, char):
        assert FilesafeConverter.sanitize(f"a{char}b") == "a_b"

    def test_keeps_spaces_and_case(self):
        assert FilesafeConverter.sanitize("Getting Started Guide") == "Getting Started Guide"

    def test_keeps_unicode(self):
        assert FilesafeConverter.sanitize("Über uns") == "Über uns"

    def test_replaces_every_occurrence(self):
        assert FilesafeConverter.sanitize('What? "Why"') == "What_ _Why_"


class TestFilenames:
    """Test cases for filename and directory name helpers."""

    def test_title_to_filename(self):
        assert FilesafeConverter.title_to_filename("API: v2", "1-1") == "API_ v2.md"

    def test_title_to_dirname(self):
        assert FilesafeConverter.title_to_dirname("a/b", "1-1") == "a_b"

    @pytest.mark.parametrize("title", ["", "   ", ".", ".."])
    def test_unusable_names_fall_back(self, title):
        assert FilesafeConverter.title_to_dirname(title, "1-7") == "1-7"
        assert FilesafeConverter.title_to_filename(title, "1-7") == "1-7.md"

    def test_dots_inside_title_are_kept(self):
        assert FilesafeConverter.title_to_filename("...", "1-7") == "....md"
        assert FilesafeConverter.title_to_dirname("v1.2", "1-7") == "v1.2"
