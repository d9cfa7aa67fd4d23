"""Test fixtures for knowledge-base sync tests.

This module provides test fixtures for:
- Sample remote articles and their YouTrack JSON form
- Helpers that lay out markdown files under a temporary sync root
"""

from .sample_articles import (
    BASE_URL,
    make_article,
    article_json,
    intro_catalog,
    write_markdown,
)

__all__ = [
    "BASE_URL",
    "make_article",
    "article_json",
    "intro_catalog",
    "write_markdown",
]
