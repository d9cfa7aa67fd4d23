"""YAML frontmatter parsing and generation for markdown files.

This module handles reading and writing YAML frontmatter in markdown files.
Frontmatter links a local file to its YouTrack article:

    ---
    id: 161-3
    title: Setup
    url: https://youtrack.example.com/articles/KB-A-3
    ---
    <markdown body>

The id is the only field the sync relies on; title and url are written for
the reader's benefit. Other fields are ignored on read.
"""

import re
from pathlib import PurePosixPath
from typing import Any, Dict, Optional

import yaml

from .errors import MalformedDocumentError
from .models import LocalArticle


class FrontmatterHandler:
    """Encodes and decodes markdown files with YAML frontmatter.

    Every synced file carries a frontmatter block. A file without one cannot
    be matched to an article and is reported as malformed.
    """

    # Regex pattern to match YAML frontmatter (between --- delimiters).
    # Only horizontal whitespace may follow a delimiter so that leading
    # blank lines of the body survive a round trip.
    FRONTMATTER_PATTERN = re.compile(
        r'^---[ \t]*\r?\n(?:(.*?)\r?\n)??---[ \t]*(?:\r?\n|$)',
        re.DOTALL
    )

    # Maximum allowed depth for YAML structures to prevent DoS attacks
    MAX_YAML_DEPTH = 10

    @classmethod
    def _validate_yaml_depth(cls, obj: Any, current_depth: int = 0) -> bool:
        """Return False if the YAML structure nests deeper than MAX_YAML_DEPTH."""
        if current_depth > cls.MAX_YAML_DEPTH:
            return False
        if isinstance(obj, dict):
            return all(cls._validate_yaml_depth(v, current_depth + 1) for v in obj.values())
        if isinstance(obj, list):
            return all(cls._validate_yaml_depth(v, current_depth + 1) for v in obj)
        return True

    @classmethod
    def decode(cls, text: str, file_path: str) -> LocalArticle:
        """Parse a markdown file into a LocalArticle.

        Args:
            text: Full file content including frontmatter
            file_path: Relative path of the file (used for the title fallback
                and error messages)

        Returns:
            LocalArticle with id (None when absent), title and body

        Raises:
            MalformedDocumentError: If the frontmatter block is missing, is
                not valid YAML, or is not a mapping
        """
        match = cls.FRONTMATTER_PATTERN.match(text)
        if not match:
            raise MalformedDocumentError(file_path, "Missing frontmatter block")

        try:
            frontmatter = yaml.safe_load(match.group(1) or "")
        except yaml.YAMLError as e:
            raise MalformedDocumentError(
                file_path,
                f"Invalid YAML syntax: {str(e)}"
            ) from e

        if frontmatter is None:
            frontmatter = {}
        if not isinstance(frontmatter, dict):
            raise MalformedDocumentError(
                file_path,
                f"Frontmatter must be a YAML dictionary, got {type(frontmatter).__name__}"
            )
        if not cls._validate_yaml_depth(frontmatter):
            raise MalformedDocumentError(
                file_path,
                f"YAML structure exceeds maximum depth of {cls.MAX_YAML_DEPTH}"
            )

        article_id = frontmatter.get('id')
        title = frontmatter.get('title')

        return LocalArticle(
            file_path=file_path,
            article_id=str(article_id) if article_id not in (None, '') else None,
            title=str(title) if title not in (None, '') else PurePosixPath(file_path).stem,
            content=text[match.end():],
        )

    @classmethod
    def encode(
        cls,
        article_id: Optional[str],
        title: str,
        url: Optional[str],
        body: str,
    ) -> str:
        """Generate markdown content with YAML frontmatter.

        Empty id and url are left out of the block.

        Args:
            article_id: Article ID
            title: Article title
            url: Canonical article URL
            body: Markdown body

        Returns:
            Full file content
        """
        frontmatter: Dict[str, str] = {}
        if article_id:
            frontmatter['id'] = article_id
        frontmatter['title'] = title
        if url:
            frontmatter['url'] = url

        yaml_str = yaml.safe_dump(
            frontmatter,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        return f"---\n{yaml_str}---\n{body}"
