"""Data models for file mapper.

This module defines the local-side models and the article tree shared by the
download, diff and push commands. All models use dataclasses; remote
articles come from kb_sync.youtrack_client.models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from kb_sync.youtrack_client.models import RemoteArticle


class ArticleStatus(Enum):
    """Sync status of one article node."""
    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    NEW_LOCAL = "new-local"
    DELETED_LOCALLY = "deleted-locally"


@dataclass
class LocalArticle:
    """A markdown file with YAML frontmatter under the sync root.

    Attributes:
        file_path: POSIX path relative to the sync root (e.g., "Intro/Setup.md")
        article_id: Article ID from frontmatter (None for files never downloaded)
        title: Title from frontmatter, or the file stem when absent
        content: Markdown body without the frontmatter block
    """
    file_path: str
    article_id: Optional[str]
    title: str
    content: str = ""


@dataclass
class ArticleNode:
    """A node in the reconciled article tree.

    Remote nodes carry the RemoteArticle they were built from. New local
    files have no article and no ID.

    Attributes:
        article_id: Remote article ID (None for new local files)
        title: Display title
        status: Sync status, filled in by the Reconciler
        children: Child nodes in sibling order
        file_path: Matching local file (relative POSIX path), if any
        article: Source RemoteArticle for remote nodes
    """
    article_id: Optional[str]
    title: str
    status: ArticleStatus = ArticleStatus.UNCHANGED
    children: List['ArticleNode'] = field(default_factory=list)
    file_path: Optional[str] = None
    article: Optional[RemoteArticle] = None


@dataclass
class LocalSnapshot:
    """Every readable markdown file under the sync root.

    Attributes:
        articles: Decoded files in path order
        by_id: First file per article ID (duplicates are left out)
        by_path: Files keyed by relative path
        skipped: Paths that failed to read or decode
        duplicates: Paths whose ID was already claimed by an earlier file
    """
    articles: List[LocalArticle] = field(default_factory=list)
    by_id: Dict[str, LocalArticle] = field(default_factory=dict)
    by_path: Dict[str, LocalArticle] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)
