"""Data models for CLI operations.

This module defines all data models used by the CLI module.
All models use dataclasses for clean, type-safe data structures,
following the patterns established in kb_sync/file_mapper/models.py.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Dict, List

from kb_sync.file_mapper.models import ArticleNode, ArticleStatus
from kb_sync.youtrack_client.models import RemoteArticle

# Asks the user a question and returns the raw answer
Prompt = Callable[[str], str]


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed (batch commands exit 0 even when
      individual items failed)
    - GENERAL_ERROR (1): Config issues, unpushable files, malformed data
    - AUTH_ERROR (2): Authentication or authorization failure
    - NETWORK_ERROR (3): Network connectivity or API availability issues

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 2
    NETWORK_ERROR = 3


@dataclass
class ReconcileResult:
    """Reconciled article forest for the diff view.

    Attributes:
        forest: Root nodes (sorted by title) with every remote article and
            every local file represented exactly once

    Example:
        >>> result = Reconciler.reconcile(forest, snapshot)
        >>> result.counts()[ArticleStatus.MODIFIED]
        2
    """
    forest: List[ArticleNode] = field(default_factory=list)

    def iter_nodes(self):
        """Yield every node depth-first."""
        stack = list(reversed(self.forest))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def counts(self) -> Dict[ArticleStatus, int]:
        """Count nodes per status (every status present, zero included)."""
        result = {status: 0 for status in ArticleStatus}
        for node in self.iter_nodes():
            result[node.status] += 1
        return result


@dataclass
class PushTarget:
    """A local file whose content will overwrite its remote article.

    Attributes:
        article_id: Remote article ID from the file's frontmatter
        title: Title to send
        file_path: Relative path of the local file
        content: Markdown body to send
    """
    article_id: str
    title: str
    file_path: str
    content: str


@dataclass
class PushPlan:
    """What a bulk push would do.

    Attributes:
        to_update: Modified files with a known remote article, sorted by ID
        new_files: Files with no ID or an unknown ID, sorted. Never pushed.
        deleted_remotely: Remote articles with no local file, sorted by ID.
            Reported only, never deleted.
    """
    to_update: List[PushTarget] = field(default_factory=list)
    new_files: List[str] = field(default_factory=list)
    deleted_remotely: List[RemoteArticle] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_update and not self.new_files


@dataclass
class PushSummary:
    """Outcome of a confirmed bulk push."""
    updated: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)


@dataclass
class DownloadSummary:
    """Outcome of a download.

    Attributes:
        written: Relative paths written, in walk order
        failed: Relative path to error message for files that failed
        collisions: Paths written by more than one sibling
    """
    written: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    collisions: List[str] = field(default_factory=list)
