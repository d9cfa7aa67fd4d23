"""Data models returned by the YouTrack client."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RemoteArticle:
    """A knowledge-base article as it exists on the server.

    Immutable snapshot for the duration of one command.

    Attributes:
        article_id: Stable article ID (e.g., "161-3")
        title: Article title (YouTrack "summary")
        content: Markdown body
        parent_id: Parent article ID (None or "" for root articles)
        order: Sibling sort key (YouTrack "ordinal"), not globally unique
        url: Canonical link to the article in the YouTrack UI
    """
    article_id: str
    title: str
    content: str = ""
    parent_id: Optional[str] = None
    order: int = 0
    url: str = ""

    @property
    def is_root(self) -> bool:
        return not self.parent_id


@dataclass(frozen=True)
class KnowledgeBase:
    """A knowledge base (YouTrack project) that articles can be listed from."""
    key: str
    name: str
