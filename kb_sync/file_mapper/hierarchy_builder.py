"""Hierarchy builder for reconstructing the article forest.

YouTrack returns knowledge-base articles as a flat list where each article
names its parent. This module turns that list into a forest of ArticleNode
trees with siblings in their YouTrack order.
"""

import logging
from enum import Enum
from typing import Dict, List, Sequence, Set

from kb_sync.youtrack_client.models import RemoteArticle
from .errors import StructuralError
from .models import ArticleNode, ArticleStatus

logger = logging.getLogger(__name__)


class RootOrder(Enum):
    """Ordering policy for the top level of the forest.

    DISPLAY sorts roots by title for the diff tree. DOWNLOAD sorts roots by
    their YouTrack order so the downloaded layout follows the server.
    """
    DISPLAY = "display"
    DOWNLOAD = "download"


class HierarchyBuilder:
    """Builds article forests from flat article lists.

    Parent references are indexed once, so building is linear in the number
    of articles plus the sorting of each sibling list. Articles whose parent
    is missing from the list become roots. Parent cycles are detected and
    reported instead of looping.

    Example:
        >>> forest = HierarchyBuilder.build_forest(api.list_articles(), RootOrder.DOWNLOAD)
        >>> print(f"Found {len(forest)} root articles")
    """

    @staticmethod
    def build_forest(
        articles: Sequence[RemoteArticle],
        root_order: RootOrder = RootOrder.DISPLAY,
    ) -> List[ArticleNode]:
        """Build the article forest.

        Args:
            articles: Flat list of remote articles
            root_order: How to order the top level

        Returns:
            Root nodes, each with its subtree. Every article appears exactly
            once. Nodes start UNCHANGED with no file path.

        Raises:
            StructuralError: If an article ID is duplicated or parent
                references form a cycle
        """
        by_id: Dict[str, RemoteArticle] = {}
        duplicates: List[str] = []
        for article in articles:
            if article.article_id in by_id:
                duplicates.append(article.article_id)
            by_id[article.article_id] = article
        if duplicates:
            raise StructuralError("Duplicate article IDs in catalog", sorted(set(duplicates)))

        roots: List[RemoteArticle] = []
        children_of: Dict[str, List[RemoteArticle]] = {}
        for article in articles:
            parent_id = article.parent_id
            if not parent_id:
                roots.append(article)
            elif parent_id not in by_id:
                logger.warning(
                    f"Article {article.article_id} ('{article.title}') references "
                    f"missing parent {parent_id}, treating it as a root"
                )
                roots.append(article)
            else:
                children_of.setdefault(parent_id, []).append(article)

        # sorted() is stable, so equal orders keep their input order
        for parent_id in children_of:
            children_of[parent_id] = sorted(children_of[parent_id], key=lambda a: a.order)

        if root_order is RootOrder.DOWNLOAD:
            roots = sorted(roots, key=lambda a: a.order)
        else:
            roots = sorted(roots, key=lambda a: a.title)

        visited: Set[str] = set()
        forest = [
            HierarchyBuilder._build_node(root, children_of, visited)
            for root in roots
        ]

        unreachable = [a.article_id for a in articles if a.article_id not in visited]
        if unreachable:
            logger.error(f"{len(unreachable)} article(s) are not reachable from any root")
            raise StructuralError("Parent references form a cycle", sorted(unreachable))

        logger.debug(f"Built forest with {len(forest)} root(s) from {len(articles)} article(s)")
        return forest

    @staticmethod
    def _build_node(
        article: RemoteArticle,
        children_of: Dict[str, List[RemoteArticle]],
        visited: Set[str],
    ) -> ArticleNode:
        """Build one node and its subtree depth-first."""
        if article.article_id in visited:
            raise StructuralError("Article reached twice while building tree", [article.article_id])
        visited.add(article.article_id)

        node = ArticleNode(
            article_id=article.article_id,
            title=article.title,
            status=ArticleStatus.UNCHANGED,
            article=article,
        )
        for child in children_of.get(article.article_id, []):
            node.children.append(HierarchyBuilder._build_node(child, children_of, visited))
        return node
