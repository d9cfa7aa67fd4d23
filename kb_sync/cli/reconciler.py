"""Reconciliation of the remote article forest with local files.

Matches local files to remote articles by the article ID stored in their
frontmatter and classifies every node as unchanged, modified, new-local or
deleted-locally. Files without a known ID are placed in the tree next to
where the download layout would have put them.
"""

import logging
import posixpath
from typing import Dict, List, Set

from kb_sync.file_mapper.models import ArticleNode, ArticleStatus, LocalArticle, LocalSnapshot
from .models import ReconcileResult

logger = logging.getLogger(__name__)


class Reconciler:
    """Classifies the article forest against a local snapshot.

    The input forest and snapshot are not modified. No network or disk
    access happens here.

    Placement of new local files (shallowest first, then by path):
        1. A file directly in the sync root becomes a root.
        2. A file in ``Dir/`` goes under the node whose own file is ``Dir.md``.
        3. Otherwise it goes beside nodes whose file lives in ``Dir/``.
        4. Otherwise it becomes a root.

    Example:
        >>> result = Reconciler.reconcile(forest, store.load_snapshot())
        >>> print(TreeRenderer.render(result.forest))
    """

    @classmethod
    def reconcile(cls, forest: List[ArticleNode], snapshot: LocalSnapshot) -> ReconcileResult:
        """Classify every remote node and add every unmatched local file.

        Args:
            forest: Remote forest from HierarchyBuilder
            snapshot: Local files from LocalStore.load_snapshot()

        Returns:
            ReconcileResult whose roots are sorted by title
        """
        roots: List[ArticleNode] = []
        remote_ids: Set[str] = set()
        # "Intro" -> node stored as Intro.md
        dir_owner: Dict[str, ArticleNode] = {}
        # "Intro" -> sibling list holding a node stored in Intro/
        dir_siblings: Dict[str, List[ArticleNode]] = {}

        def classify(nodes: List[ArticleNode], siblings: List[ArticleNode]) -> None:
            for remote in nodes:
                node = ArticleNode(
                    article_id=remote.article_id,
                    title=remote.title,
                    article=remote.article,
                )
                if remote.article_id:
                    remote_ids.add(remote.article_id)

                local = snapshot.by_id.get(remote.article_id) if remote.article_id else None
                if local is None:
                    node.status = ArticleStatus.DELETED_LOCALLY
                else:
                    node.status = cls._content_status(local, remote)
                    node.file_path = local.file_path
                    cls._index(node, siblings, dir_owner, dir_siblings)

                siblings.append(node)
                classify(remote.children, node.children)

        classify(forest, roots)

        new_local = [
            local for local in snapshot.articles
            if local.article_id is None
            or local.article_id not in remote_ids
            or snapshot.by_id.get(local.article_id) is not local
        ]
        new_local.sort(key=lambda a: (a.file_path.count('/'), a.file_path))

        for local in new_local:
            node = ArticleNode(
                article_id=None,
                title=local.title,
                status=ArticleStatus.NEW_LOCAL,
                file_path=local.file_path,
            )
            directory = posixpath.dirname(local.file_path)
            if not directory:
                siblings = roots
            elif directory in dir_owner:
                siblings = dir_owner[directory].children
            elif directory in dir_siblings:
                siblings = dir_siblings[directory]
            else:
                logger.debug(f"No article owns {directory}/, placing {local.file_path} at the root")
                siblings = roots
            siblings.append(node)
            cls._index(node, siblings, dir_owner, dir_siblings)

        roots.sort(key=lambda n: n.title)
        return ReconcileResult(forest=roots)

    @staticmethod
    def _content_status(local: LocalArticle, remote: ArticleNode) -> ArticleStatus:
        remote_content = remote.article.content if remote.article else ""
        if local.content.strip() == remote_content.strip():
            return ArticleStatus.UNCHANGED
        return ArticleStatus.MODIFIED

    @staticmethod
    def _index(
        node: ArticleNode,
        siblings: List[ArticleNode],
        dir_owner: Dict[str, ArticleNode],
        dir_siblings: Dict[str, List[ArticleNode]],
    ) -> None:
        """Record the directories a node's file owns and lives in."""
        path = node.file_path
        if not path:
            return
        if path.endswith('.md'):
            dir_owner.setdefault(path[:-3], node)
        dir_siblings.setdefault(posixpath.dirname(path), siblings)
