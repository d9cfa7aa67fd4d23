"""Diff command: show how the local tree differs from YouTrack."""

import logging

from kb_sync.file_mapper.hierarchy_builder import HierarchyBuilder, RootOrder
from kb_sync.file_mapper.models import ArticleStatus
from .base_command import BaseCommand
from .models import ReconcileResult
from .reconciler import Reconciler
from .tree_renderer import TreeRenderer

logger = logging.getLogger(__name__)


class DiffCommand(BaseCommand):
    """Prints the reconciled article tree with status glyphs.

    Read-only: nothing is written locally or remotely.
    """

    name = "diff"

    def execute(self) -> None:
        self.diff()

    def diff(self) -> ReconcileResult:
        """Fetch, reconcile and print the status tree.

        Raises:
            KnowledgeBaseError: If the catalog cannot be fetched
            StructuralError: If parent references form a cycle
        """
        with self.output_handler.spinner("Fetching articles from YouTrack..."):
            articles = self.api.list_articles()

        forest = HierarchyBuilder.build_forest(articles, RootOrder.DISPLAY)
        snapshot = self.store.load_snapshot()

        for path in snapshot.skipped:
            self.output_handler.info(f"Skipped unreadable file: {path}")
        for path in snapshot.duplicates:
            self.output_handler.info(f"Duplicate article id, shown as new: {path}")

        result = Reconciler.reconcile(forest, snapshot)

        if not result.forest:
            self.output_handler.print("No articles found.")
            return result

        self.output_handler.print_tree(TreeRenderer.render(result.forest))
        self.output_handler.print("")
        self.output_handler.print(TreeRenderer.LEGEND)

        counts = result.counts()
        self.output_handler.print(
            f"{counts[ArticleStatus.UNCHANGED]} unchanged, "
            f"{counts[ArticleStatus.MODIFIED]} modified, "
            f"{counts[ArticleStatus.NEW_LOCAL]} new, "
            f"{counts[ArticleStatus.DELETED_LOCALLY]} deleted locally"
        )
        return result
