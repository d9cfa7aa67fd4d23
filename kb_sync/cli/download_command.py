"""Download command: write every article to the local tree.

Each article becomes ``<Title>.md``. An article with children also gets a
``<Title>/`` directory holding the children, so the folder layout mirrors
the YouTrack hierarchy:

    Intro.md
    Intro/
        Setup.md
        Advanced.md
"""

import logging
from pathlib import PurePosixPath
from typing import Dict, List

from kb_sync.file_mapper.errors import FileMapperError
from kb_sync.file_mapper.filesafe_converter import FilesafeConverter
from kb_sync.file_mapper.frontmatter_handler import FrontmatterHandler
from kb_sync.file_mapper.hierarchy_builder import HierarchyBuilder, RootOrder
from kb_sync.file_mapper.models import ArticleNode
from .base_command import BaseCommand
from .models import DownloadSummary

logger = logging.getLogger(__name__)


class DownloadCommand(BaseCommand):
    """Downloads the whole knowledge base into the sync root.

    Existing files are overwritten. Local files for articles that no longer
    exist are left alone. A failed write is reported and the walk goes on.

    Example:
        >>> DownloadCommand(root="./kb", output_handler=output).run()
    """

    name = "download"

    def execute(self) -> None:
        self.download()

    def download(self) -> DownloadSummary:
        """Fetch all articles and write them depth-first.

        Returns:
            DownloadSummary with written, failed and colliding paths

        Raises:
            KnowledgeBaseError: If the catalog cannot be fetched
            StructuralError: If parent references form a cycle
        """
        summary = DownloadSummary()

        with self.output_handler.spinner("Fetching articles from YouTrack..."):
            articles = self.api.list_articles()

        if not articles:
            self.output_handler.print("No articles found.")
            return summary

        forest = HierarchyBuilder.build_forest(articles, RootOrder.DOWNLOAD)
        logger.info(f"Found {len(forest)} root articles")
        self.output_handler.info(f"Found {len(forest)} root articles")

        self._write_nodes(forest, PurePosixPath(), summary)

        logger.info(f"Downloaded {len(summary.written)} articles")
        self.output_handler.print_download_summary(summary)
        return summary

    def _write_nodes(
        self,
        nodes: List[ArticleNode],
        directory: PurePosixPath,
        summary: DownloadSummary,
    ) -> None:
        used: Dict[str, str] = {}

        for node in nodes:
            article = node.article
            if article is None:
                continue

            name = FilesafeConverter.title_to_dirname(article.title, article.article_id)
            rel_path = (directory / FilesafeConverter.title_to_filename(
                article.title, article.article_id
            )).as_posix()

            if rel_path in used:
                logger.warning(
                    f"'{article.title}' ({article.article_id}) and article {used[rel_path]} "
                    f"both map to {rel_path} - the later one wins"
                )
                self.output_handler.warning(
                    f"Name collision: {rel_path} is written by more than one article"
                )
                summary.collisions.append(rel_path)
            used[rel_path] = article.article_id

            text = FrontmatterHandler.encode(
                article.article_id,
                article.title,
                article.url,
                article.content,
            )
            self.output_handler.info(f"Downloading: {article.title} -> {rel_path}")

            try:
                self.store.write_file(rel_path, text)
                summary.written.append(rel_path)
            except FileMapperError as e:
                logger.error(f"Failed to write {rel_path}: {e}")
                self.output_handler.error(f"Failed to write {rel_path}: {e}")
                summary.failed[rel_path] = str(e)

            if node.children:
                self._write_nodes(node.children, directory / name, summary)
