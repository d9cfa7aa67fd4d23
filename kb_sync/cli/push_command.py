"""Push command: send locally edited articles back to YouTrack.

Pushing only ever updates existing articles. Files without a known article
are listed for the user to create by hand, and articles missing locally are
reported but never deleted.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from kb_sync.file_mapper.frontmatter_handler import FrontmatterHandler
from kb_sync.file_mapper.local_store import read_text_file
from kb_sync.file_mapper.models import LocalSnapshot
from kb_sync.youtrack_client.errors import KnowledgeBaseError
from kb_sync.youtrack_client.models import RemoteArticle
from .base_command import BaseCommand
from .errors import CannotPushError
from .models import ExitCode, Prompt, PushPlan, PushSummary, PushTarget

logger = logging.getLogger(__name__)

CONFIRM_PROMPT = "Proceed with push? (y/N): "


def _decline(_: str) -> str:
    return ""


class PushPlanner:
    """Works out which local files would overwrite their remote article."""

    @staticmethod
    def plan(snapshot: LocalSnapshot, articles: Sequence[RemoteArticle]) -> PushPlan:
        """Compare local files with the remote catalog.

        Content is compared after trimming surrounding whitespace. Files
        whose article ID is already claimed by an earlier file are left out.

        Args:
            snapshot: Local files
            articles: Remote catalog

        Returns:
            PushPlan with sorted update targets, new files and remote-only
            articles
        """
        remote_by_id = {article.article_id: article for article in articles}
        duplicates = set(snapshot.duplicates)
        plan = PushPlan()

        for local in snapshot.articles:
            if local.file_path in duplicates:
                continue
            remote = remote_by_id.get(local.article_id) if local.article_id else None
            if remote is None:
                plan.new_files.append(local.file_path)
                continue
            if local.content.strip() != remote.content.strip():
                plan.to_update.append(PushTarget(
                    article_id=remote.article_id,
                    title=local.title,
                    file_path=local.file_path,
                    content=local.content,
                ))

        plan.to_update.sort(key=lambda t: t.article_id)
        plan.new_files.sort()
        plan.deleted_remotely = sorted(
            (a for a in articles if a.article_id not in snapshot.by_id),
            key=lambda a: a.article_id,
        )
        return plan


class PushCommand(BaseCommand):
    """Pushes one file, or every modified file after confirmation.

    Example:
        >>> cmd = PushCommand(root=".", output_handler=output, prompt=input)
        >>> sys.exit(cmd.run())                       # bulk push
        >>> sys.exit(cmd.run(file="Intro/Setup.md"))  # single file
    """

    name = "push"

    def __init__(self, *args, prompt: Optional[Prompt] = None, **kwargs):
        """Initialize the push command.

        Args:
            prompt: Asks for confirmation before a bulk push. Without one,
                bulk pushes are declined.
            *args, **kwargs: Passed to BaseCommand
        """
        super().__init__(*args, **kwargs)
        self.prompt = prompt or _decline
        self._file: Optional[str] = None

    def run(self, file: Optional[str] = None) -> ExitCode:
        self._file = file
        return super().run()

    def execute(self) -> None:
        if self._file:
            self.push_file(self._file)
        else:
            self.push_all()

    def _resolve(self, file_path: str) -> Path:
        """Paths are taken relative to the working directory, then the sync root."""
        candidate = Path(file_path)
        if candidate.is_absolute() or candidate.exists():
            return candidate
        return self.root / file_path

    def push_file(self, file_path: str) -> RemoteArticle:
        """Push a single file without confirmation.

        Raises:
            FilesystemError: If the file cannot be read
            MalformedDocumentError: If the frontmatter is missing or invalid
            CannotPushError: If the file has no article ID
            KnowledgeBaseError: If the update fails
        """
        text = read_text_file(self._resolve(file_path), file_path)

        local = FrontmatterHandler.decode(text, Path(file_path).as_posix())
        if not local.article_id:
            raise CannotPushError(file_path)

        logger.info(f"Pushing {file_path} to article {local.article_id}")
        with self.output_handler.spinner(f"Updating '{local.title}'..."):
            updated = self.api.update_article(local.article_id, local.title, local.content)

        self.output_handler.success(f"Updated '{local.title}' ({local.article_id})")
        if updated.url:
            self.output_handler.info(f"  {updated.url}")
        return updated

    def push_all(self) -> Optional[PushSummary]:
        """Push every modified file after the user confirms.

        Returns:
            PushSummary, or None when there was nothing to push or the user
            declined

        Raises:
            KnowledgeBaseError: If the catalog cannot be fetched
        """
        with self.output_handler.spinner("Fetching articles from YouTrack..."):
            articles = self.api.list_articles()
        snapshot = self.store.load_snapshot()
        for path in snapshot.skipped:
            self.output_handler.info(f"Skipped unreadable file: {path}")

        plan = PushPlanner.plan(snapshot, articles)

        if plan.is_empty:
            self.output_handler.print("No changes to push.")
            return None

        self.output_handler.print_push_plan(plan)

        if not self._confirm():
            self.output_handler.print("Push cancelled.")
            return None

        summary = self._apply(plan.to_update)

        self.output_handler.print_deletion_warnings(plan.deleted_remotely)
        self.output_handler.print_push_summary(summary)
        return summary

    def _confirm(self) -> bool:
        try:
            answer = self.prompt(CONFIRM_PROMPT)
        except EOFError:
            return False
        return (answer or "").strip().lower() in ("y", "yes")

    def _apply(self, targets: List[PushTarget]) -> PushSummary:
        """Update each target in order, continuing past failures."""
        summary = PushSummary()
        for target in targets:
            try:
                self.api.update_article(target.article_id, target.title, target.content)
                summary.updated.append(target.article_id)
                self.output_handler.success(f"Updated '{target.title}' ({target.file_path})")
            except (KnowledgeBaseError, ValueError) as e:
                logger.error(f"Failed to update {target.article_id} from {target.file_path}: {e}")
                self.output_handler.error(f"Failed to update '{target.title}' ({target.file_path}): {e}")
                summary.failed[target.article_id] = str(e)
        return summary
