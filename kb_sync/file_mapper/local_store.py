"""Local markdown tree under a sync root.

Lists, reads and writes the markdown files of one sync root and loads them
into a LocalSnapshot. All paths handed in and out are POSIX paths relative
to the root.
"""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import List, Union

from .errors import FileMapperError, FilesystemError
from .frontmatter_handler import FrontmatterHandler
from .models import LocalArticle, LocalSnapshot

logger = logging.getLogger(__name__)

# Maximum file size to read into memory (10 MB)
MAX_FILE_SIZE = 10 * 1024 * 1024


def read_text_file(path: Path, display_path: str) -> str:
    """Read a markdown file as UTF-8, refusing files over MAX_FILE_SIZE.

    Args:
        path: Filesystem path to read
        display_path: Path reported in errors

    Raises:
        FilesystemError: If the file is missing, too large or unreadable
    """
    if not path.is_file():
        raise FilesystemError(display_path, 'read', 'not found')
    try:
        size = path.stat().st_size
        if size > MAX_FILE_SIZE:
            raise FilesystemError(
                display_path,
                'read',
                f'File size ({size / (1024 * 1024):.2f} MB) exceeds maximum allowed size '
                f'({MAX_FILE_SIZE // (1024 * 1024)} MB)'
            )
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(display_path, 'read', str(e)) from e


class LocalStore:
    """Filesystem access for one sync root.

    Example:
        >>> store = LocalStore("./kb")
        >>> snapshot = store.load_snapshot()
        >>> print(f"{len(snapshot.articles)} local article(s)")
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _resolve(self, rel_path: str) -> Path:
        """Resolve a relative path and refuse anything outside the root."""
        full_path = self.root / rel_path
        real_root = os.path.realpath(self.root)
        real_path = os.path.realpath(full_path)
        if real_path != real_root and not real_path.startswith(real_root + os.sep):
            raise FilesystemError(
                rel_path,
                'validate',
                f'Path traversal detected: {rel_path} is outside {self.root}'
            )
        return full_path

    def list_markdown_files(self) -> List[str]:
        """List every .md file under the root.

        Dot-directories (.git, .venv, ...) are skipped.

        Returns:
            Sorted POSIX paths relative to the root
        """
        if not self.root.is_dir():
            logger.info(f"Sync root {self.root} does not exist - treating as empty")
            return []

        paths: List[str] = []
        for current, dirs, files in os.walk(self.root):
            dirs[:] = [d for d in dirs if not d.startswith('.')]
            rel_dir = Path(current).relative_to(self.root)
            for filename in files:
                if filename.endswith('.md'):
                    paths.append((rel_dir / filename).as_posix())
        return sorted(paths)

    def read_file(self, rel_path: str) -> str:
        """Read a file as UTF-8.

        Raises:
            FilesystemError: If the file is missing, too large or unreadable
        """
        return read_text_file(self._resolve(rel_path), rel_path)

    def write_file(self, rel_path: str, text: str) -> None:
        """Write a file as UTF-8, creating parent directories.

        Existing files are overwritten.

        Raises:
            FilesystemError: If the file cannot be written
        """
        full_path = self._resolve(rel_path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(text, encoding='utf-8')
        except OSError as e:
            raise FilesystemError(rel_path, 'write', str(e)) from e

    def read_article(self, rel_path: str) -> LocalArticle:
        """Read and decode one markdown file.

        Raises:
            FilesystemError: If the file cannot be read
            MalformedDocumentError: If the frontmatter is missing or invalid
        """
        rel_path = PurePosixPath(rel_path).as_posix()
        return FrontmatterHandler.decode(self.read_file(rel_path), rel_path)

    def load_snapshot(self) -> LocalSnapshot:
        """Read every markdown file under the root.

        Files that fail to read or decode are skipped and recorded in
        ``skipped``. When two files carry the same article ID the first in
        path order keeps it and the later one is recorded in ``duplicates``.
        """
        snapshot = LocalSnapshot()

        for rel_path in self.list_markdown_files():
            try:
                article = self.read_article(rel_path)
            except FileMapperError as e:
                logger.info(f"Skipping {rel_path}: {e}")
                snapshot.skipped.append(rel_path)
                continue

            snapshot.articles.append(article)
            snapshot.by_path[rel_path] = article

            if article.article_id is None:
                continue
            first = snapshot.by_id.get(article.article_id)
            if first is not None:
                logger.warning(
                    f"{rel_path} has the same article ID ({article.article_id}) as "
                    f"{first.file_path} - ignoring it for matching"
                )
                snapshot.duplicates.append(rel_path)
                continue
            snapshot.by_id[article.article_id] = article

        logger.debug(
            f"Loaded {len(snapshot.articles)} local file(s), "
            f"skipped {len(snapshot.skipped)}"
        )
        return snapshot
