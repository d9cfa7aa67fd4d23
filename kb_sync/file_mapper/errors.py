"""Typed exception hierarchy for file mapper errors.

This module defines all custom exceptions used by the file mapper library.
All exceptions inherit from FileMapperError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import List, Optional

from kb_sync.youtrack_client.errors import SyncError


class FileMapperError(SyncError):
    """Base exception for all file mapper errors."""
    pass


class FilesystemError(FileMapperError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class MalformedDocumentError(FileMapperError):
    """Raised when a markdown file has no usable frontmatter block."""

    def __init__(self, file_path: str, message: str):
        super().__init__(
            f"Frontmatter error in {file_path}: {message}"
        )
        self.file_path = file_path
        self.message = message


FrontmatterError = MalformedDocumentError


class StructuralError(FileMapperError):
    """Raised when remote parent references cannot form a forest."""

    def __init__(self, message: str, article_ids: Optional[List[str]] = None):
        ids = list(article_ids or [])
        if ids:
            message = f"{message}: {', '.join(ids)}"
        super().__init__(message)
        self.article_ids = ids
