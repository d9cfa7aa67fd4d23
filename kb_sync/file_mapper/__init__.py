"""File mapper library for YouTrack knowledge-base sync.

This package maps between the YouTrack article hierarchy and a local tree of
markdown files with YAML frontmatter, so articles can be edited offline and
pushed back.
"""

from .models import ArticleNode, ArticleStatus, LocalArticle, LocalSnapshot
from .errors import (
    FileMapperError,
    FilesystemError,
    MalformedDocumentError,
    FrontmatterError,
    StructuralError,
)
from .filesafe_converter import FilesafeConverter
from .frontmatter_handler import FrontmatterHandler
from .hierarchy_builder import HierarchyBuilder, RootOrder
from .local_store import LocalStore

__all__ = [
    'ArticleNode',
    'ArticleStatus',
    'LocalArticle',
    'LocalSnapshot',
    'FileMapperError',
    'FilesystemError',
    'MalformedDocumentError',
    'FrontmatterError',
    'StructuralError',
    'FilesafeConverter',
    'FrontmatterHandler',
    'HierarchyBuilder',
    'RootOrder',
    'LocalStore',
]
