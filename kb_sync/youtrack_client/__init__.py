"""YouTrack client library for knowledge-base sync.

This package provides Python abstractions over the YouTrack REST API for
listing and updating knowledge-base articles.
"""

from .api_wrapper import APIWrapper
from .auth import KnowledgeBaseConfig
from .models import KnowledgeBase, RemoteArticle
from .errors import (
    SyncError,
    KnowledgeBaseError,
    APIUnreachableError,
    ServiceError,
    InvalidCredentialsError,
    ArticleNotFoundError,
    APIAccessError,
)

__all__ = [
    "APIWrapper",
    "KnowledgeBaseConfig",
    "KnowledgeBase",
    "RemoteArticle",
    "SyncError",
    "KnowledgeBaseError",
    "APIUnreachableError",
    "ServiceError",
    "InvalidCredentialsError",
    "ArticleNotFoundError",
    "APIAccessError",
]
