"""Typed exception hierarchy for YouTrack knowledge-base errors.

This module defines all custom exceptions used by the YouTrack client library.
All exceptions inherit from KnowledgeBaseError so a failed catalog fetch or
update can be caught in one place, and carry descriptive messages with
context to help with debugging.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all youtrack-kb-sync errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class KnowledgeBaseError(SyncError):
    """Base exception for all remote knowledge-base errors."""
    pass


class APIUnreachableError(KnowledgeBaseError):
    """Raised when the YouTrack API cannot be reached (connection or timeout)."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"API is not available at {endpoint}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class ServiceError(KnowledgeBaseError):
    """Raised when YouTrack answers with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str, endpoint: str = ""):
        text = f"API error: {status_code} - {message}" if message else f"API error: {status_code}"
        super().__init__(text)
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint


class InvalidCredentialsError(ServiceError):
    """Raised when the API token is rejected (401/403)."""

    def __init__(self, endpoint: str, status_code: int = 401):
        super().__init__(
            status_code,
            "API token is invalid or lacks permission",
            endpoint=endpoint,
        )


class ArticleNotFoundError(ServiceError):
    """Raised when a requested article does not exist (404)."""

    def __init__(self, article_id: str, endpoint: str = ""):
        super().__init__(404, f"Article {article_id} not found", endpoint=endpoint)
        self.article_id = article_id


class APIAccessError(KnowledgeBaseError):
    """Raised when API access fails after retries."""

    def __init__(self, message: str = "YouTrack API failure (after 3 retries)"):
        super().__init__(message)
