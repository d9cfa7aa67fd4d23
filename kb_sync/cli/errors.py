"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI.
All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from kb_sync.youtrack_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigNotFoundError(CLIError):
    """Raised when the YouTrack URL or token is not configured."""

    def __init__(self, config_path: str, missing: Optional[str] = None):
        message = f"Configuration not found at {config_path}"
        if missing:
            message = f"Missing {missing} (looked in {config_path} and the environment)"
        super().__init__(f"{message}. Run 'ytkb init' first.")
        self.config_path = config_path
        self.missing = missing


class ConfigError(CLIError):
    """Raised when configuration is present but invalid or incomplete."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class CannotPushError(CLIError):
    """Raised when a file has no article ID and so cannot be pushed."""

    def __init__(self, file_path: str):
        super().__init__(
            f"Cannot push {file_path}: it has no article id. "
            f"Create the article in YouTrack first, then run 'ytkb download'."
        )
        self.file_path = file_path


class InitError(CLIError):
    """Raised when initialization fails."""

    def __init__(self, message: str):
        super().__init__(message)
