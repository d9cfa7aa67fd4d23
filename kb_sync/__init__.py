"""Sync a YouTrack knowledge base with a local tree of markdown files."""

__version__ = "0.1.0"
