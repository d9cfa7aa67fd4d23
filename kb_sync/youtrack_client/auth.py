"""Connection settings for the YouTrack REST API.

The settings are loaded once by the CLI (see kb_sync.cli.config) and passed
explicitly to the API wrapper. Nothing in the client reads the environment.
"""

from typing import Dict, NamedTuple


class KnowledgeBaseConfig(NamedTuple):
    """YouTrack connection settings for one sync root."""
    url: str
    token: str
    kb_key: str = ""


def auth_headers(config: KnowledgeBaseConfig) -> Dict[str, str]:
    """Build the HTTP headers that authenticate every request.

    The token is never logged.
    """
    return {
        "Authorization": f"Bearer {config.token}",
        "Accept": "application/json",
    }
