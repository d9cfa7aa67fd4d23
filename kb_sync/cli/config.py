"""Configuration loading and saving.

Connection settings come from two places:

- the user config ``~/.config/youtrack-kb-sync/config.yaml`` (YouTrack URL and
  permanent token, shared by every sync root), and
- ``<root>/.env`` holding ``KB_KEY``, the knowledge base a sync root mirrors.

Environment variables (YOUTRACK_URL, YOUTRACK_TOKEN, KB_KEY) take precedence
over both files.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

import yaml
from dotenv import dotenv_values, set_key

from kb_sync.youtrack_client.auth import KnowledgeBaseConfig
from .errors import ConfigError, ConfigNotFoundError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ConfigLoader:
    """Loads and saves the user config and the per-root knowledge-base key.

    User config structure:
        url: https://youtrack.example.com
        token: perm:...

    Example:
        >>> config = ConfigLoader.load(".")
        >>> print(f"Syncing {config.kb_key} from {config.url}")
    """

    CONFIG_ENV_VAR = 'YTKB_CONFIG'
    DEFAULT_CONFIG_PATH = Path('~/.config/youtrack-kb-sync/config.yaml')
    ENV_FILE = '.env'

    URL_ENV_VAR = 'YOUTRACK_URL'
    TOKEN_ENV_VAR = 'YOUTRACK_TOKEN'
    KB_KEY_ENV_VAR = 'KB_KEY'

    @classmethod
    def user_config_path(cls) -> Path:
        """Path of the user config (YTKB_CONFIG overrides the default)."""
        override = os.environ.get(cls.CONFIG_ENV_VAR)
        return Path(override).expanduser() if override else cls.DEFAULT_CONFIG_PATH.expanduser()

    @classmethod
    def read_user_config(cls, path: Optional[PathLike] = None) -> Dict[str, Any]:
        """Read the user config file.

        Returns:
            The YAML mapping, or {} when the file does not exist

        Raises:
            ConfigError: If the file is unreadable, invalid YAML or not a mapping
        """
        config_path = Path(path) if path else cls.user_config_path()
        try:
            content = config_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}")

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {config_path}: {str(e)}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"{config_path} must be a YAML dictionary, got {type(data).__name__}"
            )
        return data

    @classmethod
    def read_kb_key(cls, root: PathLike) -> Optional[str]:
        """Read KB_KEY from the environment or ``<root>/.env``."""
        key = os.environ.get(cls.KB_KEY_ENV_VAR)
        if key:
            return key.strip()
        env_path = Path(root) / cls.ENV_FILE
        if not env_path.is_file():
            return None
        value = dotenv_values(env_path).get(cls.KB_KEY_ENV_VAR)
        return value.strip() if value else None

    @classmethod
    def load(cls, root: PathLike) -> KnowledgeBaseConfig:
        """Load the complete configuration for a sync root.

        Args:
            root: Sync root directory

        Returns:
            KnowledgeBaseConfig with url (no trailing slash), token and kb_key

        Raises:
            ConfigNotFoundError: If the URL or token is not configured
            ConfigError: If the KB key is missing or the URL is invalid
        """
        config_path = cls.user_config_path()
        user_config = cls.read_user_config(config_path)

        url = os.environ.get(cls.URL_ENV_VAR) or user_config.get('url')
        token = os.environ.get(cls.TOKEN_ENV_VAR) or user_config.get('token')

        if not url:
            raise ConfigNotFoundError(str(config_path), missing='YouTrack URL')
        if not token:
            raise ConfigNotFoundError(str(config_path), missing='YouTrack token')

        url = cls.validate_url(str(url))

        kb_key = cls.read_kb_key(root)
        if not kb_key:
            raise ConfigError(
                f"{cls.KB_KEY_ENV_VAR} is not set in {Path(root) / cls.ENV_FILE}. "
                f"Run 'ytkb init' first.",
                config_field=cls.KB_KEY_ENV_VAR,
            )

        logger.debug(f"Loaded config: url={url}, kb_key={kb_key}")
        return KnowledgeBaseConfig(url=url, token=str(token).strip(), kb_key=kb_key)

    @classmethod
    def validate_url(cls, url: str) -> str:
        """Check that a URL is http(s) with a host and strip trailing slashes.

        Raises:
            ConfigError: If the URL is malformed
        """
        url = url.strip()
        parsed = urlparse(url)
        if parsed.scheme not in ('http', 'https'):
            raise ConfigError(
                f"URL must start with http:// or https://, got '{url}'",
                config_field='url',
            )
        if not parsed.netloc:
            raise ConfigError(f"URL is missing a host name: '{url}'", config_field='url')
        return url.rstrip('/')

    @classmethod
    def save_user_config(cls, path: PathLike, url: str, token: str) -> None:
        """Write the user config file (mode 0600, parents created).

        Raises:
            ConfigError: If the file cannot be written
        """
        config_path = Path(path)
        yaml_str = yaml.safe_dump(
            {'url': url, 'token': token},
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            config_path.write_text(yaml_str, encoding='utf-8')
            config_path.chmod(0o600)
        except OSError as e:
            raise ConfigError(f"Cannot write {config_path}: {e}")
        logger.info(f"Saved user config to {config_path}")

    @classmethod
    def save_kb_key(cls, root: PathLike, key: str) -> Path:
        """Write KB_KEY into ``<root>/.env``, keeping other entries.

        Returns:
            Path of the .env file

        Raises:
            ConfigError: If the file cannot be written
        """
        env_path = Path(root) / cls.ENV_FILE
        try:
            env_path.parent.mkdir(parents=True, exist_ok=True)
            env_path.touch(exist_ok=True)
            set_key(str(env_path), cls.KB_KEY_ENV_VAR, key, quote_mode='never')
        except OSError as e:
            raise ConfigError(f"Cannot write {env_path}: {e}")
        logger.info(f"Saved {cls.KB_KEY_ENV_VAR}={key} to {env_path}")
        return env_path
