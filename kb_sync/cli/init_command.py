"""InitCommand for interactive configuration.

This module implements ``ytkb init``. It creates the user config (YouTrack
URL and token) when none exists, then lets the user pick the knowledge base
for the sync root and stores its key in ``<root>/.env``.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from kb_sync.youtrack_client.api_wrapper import APIWrapper
from kb_sync.youtrack_client.auth import KnowledgeBaseConfig
from kb_sync.youtrack_client.errors import InvalidCredentialsError, KnowledgeBaseError
from kb_sync.youtrack_client.models import KnowledgeBase
from .config import ConfigLoader
from .errors import ConfigError, InitError
from .models import Prompt
from .output import OutputHandler

logger = logging.getLogger(__name__)


class InitCommand:
    """Handles initialization of a sync root.

    Example:
        >>> init = InitCommand(prompt=input)
        >>> config = init.run("./kb")
        >>> print(f"Syncing {config.kb_key}")
    """

    def __init__(
        self,
        prompt: Prompt,
        secret_prompt: Optional[Prompt] = None,
        api_factory: Optional[Callable[[KnowledgeBaseConfig], APIWrapper]] = None,
        output_handler: Optional[OutputHandler] = None,
    ):
        """Initialize the init command.

        Args:
            prompt: Asks the user a question and returns the answer
            secret_prompt: Same, without echoing (used for the token)
            api_factory: Builds the API client (tests inject a mock)
            output_handler: Optional OutputHandler
        """
        self.prompt = prompt
        self.secret_prompt = secret_prompt or prompt
        self.api_factory = api_factory or APIWrapper
        self.output_handler = output_handler or OutputHandler()

    def _ask(self, question: str, secret: bool = False) -> str:
        ask = self.secret_prompt if secret else self.prompt
        try:
            return (ask(question) or "").strip()
        except EOFError:
            raise InitError("Input ended before initialization was complete")

    def _ensure_user_config(self) -> KnowledgeBaseConfig:
        """Load URL and token, asking for them if they are not configured."""
        config_path = ConfigLoader.user_config_path()
        try:
            user_config = ConfigLoader.read_user_config(config_path)
        except ConfigError as e:
            raise InitError(str(e))

        url = user_config.get('url')
        token = user_config.get('token')
        if url and token:
            logger.info(f"Using existing config at {config_path}")
            try:
                return KnowledgeBaseConfig(url=ConfigLoader.validate_url(str(url)), token=str(token))
            except ConfigError as e:
                raise InitError(f"{e} (in {config_path})")

        self.output_handler.print("Configuration file not found. Let's set it up!")
        url = self._ask("Enter YouTrack server URL: ")
        try:
            url = ConfigLoader.validate_url(url)
        except ConfigError as e:
            raise InitError(str(e))
        token = self._ask("Enter API token: ", secret=True)
        if not token:
            raise InitError("API token cannot be empty")

        try:
            ConfigLoader.save_user_config(config_path, url, token)
        except ConfigError as e:
            raise InitError(str(e))
        self.output_handler.success(f"Configuration saved to {config_path}")
        return KnowledgeBaseConfig(url=url, token=token)

    def _list_knowledge_bases(self, config: KnowledgeBaseConfig) -> List[KnowledgeBase]:
        try:
            return self.api_factory(config).list_knowledge_bases()
        except InvalidCredentialsError:
            raise
        except KnowledgeBaseError as e:
            logger.warning(f"Could not list knowledge bases: {e}")
            self.output_handler.warning(f"Could not list knowledge bases: {e}")
            return []

    def _select_kb_key(self, bases: List[KnowledgeBase]) -> str:
        if not bases:
            self.output_handler.print("Please enter the knowledge base key manually.")
            return self._ask("Enter Knowledge Base KEY: ")

        self.output_handler.print("\nAvailable knowledge bases:")
        self.output_handler.print_list([f"{kb.name} (key: {kb.key})" for kb in bases])
        answer = self._ask("\nEnter number or KB_KEY: ")
        if answer.isdigit() and 1 <= int(answer) <= len(bases):
            return bases[int(answer) - 1].key
        return answer

    def run(self, root: Union[str, Path] = ".") -> KnowledgeBaseConfig:
        """Run the interactive setup.

        Args:
            root: Sync root whose .env receives KB_KEY

        Returns:
            The complete configuration

        Raises:
            InitError: If input is invalid or files cannot be written
            InvalidCredentialsError: If the token is rejected
        """
        config = self._ensure_user_config()

        bases = self._list_knowledge_bases(config)
        kb_key = self._select_kb_key(bases)
        if not kb_key:
            raise InitError("Knowledge base key cannot be empty")

        try:
            env_path = ConfigLoader.save_kb_key(root, kb_key)
        except ConfigError as e:
            raise InitError(str(e))

        self.output_handler.success(f"KB_KEY saved to {env_path}")
        logger.info(f"Initialized sync root {root} for knowledge base {kb_key}")
        return config._replace(kb_key=kb_key)
