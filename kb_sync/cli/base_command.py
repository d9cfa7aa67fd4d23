"""Shared wiring and error handling for the sync commands.

Every command loads its configuration lazily, builds its collaborators on
first use (tests inject them instead), and translates exceptions to exit
codes in one place.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from kb_sync.file_mapper.errors import FileMapperError
from kb_sync.file_mapper.local_store import LocalStore
from kb_sync.youtrack_client.api_wrapper import APIWrapper
from kb_sync.youtrack_client.auth import KnowledgeBaseConfig
from kb_sync.youtrack_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    KnowledgeBaseError,
)
from .config import ConfigLoader
from .errors import CLIError, ConfigError, ConfigNotFoundError
from .models import ExitCode
from .output import OutputHandler

logger = logging.getLogger(__name__)


class BaseCommand:
    """Base class for download, diff and push.

    Subclasses implement ``execute()``; ``run()`` wraps it and returns an
    ExitCode.
    """

    name = "command"

    def __init__(
        self,
        root: Union[str, Path] = ".",
        config: Optional[KnowledgeBaseConfig] = None,
        api: Optional[APIWrapper] = None,
        store: Optional[LocalStore] = None,
        output_handler: Optional[OutputHandler] = None,
    ):
        """Initialize the command.

        Args:
            root: Sync root directory
            config: Connection settings (loaded from disk when None)
            api: Optional APIWrapper instance for testing
            store: Optional LocalStore instance for testing
            output_handler: Optional OutputHandler (a default one is created)
        """
        self.root = Path(root)
        self._config = config
        self._api = api
        self.store = store or LocalStore(self.root)
        self.output_handler = output_handler or OutputHandler()

    @property
    def config(self) -> KnowledgeBaseConfig:
        if self._config is None:
            self._config = ConfigLoader.load(self.root)
        return self._config

    @property
    def api(self) -> APIWrapper:
        if self._api is None:
            self._api = APIWrapper(self.config)
        return self._api

    def execute(self) -> None:
        raise NotImplementedError

    def run(self) -> ExitCode:
        """Execute the command and translate exceptions to exit codes."""
        try:
            self.execute()
            return ExitCode.SUCCESS

        except InvalidCredentialsError as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            self.output_handler.info("Check the token in your config or YOUTRACK_TOKEN")
            return ExitCode.AUTH_ERROR

        except (APIUnreachableError, APIAccessError) as e:
            logger.error(f"API error: {e}")
            self.output_handler.error(f"API error: {e}")
            self.output_handler.info("Check your network connection and try again")
            return ExitCode.NETWORK_ERROR

        except (ConfigError, ConfigNotFoundError) as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except (KnowledgeBaseError, FileMapperError, CLIError) as e:
            logger.error(f"{self.name} failed: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except ValueError as e:
            logger.error(f"{self.name} failed: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception(f"Unexpected error during {self.name}")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR
