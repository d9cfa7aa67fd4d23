"""Main CLI entry point for the ytkb command.

This module provides the Typer application that serves as the entry point
for the ytkb command-line tool. Global options live on the callback; the
work is done by the download, diff, push and init subcommands.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from kb_sync import __version__
from kb_sync.cli.diff_command import DiffCommand
from kb_sync.cli.download_command import DownloadCommand
from kb_sync.cli.errors import InitError
from kb_sync.cli.init_command import InitCommand
from kb_sync.cli.models import ExitCode
from kb_sync.cli.output import OutputHandler
from kb_sync.cli.push_command import PushCommand
from kb_sync.youtrack_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
)

app = typer.Typer(
    name="ytkb",
    help="""Sync YouTrack knowledge base articles with local markdown files.

QUICK START:
  ytkb init          # Configure URL, token and knowledge base
  ytkb download      # Pull every article into the current directory
  ytkb diff          # Show what changed locally
  ytkb push          # Push modified articles (asks first)
  ytkb push FILE     # Push one file""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    """Global options shared by every subcommand."""
    root: Path
    verbosity: int = 0
    no_color: bool = False
    logdir: Optional[str] = None

    def output_handler(self) -> OutputHandler:
        return OutputHandler(verbosity=self.verbosity, no_color=self.no_color)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'kb_sync' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("kb_sync")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"ytkb_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _prompt(text: str) -> str:
    """Ask a question on the terminal; EOF reads as EOFError."""
    try:
        return typer.prompt(text, default="", show_default=False, prompt_suffix="")
    except typer.Abort:
        raise EOFError(text)


def _secret_prompt(text: str) -> str:
    try:
        return typer.prompt(text, default="", show_default=False, prompt_suffix="", hide_input=True)
    except typer.Abort:
        raise EOFError(text)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ytkb version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-C",
        help="Sync root directory (default: current directory)",
        metavar="DIR",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Sync YouTrack knowledge base articles with local markdown files."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CLIState(root=root, verbosity=verbosity, no_color=no_color, logdir=logdir)


@app.command()
def download(ctx: typer.Context) -> None:
    """Download every article into nested folders."""
    state: CLIState = ctx.obj
    command = DownloadCommand(root=state.root, output_handler=state.output_handler())
    raise typer.Exit(command.run())


@app.command()
def diff(ctx: typer.Context) -> None:
    """Show local changes as a tree (✴️ modified, ❇️ new, ❌ deleted)."""
    state: CLIState = ctx.obj
    command = DiffCommand(root=state.root, output_handler=state.output_handler())
    raise typer.Exit(command.run())


@app.command()
def push(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(
        None,
        help="Push only this file (no confirmation)",
    ),
) -> None:
    """Push modified articles to YouTrack. Never creates or deletes articles."""
    state: CLIState = ctx.obj
    command = PushCommand(
        root=state.root,
        output_handler=state.output_handler(),
        prompt=_prompt,
    )
    raise typer.Exit(command.run(file=file))


@app.command()
def init(ctx: typer.Context) -> None:
    """Configure YouTrack URL, token and knowledge base interactively."""
    state: CLIState = ctx.obj
    output = state.output_handler()

    try:
        InitCommand(
            prompt=_prompt,
            secret_prompt=_secret_prompt,
            output_handler=output,
        ).run(state.root)
        output.info("")
        output.info("Next steps:")
        output.info("  Run 'ytkb download' to fetch the articles")

    except InitError as e:
        logger.error(f"Initialization failed: {e}")
        output.error(f"Initialization failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except InvalidCredentialsError as e:
        logger.error(f"Authentication failed: {e}")
        output.error(f"Authentication failed: {e}")
        raise typer.Exit(ExitCode.AUTH_ERROR)

    except (APIUnreachableError, APIAccessError) as e:
        logger.error(f"API error: {e}")
        output.error(f"API error: {e}")
        raise typer.Exit(ExitCode.NETWORK_ERROR)

    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m kb_sync.cli.main
if __name__ == "__main__":
    main()
