"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Results go to stdout; warnings, errors and spinners go to stderr so that
``ytkb diff > tree.txt`` captures only the tree. Supports verbosity levels
and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, List, Sequence

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner

from kb_sync.youtrack_client.models import RemoteArticle
from .models import DownloadSummary, PushPlan, PushSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console for stdout
        err_console: Rich Console for stderr

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Downloaded 12 article(s)")
        >>> with handler.spinner("Fetching articles..."):
        ...     articles = api.list_articles()
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        self.err_console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red on stderr."""
        self.err_console.print(f"[red]✗ {escape(message)}[/red]")

    def warning(self, message: str) -> None:
        """Display warning message in yellow on stderr."""
        self.err_console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str = "") -> None:
        """Display message without formatting.

        Rich markup in the message (e.g. a title like "[draft] Notes") is
        printed literally.
        """
        self.console.print(escape(message))

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display a transient spinner on stderr while the block runs.

        Example:
            >>> with handler.spinner("Fetching articles..."):
            ...     articles = api.list_articles()
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.err_console, refresh_per_second=10, transient=True):
            yield

    def print_tree(self, lines: Sequence[str]) -> None:
        """Print pre-rendered tree lines."""
        for line in lines:
            self.console.print(escape(line))

    def print_push_plan(self, plan: PushPlan) -> None:
        """Display what a bulk push would do before asking for confirmation."""
        if plan.to_update:
            self.console.print(f"\n[bold]Articles to update ({len(plan.to_update)}):[/bold]")
            for index, target in enumerate(plan.to_update, start=1):
                self.console.print(
                    f"  {index}. {escape(target.title)} [dim]({escape(target.file_path)})[/dim]"
                )
        else:
            self.console.print("\nNo modified articles to update.")

        if plan.new_files:
            self.warning(
                f"Skipping {len(plan.new_files)} new file(s) without a YouTrack article:"
            )
            for path in plan.new_files:
                self.err_console.print(f"    • {escape(path)}")
            self.err_console.print(
                "  Create these articles manually in YouTrack first, "
                "then run 'ytkb download' to link them."
            )
        self.console.print("")

    def print_deletion_warnings(self, articles: Sequence[RemoteArticle]) -> None:
        """Warn about remote articles that no local file refers to."""
        for article in articles:
            self.warning(
                f"'{article.title}' ({article.article_id}) has no local file. "
                f"It was NOT deleted from YouTrack: {article.url}"
            )

    def print_push_summary(self, summary: PushSummary) -> None:
        """Display push results."""
        self.console.print("\n[bold]Push Summary:[/bold]")
        self.console.print(f"  [green]↑[/green] Updated: {len(summary.updated)} article(s)")
        if summary.failed:
            self.console.print(f"  [red]✗[/red] Failed: {len(summary.failed)} article(s)")

    def print_download_summary(self, summary: DownloadSummary) -> None:
        """Display download results."""
        self.success(f"Downloaded {len(summary.written)} article(s)")
        if summary.collisions:
            self.console.print(
                f"  [yellow]⚠[/yellow] {len(summary.collisions)} file name collision(s)"
            )
        if summary.failed:
            self.console.print(f"  [red]✗[/red] Failed: {len(summary.failed)} file(s)")

    def print_list(self, items: List[str]) -> None:
        """Display a numbered list."""
        for index, item in enumerate(items, start=1):
            self.console.print(f"  {index}. {escape(item)}")
