"""Command-line interface for YouTrack knowledge-base sync.

This package provides the `ytkb` CLI tool: download the knowledge base into
nested markdown folders, diff local edits against YouTrack, and push
modified articles back after confirmation.
"""

from .diff_command import DiffCommand
from .download_command import DownloadCommand
from .init_command import InitCommand
from .push_command import PushCommand, PushPlanner
from .reconciler import Reconciler
from .tree_renderer import TreeRenderer
from .models import (
    ExitCode,
    ReconcileResult,
    PushPlan,
    PushTarget,
    PushSummary,
    DownloadSummary,
)
from .errors import (
    CLIError,
    CannotPushError,
    ConfigError,
    ConfigNotFoundError,
    InitError,
)

__all__ = [
    'DiffCommand',
    'DownloadCommand',
    'InitCommand',
    'PushCommand',
    'PushPlanner',
    'Reconciler',
    'TreeRenderer',
    'ExitCode',
    'ReconcileResult',
    'PushPlan',
    'PushTarget',
    'PushSummary',
    'DownloadSummary',
    'CLIError',
    'CannotPushError',
    'ConfigError',
    'ConfigNotFoundError',
    'InitError',
]
