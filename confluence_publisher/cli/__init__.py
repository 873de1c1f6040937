"""Command-line interface for publishing Markdown to Confluence.

This package provides the `confluence-publish` CLI tool. It validates
arguments and credentials, runs the content pipeline and drives the
Confluence client, reporting the outcome through the run log and a
terminal summary.
"""

from .publish_command import PublishCommand
from .models import ExitCode, PublishOptions, PublishSummary
from .errors import CLIError, PreflightError

__all__ = [
    'PublishCommand',
    'ExitCode',
    'PublishOptions',
    'PublishSummary',
    'CLIError',
    'PreflightError',
]
