"""Typed exception hierarchy for CLI-related errors.

This module defines the exceptions raised by the command-line layer before
any request reaches Confluence. All exceptions inherit from CLIError.
"""

from typing import Optional

from confluence_publisher.confluence_client.errors import PublishError


class CLIError(PublishError):
    """Base exception for all CLI-related errors."""
    pass


class PreflightError(CLIError):
    """Raised when arguments, input file or credentials fail validation."""

    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(message)
        self.option = option
