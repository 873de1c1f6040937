"""Typed exception hierarchy for Confluence-related errors.

This module defines all custom exceptions raised while talking to Confluence
or preparing content for it. All exceptions inherit from ConfluenceError so a
caller can treat every fatal publish failure the same way, and each carries
the context needed to explain the failure in the run log.
"""

from typing import Optional


class PublishError(Exception):
    """Base exception for all confluence-publish errors.

    Use this to catch any application-level error from the publish tool.
    """
    pass


class ConfluenceError(PublishError):
    """Base exception for all Confluence-related errors."""
    pass


class InvalidCredentialsError(ConfluenceError):
    """Raised when API credentials are missing or rejected by Confluence."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"API credentials are invalid (user: {user}, endpoint: {endpoint})"
        )
        self.user = user
        self.endpoint = endpoint


class PageNotFoundError(ConfluenceError):
    """Raised when a page required by an update cannot be fetched."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class PageVersionError(ConfluenceError):
    """Raised when a fetched page carries no version information."""

    def __init__(self, page_id: str):
        super().__init__(
            f"Page {page_id} has no version field; cannot compute next version"
        )
        self.page_id = page_id


class PageCreateError(ConfluenceError):
    """Raised when Confluence refuses to create a page."""

    def __init__(self, title: str, status_code: Optional[int] = None, detail: str = ""):
        message = f"Failed to create page '{title}'"
        if status_code is not None:
            message += f" (status {status_code})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.title = title
        self.status_code = status_code
        self.detail = detail


class PageUpdateError(ConfluenceError):
    """Raised when Confluence refuses a page update or returns garbage."""

    def __init__(self, page_id: str, status_code: Optional[int] = None, detail: str = ""):
        message = f"Failed to update page {page_id}"
        if status_code is not None:
            message += f" (status {status_code})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.page_id = page_id
        self.status_code = status_code
        self.detail = detail


class APIUnreachableError(ConfluenceError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class ConversionError(ConfluenceError):
    """Raised when Markdown to storage-format conversion fails."""

    def __init__(self, message: str):
        super().__init__(message)
