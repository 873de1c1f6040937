"""Confluence client library for publishing pages.

This package provides Python abstractions over the Confluence REST content
API, credential handling, and the typed errors raised along the way.
"""

from .auth import Authenticator, Credentials, CredentialStore
from .errors import (
    PublishError,
    ConfluenceError,
    InvalidCredentialsError,
    PageNotFoundError,
    PageVersionError,
    PageCreateError,
    PageUpdateError,
    APIUnreachableError,
    ConversionError,
)

__all__ = [
    "Authenticator",
    "Credentials",
    "CredentialStore",
    "PublishError",
    "ConfluenceError",
    "InvalidCredentialsError",
    "PageNotFoundError",
    "PageVersionError",
    "PageCreateError",
    "PageUpdateError",
    "APIUnreachableError",
    "ConversionError",
]
