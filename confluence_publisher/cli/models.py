"""Data models for CLI operations.

This module defines the exit codes, the options of a publish run and the
summary reported at its end. All models use dataclasses, following the
patterns in confluence_publisher/models.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Page published
    - GENERAL_ERROR (1): Validation failure or fatal publish error
    - AUTH_ERROR (3): Confluence rejected the credentials
    - NETWORK_ERROR (4): Confluence could not be reached

    Example:
        >>> sys.exit(ExitCode.SUCCESS)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


@dataclass
class PublishOptions:
    """Options of a single publish run, one field per command-line flag.

    Attributes:
        markdown_path: Markdown document to publish (required)
        space_key: Destination space key (required)
        title: Destination page title (required)
        parent_id: Parent page ID for a newly created page
        page_id: Explicit page ID; skips the lookup by title
        base_url: Confluence base URL, overrides the credentials file
        username: Confluence user, overrides the credentials file
        api_token: API token, overrides the credentials file
        credentials_file: JSON credentials file to read (and optionally write)
        mermaid_cli: Mermaid CLI executable
        mermaid_timeout: Seconds allowed for one diagram render
        save_credentials: Persist the merged credentials to credentials_file
    """
    markdown_path: Optional[str] = None
    space_key: Optional[str] = None
    title: Optional[str] = None
    parent_id: Optional[str] = None
    page_id: Optional[str] = None
    base_url: Optional[str] = None
    username: Optional[str] = None
    api_token: Optional[str] = None
    credentials_file: str = "credentials.json"
    mermaid_cli: str = "mmdc"
    mermaid_timeout: Optional[int] = 120
    save_credentials: bool = False


@dataclass
class PublishSummary:
    """Result of a publish run for display to the user.

    Attributes:
        page_id: ID of the published page
        version: Version number reported after the update
        created: True if the page was created during this run
        uploaded: Names of attachments uploaded successfully
        failed_uploads: Names of attachments whose upload failed
        skipped_images: Local image paths that did not exist
        rendered_diagrams: Number of Mermaid diagrams rendered
    """
    page_id: str = ""
    version: Optional[int] = None
    created: bool = False
    uploaded: List[str] = field(default_factory=list)
    failed_uploads: List[str] = field(default_factory=list)
    skipped_images: List[str] = field(default_factory=list)
    rendered_diagrams: int = 0
