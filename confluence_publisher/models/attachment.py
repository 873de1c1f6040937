"""Attachment data models."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List


@dataclass(frozen=True)
class Attachment:
    """A local file to be uploaded as a page attachment.

    Attributes:
        source_path: Location of the file on disk
        file_name: Name the attachment will carry on the page
        is_generated: True for files produced during the run (rendered diagrams)
    """
    source_path: Path
    file_name: str
    is_generated: bool = False


class AttachmentRegistry:
    """Ordered collection of attachments with unique file names.

    Names are compared case-insensitively, matching how Confluence treats
    attachment names on a page. Iteration yields attachments in registration
    order.
    """

    def __init__(self) -> None:
        self._attachments: Dict[str, Attachment] = {}

    def __contains__(self, file_name: str) -> bool:
        return file_name.lower() in self._attachments

    def __iter__(self) -> Iterator[Attachment]:
        return iter(self._attachments.values())

    def __len__(self) -> int:
        return len(self._attachments)

    def unique_name(self, file_name: str) -> str:
        """Return ``file_name`` or the first free ``<stem>-<n><ext>`` variant."""
        if file_name not in self:
            return file_name

        stem, extension = os.path.splitext(file_name)
        index = 1
        candidate = f"{stem}-{index}{extension}"
        while candidate in self:
            index += 1
            candidate = f"{stem}-{index}{extension}"
        return candidate

    def register(self, attachment: Attachment) -> Attachment:
        """Add an attachment whose name is already unique.

        Raises:
            ValueError: If the name is already taken
        """
        if attachment.file_name in self:
            raise ValueError(f"Attachment name already registered: {attachment.file_name}")
        self._attachments[attachment.file_name.lower()] = attachment
        return attachment


@dataclass
class MermaidRenderResult:
    """Markdown after diagram replacement plus the rendered images."""
    markdown: str
    attachments: List[Attachment] = field(default_factory=list)


@dataclass
class ImageResolutionResult:
    """Outcome of resolving the image references in a document.

    Attributes:
        mappings: Reference text (raw and percent-encoded) -> attachment name
        attachments: Local images registered during resolution
        skipped: Resolved paths of local images that do not exist
    """
    mappings: Dict[str, str] = field(default_factory=dict)
    attachments: List[Attachment] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
