"""Resolution of Markdown image references into page attachments."""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

from confluence_publisher.models.attachment import (
    Attachment,
    AttachmentRegistry,
    ImageResolutionResult,
)

from .mermaid_renderer import ATTACHMENT_SCHEME

logger = logging.getLogger(__name__)

IMAGE_PATTERN = re.compile(r"!\[(?P<alt>[^\]]*)\]\((?P<url>[^)]+)\)")


def is_remote_url(url: str) -> bool:
    lowered = url.lower()
    return lowered.startswith("http://") or lowered.startswith("https://")


def encoded_forms(reference: str) -> list:
    """Percent-encoded spellings of ``reference`` a converter may emit.

    The fully encoded form escapes path separators too; the path form keeps
    them. Forms identical to the raw reference are omitted.
    """
    forms = []
    for form in (quote(reference, safe=""), quote(reference, safe="/")):
        if form != reference and form not in forms:
            forms.append(form)
    return forms


class ImageResolver:
    """Maps image references in a document to attachment names.

    Remote URLs are left alone. ``attachment:`` references produced by the
    Mermaid renderer map straight to their name. Everything else is treated
    as a file path relative to the document's directory; existing files are
    registered as attachments, missing ones are logged and skipped.

    Args:
        base_dir: Directory relative paths are resolved against
        registry: Attachment registry shared with earlier pipeline steps;
            it decides the final, unique attachment names
        log: Logger receiving warnings about missing files
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        registry: Optional[AttachmentRegistry] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.base_dir = Path(base_dir)
        self.registry = registry if registry is not None else AttachmentRegistry()
        self._log = log or logger

    def resolve(self, markdown: str) -> ImageResolutionResult:
        result = ImageResolutionResult()

        for match in IMAGE_PATTERN.finditer(markdown):
            url = match.group("url").strip()
            if not url or is_remote_url(url):
                continue

            if url.lower().startswith(ATTACHMENT_SCHEME):
                result.mappings[url] = url[len(ATTACHMENT_SCHEME):]
                continue

            # Same reference twice: reuse the first attachment.
            if url in result.mappings:
                continue

            image_path = self._resolve_path(url)
            if not image_path.is_file():
                self._log.warning(f"Image not found, skipping: {image_path}")
                result.skipped.append(str(image_path))
                continue

            file_name = self.registry.unique_name(image_path.name)
            attachment = self.registry.register(Attachment(image_path, file_name, is_generated=False))
            result.attachments.append(attachment)

            result.mappings[url] = file_name
            for form in encoded_forms(url):
                result.mappings.setdefault(form, file_name)

        return result

    def _resolve_path(self, url: str) -> Path:
        path = Path(url)
        if path.is_absolute():
            return path
        return Path(os.path.normpath(self.base_dir / path))
