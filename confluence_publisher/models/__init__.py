"""Data models for pages, attachments and conversion results."""

from confluence_publisher.models.attachment import (
    Attachment,
    AttachmentRegistry,
    ImageResolutionResult,
    MermaidRenderResult,
)
from confluence_publisher.models.confluence_page import ConfluencePage

__all__ = [
    'Attachment',
    'AttachmentRegistry',
    'ConfluencePage',
    'ImageResolutionResult',
    'MermaidRenderResult',
]
