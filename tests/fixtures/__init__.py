"""Test fixtures for publish tests.

This module provides:
- Mock Confluence REST responses and content objects
- In-memory stand-ins for Pandoc and the Confluence API
- Sample markdown documents with diagrams and images
"""

from .api_responses import make_response, page_json, search_json
from .fakes import FakeConfluence, FakeMarkdownConverter
from .sample_markdown import (
    PNG_BYTES,
    SAMPLE_MARKDOWN_WITH_DIAGRAMS,
    SAMPLE_MARKDOWN_WITH_IMAGES,
    SAMPLE_MARKDOWN_FULL,
)

__all__ = [
    "make_response",
    "page_json",
    "search_json",
    "FakeConfluence",
    "FakeMarkdownConverter",
    "PNG_BYTES",
    "SAMPLE_MARKDOWN_WITH_DIAGRAMS",
    "SAMPLE_MARKDOWN_WITH_IMAGES",
    "SAMPLE_MARKDOWN_FULL",
]
