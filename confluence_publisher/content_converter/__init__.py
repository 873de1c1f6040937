"""Content conversion from Markdown to Confluence storage format.

The pipeline runs in four steps: Mermaid blocks are rendered to images, image
references are resolved to attachments, Markdown is converted to HTML with
Pandoc, and mapped ``<img>`` tags are rewritten into ``ac:image`` elements.
"""

from .image_resolver import ImageResolver
from .markdown_converter import MarkdownConverter
from .mermaid_renderer import MermaidRenderer
from .storage_rewriter import convert_images_to_storage

__all__ = [
    'ImageResolver',
    'MarkdownConverter',
    'MermaidRenderer',
    'convert_images_to_storage',
]
