"""Publish Markdown documents with diagrams and images to Confluence."""

__version__ = "0.1.0"
