"""Markdown to HTML conversion using Pandoc.

Pandoc's Markdown reader covers the extended syntax documents are written
in: pipe and grid tables, task lists, footnotes, strikethrough, definition
lists and fenced code. Implicit figures are disabled so a lone image stays a
plain ``<img>`` inside a paragraph instead of a ``<figure>`` element, which
Confluence storage format does not accept. Smart punctuation is off so
quotes and dashes are published as typed, and syntax highlighting is off so
code blocks stay a plain ``<pre><code>``.
"""

import shutil
import subprocess

from confluence_publisher.confluence_client.errors import ConversionError

PANDOC_INPUT_FORMAT = "markdown-implicit_figures-smart"
PANDOC_OUTPUT_FORMAT = "html"
PANDOC_OPTIONS = ["--no-highlight"]


class MarkdownConverter:
    """Converts Markdown to an HTML fragment with Pandoc."""

    def __init__(self, pandoc: str = "pandoc", timeout: int = 30):
        """Initialize MarkdownConverter and verify Pandoc is available.

        Args:
            pandoc: Path or name of the Pandoc executable
            timeout: Seconds allowed for one conversion

        Raises:
            ConversionError: If Pandoc is not found on system PATH
        """
        self.pandoc = pandoc
        self.timeout = timeout
        if not self._pandoc_installed():
            raise ConversionError(
                "Pandoc not found. Install: brew install pandoc (macOS) or "
                "apt-get install pandoc (Linux) or download from "
                "https://pandoc.org/installing.html"
            )

    def markdown_to_html(self, markdown: str) -> str:
        """Convert Markdown to an HTML fragment.

        Args:
            markdown: Markdown string

        Returns:
            HTML fragment (no ``<html>``/``<body>`` wrapper)

        Raises:
            ConversionError: If conversion fails or times out
        """
        if not markdown:
            return ""

        try:
            result = subprocess.run(
                [self.pandoc, "-f", PANDOC_INPUT_FORMAT, "-t", PANDOC_OUTPUT_FORMAT, *PANDOC_OPTIONS],
                input=markdown,
                text=True,
                capture_output=True,
                check=True,
                timeout=self.timeout
            )
        except subprocess.CalledProcessError as e:
            raise ConversionError(f"Pandoc conversion failed: {e.stderr}")
        except subprocess.TimeoutExpired:
            raise ConversionError(f"Pandoc conversion timed out (>{self.timeout}s)")
        except OSError as e:
            raise ConversionError(f"Pandoc could not be started: {e}")

        return result.stdout

    def _pandoc_installed(self) -> bool:
        return shutil.which(self.pandoc) is not None
