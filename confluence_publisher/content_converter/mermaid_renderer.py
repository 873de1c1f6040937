"""Mermaid diagram rendering via the Mermaid CLI.

Fenced ```mermaid blocks are written to temporary ``.mmd`` files and rendered
to PNG by ``mmdc``. Each successfully rendered block is replaced by an image
reference using the ``attachment:`` pseudo-scheme, which the image resolver
later maps to the uploaded file. A block that fails to render stays in the
document as source code.
"""

import logging
import re
import subprocess
import tempfile
import uuid
from pathlib import Path
from typing import List, Optional

from confluence_publisher.models.attachment import Attachment, MermaidRenderResult

logger = logging.getLogger(__name__)

MERMAID_BLOCK_PATTERN = re.compile(r"```mermaid\s*(?P<code>[\s\S]*?)```", re.IGNORECASE)

DEFAULT_MERMAID_CLI = "mmdc"
DEFAULT_RENDER_TIMEOUT = 120
ATTACHMENT_SCHEME = "attachment:"


def diagram_file_name(index: int) -> str:
    """Return the attachment name for the ``index``-th rendered diagram (1-based)."""
    return f"mermaid-diagram-{index}.png"


class MermaidRenderer:
    """Replaces Mermaid code blocks with references to rendered PNG files.

    Temporary input and output files live under
    ``<system temp>/confluence-publisher`` and are left in place after the
    run.

    Example:
        >>> renderer = MermaidRenderer()
        >>> result = renderer.replace_mermaid_blocks(markdown)
        >>> [a.file_name for a in result.attachments]
        ['mermaid-diagram-1.png']
    """

    def __init__(
        self,
        mermaid_cli: Optional[str] = None,
        work_dir: Optional[Path] = None,
        timeout: Optional[int] = DEFAULT_RENDER_TIMEOUT,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize the renderer.

        Args:
            mermaid_cli: Path or name of the Mermaid CLI executable (default ``mmdc``)
            work_dir: Directory for temporary files
            timeout: Seconds to wait for one render (None waits forever)
            log: Logger receiving render warnings
        """
        self.mermaid_cli = mermaid_cli if mermaid_cli and mermaid_cli.strip() else DEFAULT_MERMAID_CLI
        self.work_dir = Path(work_dir) if work_dir else Path(tempfile.gettempdir()) / "confluence-publisher"
        self.timeout = timeout
        self._log = log or logger

    def replace_mermaid_blocks(self, markdown: str) -> MermaidRenderResult:
        """Render every Mermaid block in ``markdown``.

        Diagram numbering counts successful renders only, so a failed block
        does not leave a gap in the attachment names.

        Args:
            markdown: Source document text

        Returns:
            MermaidRenderResult with the rewritten text and generated attachments
        """
        attachments: List[Attachment] = []
        matches = list(MERMAID_BLOCK_PATTERN.finditer(markdown))
        if not matches:
            return MermaidRenderResult(markdown=markdown, attachments=attachments)

        parts: List[str] = []
        last_index = 0
        index = 1

        for match in matches:
            parts.append(markdown[last_index:match.start()])
            last_index = match.end()

            code = match.group("code").strip()
            if not code:
                parts.append(match.group(0))
                continue

            output_name = diagram_file_name(index)
            self.work_dir.mkdir(parents=True, exist_ok=True)
            input_path = self.work_dir / f"mermaid-{uuid.uuid4()}.mmd"
            output_path = self.work_dir / output_name
            input_path.write_text(code, encoding="utf-8")

            if self.render(input_path, output_path):
                attachments.append(Attachment(output_path, output_name, is_generated=True))
                parts.append(f"![Mermaid diagram {index}]({ATTACHMENT_SCHEME}{output_name})")
                index += 1
            else:
                self._log.warning("Mermaid conversion failed; leaving code block untouched.")
                parts.append(match.group(0))

        parts.append(markdown[last_index:])
        return MermaidRenderResult(markdown="".join(parts), attachments=attachments)

    def render(self, input_path: Path, output_path: Path) -> bool:
        """Run the Mermaid CLI on one diagram file.

        A stale output file from an earlier run is removed first so that the
        existence check after rendering only sees this run's output.

        Returns:
            True if the CLI exited with status 0 and produced ``output_path``
        """
        if output_path.exists():
            output_path.unlink()

        try:
            result = subprocess.run(
                [self.mermaid_cli, "-i", str(input_path), "-o", str(output_path)],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            self._log.warning(f"mermaid-cli timed out after {self.timeout}s")
            return False
        except OSError as e:
            self._log.warning(f"mermaid-cli error: {e}")
            return False

        if result.returncode != 0:
            self._log.warning(
                f"mermaid-cli failed with exit code {result.returncode}: {(result.stderr or '').strip()}"
            )
            return False

        if not output_path.exists():
            self._log.warning("mermaid-cli reported success but output file is missing.")
            return False

        if result.stdout and result.stdout.strip():
            self._log.info(result.stdout.strip())

        return True
