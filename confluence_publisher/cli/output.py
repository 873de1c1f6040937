"""Terminal output handling using Rich library.

This module provides the OutputHandler class for user-facing CLI output:
status lines and the end-of-run publish summary. The run log itself goes
through the logging module; this is what the user reads when it finishes.
"""

from rich.console import Console

from confluence_publisher.cli.models import PublishSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.error("Page not found")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def print_publish_summary(self, summary: PublishSummary) -> None:
        """Display the publish summary with color coding.

        Args:
            summary: Result of the publish run
        """
        self.console.print("\n[bold]Publish Summary:[/bold]")

        action = "Created and published" if summary.created else "Updated"
        version = summary.version if summary.version is not None else "unknown"
        self.console.print(f"  [green]↑[/green] {action} page {summary.page_id} (version {version})")

        if summary.rendered_diagrams > 0:
            self.console.print(f"  [blue]◆[/blue] Diagrams rendered: {summary.rendered_diagrams}")

        if summary.uploaded:
            self.console.print(f"  [green]✓[/green] Attachments uploaded: {len(summary.uploaded)}")

        if summary.failed_uploads:
            self.console.print(f"  [red]✗[/red] Attachment uploads failed: {len(summary.failed_uploads)}")
            for name in summary.failed_uploads:
                self.console.print(f"      • {name}")

        if summary.skipped_images:
            self.console.print(f"  [yellow]⊘[/yellow] Images not found: {len(summary.skipped_images)}")
            for path in summary.skipped_images:
                self.console.print(f"      • {path}")

        if summary.failed_uploads or summary.skipped_images:
            self.console.print("\n[yellow]Publish completed with warnings[/yellow]")
        else:
            self.console.print("\n[green]Publish completed successfully[/green]")
