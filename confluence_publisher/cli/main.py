"""Main CLI entry point for confluence-publish command.

This module provides the Typer application that serves as the entry point
for the confluence-publish command-line tool. A single command publishes one
Markdown document to one Confluence page.
"""

import logging
import sys
from datetime import datetime, UTC
from pathlib import Path
from typing import Optional

import typer

from confluence_publisher import __version__
from confluence_publisher.cli.models import ExitCode, PublishOptions
from confluence_publisher.cli.output import OutputHandler
from confluence_publisher.cli.publish_command import PublishCommand

app = typer.Typer(
    name="confluence-publish",
    help="""Publish a Markdown document to a Confluence page.

EXAMPLE:
  confluence-publish --markdown docs/design.md --space TEAM --title "Design" \\
      --base-url https://company.atlassian.net/wiki --username me@company.com --api-token <token>""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

APP_LOGGER_NAME = "confluence_publisher"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class UTCFormatter(logging.Formatter):
    """Formatter stamping records with an ISO-8601 UTC timestamp."""

    def formatTime(self, record, datefmt=None):
        return datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds")


def default_log_file() -> Path:
    """Return ``logs/publish-<UTC timestamp>.log`` under the working directory."""
    timestamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    return Path.cwd() / "logs" / f"publish-{timestamp}.log"


def _configure_logging(verbosity: int, log_file: Optional[Path] = None) -> None:
    """Configure console and file logging.

    Configures only the application's logger to avoid affecting third-party
    libraries. Both handlers share one format.

    Args:
        verbosity: Verbosity level (0=INFO, 1+=DEBUG)
        log_file: Log file path; parent directories are created
    """
    level = logging.DEBUG if verbosity >= 1 else logging.INFO

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(level)
    app_logger.propagate = False
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    formatter = UTCFormatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        app_logger.addHandler(file_handler)
        logger.debug(f"Logging to file: {log_path}")

    # atlassian-python-api logs missing pages at ERROR level.
    logging.getLogger("atlassian").setLevel(logging.WARNING)


@app.command()
def main_command(
    markdown: Optional[str] = typer.Option(
        None,
        "--markdown",
        help="Markdown file to publish (required)",
        metavar="PATH",
    ),
    space: Optional[str] = typer.Option(
        None,
        "--space",
        help="Confluence space key (required)",
        metavar="KEY",
    ),
    title: Optional[str] = typer.Option(
        None,
        "--title",
        help="Page title (required)",
    ),
    parent_id: Optional[str] = typer.Option(
        None,
        "--parent-id",
        help="Parent page ID for a newly created page",
        metavar="ID",
    ),
    page_id: Optional[str] = typer.Option(
        None,
        "--page-id",
        help="Publish to this page ID instead of looking the page up by title",
        metavar="ID",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Confluence base URL (e.g. https://company.atlassian.net/wiki)",
        metavar="URL",
    ),
    username: Optional[str] = typer.Option(
        None,
        "--username",
        help="Confluence user name or e-mail",
    ),
    api_token: Optional[str] = typer.Option(
        None,
        "--api-token",
        help="Confluence API token",
    ),
    credentials_file: str = typer.Option(
        "credentials.json",
        "--credentials-file",
        help="JSON credentials file (baseUrl, username, apiToken)",
        metavar="PATH",
    ),
    log_file: Optional[str] = typer.Option(
        None,
        "--log-file",
        help="Log file (default: logs/publish-<timestamp>.log)",
        metavar="PATH",
    ),
    mermaid_cli: str = typer.Option(
        "mmdc",
        "--mermaid-cli",
        help="Mermaid CLI executable used to render diagrams",
        metavar="PATH",
    ),
    mermaid_timeout: int = typer.Option(
        120,
        "--mermaid-timeout",
        help="Seconds allowed for rendering one diagram",
    ),
    save_credentials: bool = typer.Option(
        False,
        "--save-credentials",
        help="Write the effective credentials back to the credentials file",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=info, 1=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Publish a Markdown document to a Confluence page.

    \b
    Mermaid code blocks are rendered to PNG with the Mermaid CLI and local
    images are uploaded as page attachments. Credentials come from the
    credentials file, overridden by --base-url/--username/--api-token, with
    CONFLUENCE_URL/CONFLUENCE_USER/CONFLUENCE_API_TOKEN as a fallback.
    """
    if version:
        typer.echo(f"confluence-publish version {__version__}")
        raise typer.Exit()

    _configure_logging(verbosity, Path(log_file) if log_file else default_log_file())

    output = OutputHandler(verbosity=verbosity, no_color=no_color)
    options = PublishOptions(
        markdown_path=markdown,
        space_key=space,
        title=title,
        parent_id=parent_id,
        page_id=page_id,
        base_url=base_url,
        username=username,
        api_token=api_token,
        credentials_file=credentials_file,
        mermaid_cli=mermaid_cli,
        mermaid_timeout=mermaid_timeout if mermaid_timeout > 0 else None,
        save_credentials=save_credentials,
    )

    exit_code = PublishCommand(output_handler=output).run(options)
    raise typer.Exit(int(exit_code))


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m confluence_publisher.cli.main
if __name__ == "__main__":
    main()
