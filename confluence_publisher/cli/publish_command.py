"""Publish command orchestration for CLI.

This module provides the PublishCommand class that runs one publish from
start to finish: validate options and credentials, render diagrams, resolve
images, convert Markdown to storage format, then find or create the page,
upload attachments and update the page body. Each step runs once, in order,
on the calling thread.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from confluence_publisher.cli.errors import CLIError, PreflightError
from confluence_publisher.cli.models import ExitCode, PublishOptions, PublishSummary
from confluence_publisher.cli.output import OutputHandler
from confluence_publisher.confluence_client.api_wrapper import APIWrapper
from confluence_publisher.confluence_client.auth import Authenticator, Credentials
from confluence_publisher.confluence_client.errors import (
    APIUnreachableError,
    ConfluenceError,
    InvalidCredentialsError,
)
from confluence_publisher.content_converter.image_resolver import ImageResolver
from confluence_publisher.content_converter.markdown_converter import MarkdownConverter
from confluence_publisher.content_converter.mermaid_renderer import MermaidRenderer
from confluence_publisher.content_converter.storage_rewriter import convert_images_to_storage
from confluence_publisher.models.attachment import AttachmentRegistry

logger = logging.getLogger(__name__)

PLACEHOLDER_BODY = "<p>Publishing content...</p>"
PREVIEW_LENGTH = 1500


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class PublishCommand:
    """Orchestrates a complete publish run.

    Collaborators are optional so tests can substitute them; anything not
    provided is created from the run's options.

    Example:
        >>> cmd = PublishCommand(output_handler=OutputHandler(verbosity=1))
        >>> exit_code = cmd.run(PublishOptions(markdown_path="doc.md", space_key="TEAM", title="Doc"))
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        api: Optional[APIWrapper] = None,
        renderer: Optional[MermaidRenderer] = None,
        converter: Optional[MarkdownConverter] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize publish command with dependencies.

        Args:
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator resolving credentials (optional)
            api: APIWrapper for Confluence calls (optional)
            renderer: MermaidRenderer for diagram blocks (optional)
            converter: MarkdownConverter for Markdown to HTML (optional)
            log: Logger for the run log (optional)
        """
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.api = api
        self.renderer = renderer
        self.converter = converter
        self._log = log or logger

    def run(self, options: PublishOptions) -> ExitCode:
        """Execute a publish run.

        Args:
            options: Parsed command-line options

        Returns:
            ExitCode indicating success or the kind of failure
        """
        try:
            self._log.info("Starting Confluence publish run.")
            self._log.info(f"Markdown: {options.markdown_path or ''}")
            self._log.info(f"Space: {options.space_key or ''}")
            self._log.info(f"Title: {options.title or ''}")

            markdown_path, credentials = self._preflight(options)
            self._log.info(f"Base URL: {credentials.url}")

            summary = self._publish(options, markdown_path, credentials)
            self.output_handler.print_publish_summary(summary)
            return ExitCode.SUCCESS

        except PreflightError as e:
            self._log.error(str(e))
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except InvalidCredentialsError as e:
            self._log.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            return ExitCode.AUTH_ERROR

        except APIUnreachableError as e:
            self._log.error(f"API error: {e}")
            self.output_handler.error(f"API error: {e}")
            self.output_handler.info("Check your network connection and the base URL")
            return ExitCode.NETWORK_ERROR

        except ConfluenceError as e:
            self._log.error(f"Publish failed: {e}")
            self.output_handler.error(f"Publish failed: {e}")
            return ExitCode.GENERAL_ERROR

        except (CLIError, ValueError) as e:
            self._log.error(f"Error: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            self._log.exception("Unexpected error during publish")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def _preflight(self, options: PublishOptions) -> Tuple[Path, Credentials]:
        """Validate options and resolve credentials.

        Credentials are saved (when requested) before the space and title
        are checked, so a run can be used just to store credentials.

        Raises:
            PreflightError: On the first failed check
        """
        if _is_blank(options.markdown_path):
            raise PreflightError("Missing --markdown argument.", option="--markdown")

        markdown_path = Path(options.markdown_path)
        if not markdown_path.is_file():
            raise PreflightError(f"Markdown file not found: {markdown_path}", option="--markdown")

        if self.authenticator is None:
            self.authenticator = Authenticator(options.credentials_file)
        credentials = self.authenticator.get_credentials(
            base_url=options.base_url,
            username=options.username,
            api_token=options.api_token,
        )
        if not credentials.is_valid():
            raise PreflightError(
                "Missing credentials. Provide baseUrl/username/apiToken via credentials "
                "file or command line."
            )

        if options.save_credentials:
            self.authenticator.save(credentials)

        if _is_blank(options.space_key) or _is_blank(options.title):
            raise PreflightError("Missing required parameters: --space and --title are required.")

        return markdown_path, credentials

    def _publish(
        self,
        options: PublishOptions,
        markdown_path: Path,
        credentials: Credentials,
    ) -> PublishSummary:
        markdown_text = markdown_path.read_text(encoding="utf-8")
        markdown_dir = markdown_path.resolve().parent

        renderer = self.renderer or MermaidRenderer(
            options.mermaid_cli,
            timeout=options.mermaid_timeout,
            log=self._log,
        )
        mermaid_result = renderer.replace_mermaid_blocks(markdown_text)

        preview = mermaid_result.markdown[:PREVIEW_LENGTH]
        if len(mermaid_result.markdown) > PREVIEW_LENGTH:
            preview += "..."
        self._log.debug(f"Markdown after Mermaid replacement:\n{preview}")

        self._log.info(f"Generated Mermaid attachments: {len(mermaid_result.attachments)}")
        for attachment in mermaid_result.attachments:
            self._log.info(f"  - {attachment.file_name} <- {attachment.source_path}")

        registry = AttachmentRegistry()
        for attachment in mermaid_result.attachments:
            registry.register(attachment)

        resolution = ImageResolver(markdown_dir, registry, log=self._log).resolve(mermaid_result.markdown)

        converter = self.converter or MarkdownConverter()
        html = converter.markdown_to_html(mermaid_result.markdown)
        storage = convert_images_to_storage(html, resolution.mappings)

        api = self.api or APIWrapper(credentials, log=self._log)
        summary = PublishSummary(
            rendered_diagrams=len(mermaid_result.attachments),
            skipped_images=list(resolution.skipped),
        )

        space_key = options.space_key.strip()
        title = options.title.strip()
        page_id = options.page_id.strip() if not _is_blank(options.page_id) else None

        if page_id is None:
            existing = api.find_page_by_title(space_key, title)
            page_id = existing.page_id if existing and existing.page_id else None

        if page_id is None:
            self._log.info("Page not found, creating new page.")
            created = api.create_page(space_key, title, options.parent_id, PLACEHOLDER_BODY)
            page_id = created.page_id
            summary.created = True
        else:
            self._log.info(f"Using existing page ID: {page_id}")

        for attachment in registry:
            if api.upload_attachment(page_id, attachment):
                summary.uploaded.append(attachment.file_name)
            else:
                summary.failed_uploads.append(attachment.file_name)

        updated = api.update_page(page_id, space_key, title, options.parent_id, storage)
        summary.page_id = updated.page_id or page_id
        summary.version = updated.version

        self._log.info(f"Published page ID {summary.page_id} at version {summary.version}.")
        self._log.info("Publish run completed.")
        return summary
