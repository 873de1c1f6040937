"""Unit tests for ImageResolver."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from confluence_publisher.content_converter.image_resolver import (
    ImageResolver,
    encoded_forms,
    is_remote_url,
)
from confluence_publisher.models.attachment import Attachment, AttachmentRegistry
from tests.fixtures.sample_markdown import PNG_BYTES, SAMPLE_MARKDOWN_WITH_IMAGES


@pytest.fixture
def doc_dir(tmp_path):
    """Document directory with images/diagram.png and other/diagram.png."""
    for sub in ("images", "other"):
        (tmp_path / sub).mkdir()
        (tmp_path / sub / "diagram.png").write_bytes(PNG_BYTES)
    return tmp_path


class TestResolve:
    """Test cases for ImageResolver.resolve."""

    def test_sample_document(self, doc_dir):
        log = Mock()
        result = ImageResolver(doc_dir, log=log).resolve(SAMPLE_MARKDOWN_WITH_IMAGES)

        assert result.mappings["images/diagram.png"] == "diagram.png"
        assert result.mappings["other/diagram.png"] == "diagram-1.png"
        assert "https://example.com/logo.png" not in result.mappings
        assert [a.file_name for a in result.attachments] == ["diagram.png", "diagram-1.png"]
        assert result.skipped == [str(doc_dir / "images" / "missing.png")]
        log.warning.assert_called_once_with(
            f"Image not found, skipping: {doc_dir / 'images' / 'missing.png'}"
        )

    def test_attachments_point_at_resolved_files(self, doc_dir):
        result = ImageResolver(doc_dir).resolve("![d](./images/../images/diagram.png)")

        attachment = result.attachments[0]
        assert attachment.source_path == doc_dir / "images" / "diagram.png"
        assert attachment.is_generated is False

    def test_repeated_reference_uploads_once(self, doc_dir):
        markdown = "![a](images/diagram.png)\n\n![b](images/diagram.png)\n"

        result = ImageResolver(doc_dir).resolve(markdown)

        assert len(result.attachments) == 1
        assert result.mappings["images/diagram.png"] == "diagram.png"

    def test_attachment_scheme_maps_to_name(self, doc_dir):
        registry = AttachmentRegistry()
        registry.register(
            Attachment(doc_dir / "mermaid-diagram-1.png", "mermaid-diagram-1.png", is_generated=True)
        )

        result = ImageResolver(doc_dir, registry).resolve(
            "![Mermaid diagram 1](attachment:mermaid-diagram-1.png)"
        )

        assert result.mappings == {"attachment:mermaid-diagram-1.png": "mermaid-diagram-1.png"}
        assert result.attachments == []
        assert len(registry) == 1

    def test_names_do_not_collide_with_registered_diagrams(self, doc_dir):
        (doc_dir / "mermaid-diagram-1.png").write_bytes(PNG_BYTES)
        registry = AttachmentRegistry()
        registry.register(Attachment(Path("/tmp/x.png"), "mermaid-diagram-1.png", is_generated=True))

        result = ImageResolver(doc_dir, registry).resolve("![own](mermaid-diagram-1.png)")

        assert result.mappings["mermaid-diagram-1.png"] == "mermaid-diagram-1-1.png"

    def test_path_with_space_maps_encoded_forms(self, doc_dir):
        (doc_dir / "images" / "screen shot.png").write_bytes(PNG_BYTES)

        result = ImageResolver(doc_dir).resolve("![s](images/screen shot.png)")

        assert result.mappings["images/screen shot.png"] == "screen shot.png"
        assert result.mappings["images/screen%20shot.png"] == "screen shot.png"
        assert result.mappings["images%2Fscreen%20shot.png"] == "screen shot.png"

    def test_absolute_path_is_used_as_is(self, doc_dir, tmp_path_factory):
        elsewhere = tmp_path_factory.mktemp("elsewhere") / "abs.png"
        elsewhere.write_bytes(PNG_BYTES)

        result = ImageResolver(doc_dir).resolve(f"![abs]({elsewhere})")

        assert result.attachments[0].source_path == elsewhere

    def test_no_images(self, doc_dir):
        result = ImageResolver(doc_dir).resolve("# Nothing here\n")

        assert result.mappings == {}
        assert result.attachments == []
        assert result.skipped == []


class TestHelpers:

    @pytest.mark.parametrize("url,expected", [
        ("https://example.com/a.png", True),
        ("HTTP://example.com/a.png", True),
        ("images/a.png", False),
        ("attachment:a.png", False),
    ])
    def test_is_remote_url(self, url, expected):
        assert is_remote_url(url) is expected

    def test_encoded_forms_skips_identical(self):
        assert encoded_forms("a.png") == []
        assert encoded_forms("dir/a.png") == ["dir%2Fa.png"]
