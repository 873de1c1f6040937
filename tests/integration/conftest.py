"""Pytest configuration and fixtures for integration tests.

The publish pipeline runs end to end with real file handling and a real
subprocess for diagram rendering. Only the two external systems are
replaced: ``mmdc`` by a small script that writes a PNG, and the Confluence
REST API by an in-memory fake behind the patched client.
"""

import stat
import sys
from pathlib import Path
from typing import Dict, Optional
from unittest.mock import Mock, patch

import pytest

from tests.fixtures.fakes import FakeConfluence
from tests.fixtures.sample_markdown import PNG_BYTES

FAKE_MMDC_SOURCE = '''#!{python}
import sys

args = sys.argv[1:]
source = open(args[args.index("-i") + 1], encoding="utf-8").read()
if "FAIL" in source:
    sys.stderr.write("Parse error on line 2\\n")
    sys.exit(1)
with open(args[args.index("-o") + 1], "wb") as out:
    out.write({png!r})
'''


@pytest.fixture
def fake_mmdc(tmp_path) -> Path:
    """Executable standing in for mmdc; fails on diagrams containing FAIL."""
    script = tmp_path / "bin" / "fake-mmdc"
    script.parent.mkdir()
    script.write_text(FAKE_MMDC_SOURCE.format(python=sys.executable, png=PNG_BYTES), encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def confluence_factory():
    """Patch the Confluence client class and return a builder for fakes."""
    with patch('confluence_publisher.confluence_client.api_wrapper.Confluence') as mock_cls:
        def build(existing: Optional[Dict] = None) -> FakeConfluence:
            fake = FakeConfluence(existing)
            mock_cls.return_value = fake
            return fake
        build.mock_cls = mock_cls
        yield build


@pytest.fixture
def doc_dir(tmp_path) -> Path:
    """Document directory with images/ and other/ each holding diagram.png."""
    root = tmp_path / "docs"
    for sub in ("images", "other"):
        (root / sub).mkdir(parents=True)
        (root / sub / "diagram.png").write_bytes(PNG_BYTES)
    (root / "images" / "screenshot.png").write_bytes(PNG_BYTES)
    (root / "images" / "screen shot.png").write_bytes(PNG_BYTES)
    return root


@pytest.fixture
def credentials_file(tmp_path) -> Path:
    path = tmp_path / "credentials.json"
    path.write_text(
        '{"baseUrl": "https://test.atlassian.net/wiki", '
        '"username": "me@example.com", "apiToken": "secret-token"}',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def run_log() -> Mock:
    return Mock()
