"""Canned Confluence REST responses for unit and integration tests."""

import json
from typing import Any, Optional
from unittest.mock import Mock


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    text: Optional[str] = None,
    reason: Optional[str] = None,
) -> Mock:
    """Build a mock ``requests.Response``.

    When ``json_data`` is None, ``json()`` raises ValueError as requests does
    for a non-JSON body.
    """
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = reason or ("OK" if response.ok else "Error")
    if json_data is not None:
        response.json.return_value = json_data
        response.text = text if text is not None else json.dumps(json_data)
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    return response


def page_json(
    page_id: str = "12345",
    title: str = "Test Page",
    version: Optional[int] = 1,
    space_key: str = "TEAM",
) -> dict:
    """Content object as returned by ``rest/api/content``."""
    data = {
        "id": page_id,
        "type": "page",
        "title": title,
        "space": {"key": space_key},
    }
    if version is not None:
        data["version"] = {"number": version}
    return data


def search_json(*pages: dict) -> dict:
    """Search result envelope as returned by ``rest/api/content?title=...``."""
    return {"results": list(pages), "start": 0, "limit": 25, "size": len(pages)}
