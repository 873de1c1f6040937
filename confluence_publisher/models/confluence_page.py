"""Confluence page data model."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ConfluencePage:
    """Identity and version of a Confluence page.

    Attributes:
        page_id: Unique identifier for the page
        title: Page title
        space_key: Space key where the page resides (e.g., "TEAM")
        parent_id: Parent page ID (None if unknown or at space root)
        version: Current version number; None when the response carried no
            version object, 0 when the object had no usable number
    """
    page_id: str
    title: str = ""
    space_key: str = ""
    parent_id: Optional[str] = None
    version: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ConfluencePage":
        """Build a page from a REST API content object."""
        version: Optional[int] = None
        version_data = data.get("version")
        if isinstance(version_data, dict):
            try:
                version = int(version_data.get("number") or 0)
            except (TypeError, ValueError):
                version = 0

        space_data = data.get("space")
        space_key = space_data.get("key", "") if isinstance(space_data, dict) else ""

        parent_id = None
        ancestors = data.get("ancestors")
        if isinstance(ancestors, list) and ancestors:
            last = ancestors[-1]
            if isinstance(last, dict) and last.get("id") is not None:
                parent_id = str(last["id"])

        return cls(
            page_id=str(data.get("id") or ""),
            title=data.get("title") or "",
            space_key=space_key,
            parent_id=parent_id,
            version=version,
        )
