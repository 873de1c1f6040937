"""Rewriting of HTML image tags into Confluence storage-format images.

Confluence references page attachments with
``<ac:image><ri:attachment ri:filename="..."/></ac:image>`` rather than
``<img src="...">``. This module walks the converted HTML and swaps every
``<img>`` whose ``src`` is a known attachment reference for that element.
Images without a mapping (remote URLs, missing files) keep their ``<img>``
tag and render from their original source.
"""

import logging
from typing import Dict

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


def build_attachment_image(soup: BeautifulSoup, file_name: str):
    """Create an ``ac:image`` element referencing attachment ``file_name``."""
    image = soup.new_tag("ac:image")
    attachment = soup.new_tag("ri:attachment", attrs={"ri:filename": file_name})
    image.append(attachment)
    return image


def convert_images_to_storage(html: str, image_mappings: Dict[str, str]) -> str:
    """Replace mapped ``<img>`` tags with Confluence attachment images.

    Args:
        html: HTML fragment produced by the Markdown converter
        image_mappings: ``src`` value -> attachment file name

    Returns:
        The fragment with mapped images replaced. When nothing matches the
        input is returned as-is.
    """
    if not image_mappings or not html:
        return html

    # html.parser rather than lxml: no document wrapper, no external entities.
    soup = BeautifulSoup(html, "html.parser")
    replaced = 0

    for img in soup.find_all("img"):
        src = img.get("src")
        if src is None or src not in image_mappings:
            continue
        img.replace_with(build_attachment_image(soup, image_mappings[src]))
        replaced += 1

    if not replaced:
        return html

    logger.debug(f"Rewrote {replaced} image tag(s) to attachment references")
    return str(soup)
