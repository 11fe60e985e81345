"""Download images referenced by a document and point the HTML at local copies."""

from __future__ import annotations

import html as html_lib
import logging
import re
from typing import Final

import httpx

from lakebook2md.exceptions import FetchError
from lakebook2md.http_utils import fetch_response

logger = logging.getLogger(__name__)

ATTACHMENTS_DIR: Final[str] = "attachments"

CONTENT_TYPE_EXTENSIONS: Final[dict[str, str]] = {
    "image/gif": ".gif",
    "image/jpeg": ".jpg",
    "image/svg+xml": ".svg",
    "image/png": ".png",
}
DEFAULT_EXTENSION: Final[str] = ".png"

_IMG_TAG_RE = re.compile(r'<img[^>]+src="([^"]+)"[^>]*>', re.IGNORECASE)


def extension_for(content_type: str | None) -> str:
    """Map a response content type to a file extension, ``.png`` if unknown."""
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    return CONTENT_TYPE_EXTENSIONS.get(mime, DEFAULT_EXTENSION)


async def rehome_images(
    html: str,
    base_name: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> tuple[str, dict[str, bytes]]:
    """Fetch every ``<img src="...">`` in ``html`` one at a time, in order.

    Args:
        html: Document HTML.
        base_name: Sanitized document name used to prefix attachment files.
        client: Optional shared httpx.AsyncClient.

    Returns:
        Tuple of (rewritten HTML, attachments) where attachments maps
        ``attachments/{base_name}_{NNN}{ext}`` to the downloaded bytes.
        Images that fail to download keep their original ``src``.
    """
    attachments: dict[str, bytes] = {}
    rewritten = html
    sequence = 1

    for match in _IMG_TAG_RE.finditer(html):
        original_tag, src = match.group(0), match.group(1)
        try:
            response = await fetch_response(html_lib.unescape(src), client=client)
        except (FetchError, httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Failed to download image %s: %s", src, exc)
            continue

        file_name = f"{base_name}_{sequence:03d}{extension_for(response.headers.get('Content-Type'))}"
        attachments[f"{ATTACHMENTS_DIR}/{file_name}"] = response.content
        src_start, src_end = match.start(1) - match.start(0), match.end(1) - match.start(0)
        new_tag = f"{original_tag[:src_start]}./{ATTACHMENTS_DIR}/{file_name}{original_tag[src_end:]}"
        rewritten = rewritten.replace(original_tag, new_tag, 1)
        sequence += 1

    return rewritten, attachments
