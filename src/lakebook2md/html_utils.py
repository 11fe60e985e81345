"""Shared HTML utilities for hosted knowledge-base pages."""

from __future__ import annotations

import json
import re
from typing import Any
from urllib.parse import unquote

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

_APP_DATA_ENCODED_RE = re.compile(r'appData\s*=\s*JSON\.parse\(decodeURIComponent\("([^"]*)"\)\)')
_APP_DATA_LITERAL_RE = re.compile(r"appData\s*=\s*(?=\{)")
_CONTENT_SELECTORS = (".ne-viewer-body", ".lake-content", ".yuque-doc-content")


def extract_page_state(html: str) -> dict[str, Any] | None:
    """Return the JSON state a hosted page embeds in its ``<script>`` tags.

    Two shapes are recognized:
    1. ``window.appData = JSON.parse(decodeURIComponent("..."))``
    2. ``window.appData = {...};``
    """
    soup = BeautifulSoup(html, "lxml")
    for script in soup.find_all("script"):
        text = script.string or script.get_text()
        if not text or "appData" not in text:
            continue
        state = _decode_state(text)
        if state is not None:
            return state
    return None


def _decode_state(script: str) -> dict[str, Any] | None:
    encoded = _APP_DATA_ENCODED_RE.search(script)
    try:
        if encoded:
            state = json.loads(unquote(encoded.group(1)))
        else:
            literal = _APP_DATA_LITERAL_RE.search(script)
            if not literal:
                return None
            state, _ = json.JSONDecoder().raw_decode(script, literal.end())
    except json.JSONDecodeError:
        return None
    return state if isinstance(state, dict) else None


def find_document_root(soup: BeautifulSoup) -> Tag:
    """Find the element holding the rendered document body.

    Searches for the document root in the following order:
    1. A known rendered-content container (``.ne-viewer-body`` and friends)
    2. Any <article> element
    3. <body> element
    4. The soup itself as fallback
    """
    for selector in _CONTENT_SELECTORS:
        root = soup.select_one(selector)
        if root:
            return root
    article = soup.find("article")
    if article:
        return article
    if soup.body:
        return soup.body
    return soup


def extract_page_content(html: str) -> tuple[str | None, str]:
    """Return ``(title, inner HTML)`` of a page without embedded state."""
    soup = BeautifulSoup(html, "lxml")
    for tag in soup.find_all(["script", "style", "noscript"]):
        tag.decompose()
    title = soup.title.get_text(" ", strip=True) if soup.title else None
    root = find_document_root(soup)
    return title or None, root.decode_contents()
