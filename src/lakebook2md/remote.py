"""Convert publicly reachable document and knowledge-base pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

import httpx

from lakebook2md.archive import parse_toc
from lakebook2md.exceptions import InputError, PageNotFoundError, ParseError, TocError
from lakebook2md.html_utils import extract_page_content, extract_page_state
from lakebook2md.http_utils import create_client, fetch_with_retries
from lakebook2md.ingestion import ConversionOptions, convert_entries
from lakebook2md.naming import sanitize_file_name
from lakebook2md.schemas import ConversionResult, TocEntry, TocEntryType

logger = logging.getLogger(__name__)

_404_MESSAGE = "The page does not exist or is not publicly accessible."
DEFAULT_DOCUMENT_TITLE = "document"


@dataclass
class RemoteConversion:
    """Result of converting a hosted page."""

    title: str | None
    result: ConversionResult
    is_book: bool = False

    @property
    def markdown(self) -> str:
        """Markdown of a single-document page."""
        for output in self.result.files:
            if output.path.endswith(".md"):
                return output.content.decode("utf-8")
        return ""


def validate_page_url(url: str | None) -> str:
    """Return a stripped http(s) URL or raise :class:`InputError`."""
    if not url or not url.strip():
        raise InputError("No URL provided")
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise InputError(f"Unsupported URL: {url}")
    return url


async def convert_remote_page(url: str, options: ConversionOptions | None = None) -> RemoteConversion:
    """Fetch a document or knowledge-base page and convert it to Markdown.

    A document page yields one Markdown file named after the document title.
    A knowledge-base page yields the whole tree: its TOC goes through the same
    path assignment as an archive and every document page is fetched in turn.

    Raises:
        InputError: If the URL is missing or not http(s).
        PageNotFoundError: If the page returns 404.
        FetchError: If the page cannot be fetched.
        ParseError: If a knowledge-base page carries an empty TOC.
    """
    page_url = validate_page_url(url)

    async with create_client() as client:
        html = await _fetch_page(page_url, client)
        state = extract_page_state(html) or {}

        book = state.get("book") if isinstance(state.get("book"), dict) else None
        if book and book.get("toc") and not isinstance(state.get("doc"), dict):
            return await _convert_book(page_url, book, options, client)

        title, body = _document_from_state(state, html)
        entry = TocEntry(type=TocEntryType.DOC.value, title=title or DEFAULT_DOCUMENT_TITLE, level=0)

        async def load_html(_: TocEntry) -> str:
            return body

        result = await convert_entries([entry], load_html, options, client=client)
        return RemoteConversion(title=title, result=result)


async def _convert_book(
    page_url: str,
    book: dict[str, Any],
    options: ConversionOptions | None,
    client: httpx.AsyncClient,
) -> RemoteConversion:
    try:
        toc = parse_toc(book.get("toc"))
    except TocError as exc:
        raise ParseError(f"Knowledge base at {page_url} has no usable table of contents") from exc
    logger.info("Total %d entries in %s", len(toc), page_url)
    base_url = page_url.rstrip("/")

    async def load_html(entry: TocEntry) -> str | None:
        if not entry.url:
            return None
        doc_url = f"{base_url}/{entry.url}"
        try:
            html = await _fetch_page(doc_url, client)
        except PageNotFoundError:
            return None
        try:
            _, body = _document_from_state(extract_page_state(html) or {}, html)
        except ParseError:
            return None
        return body

    result = await convert_entries(toc, load_html, options, client=client)
    title = book.get("name") or book.get("title")
    return RemoteConversion(title=str(title) if title else None, result=result, is_book=True)


def _document_from_state(state: dict[str, Any], html: str) -> tuple[str | None, str]:
    doc = state.get("doc")
    if isinstance(doc, dict):
        body = doc.get("body") or doc.get("body_asl") or doc.get("content") or ""
        title = doc.get("title")
        return (str(title) if title else None), str(body)
    title, body = extract_page_content(html)
    if not body.strip():
        raise ParseError("Page carries no document content")
    return title, body


async def _fetch_page(url: str, client: httpx.AsyncClient) -> str:
    result = await fetch_with_retries(
        url,
        client=client,
        on_404=PageNotFoundError,
        on_404_message=f"{_404_MESSAGE} ({url})",
    )
    if isinstance(result, bytes):
        return result.decode("utf-8")
    return result


def remote_file_stem(conversion: RemoteConversion) -> str:
    """Sanitized base name for saving a single remote document."""
    return sanitize_file_name(conversion.title or DEFAULT_DOCUMENT_TITLE)
