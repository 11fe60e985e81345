"""Ingestion pipeline for ``.lakebook`` exports -> Markdown tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable

import httpx

from lakebook2md.archive import load_document_html, read_lakebook
from lakebook2md.config import LAKEBOOK2MD_DOWNLOAD_IMAGES
from lakebook2md.exceptions import InputError
from lakebook2md.hierarchy import assign_paths
from lakebook2md.http_utils import create_client
from lakebook2md.images import rehome_images
from lakebook2md.markdown import convert_html_to_markdown
from lakebook2md.normalizer import normalize_markdown
from lakebook2md.schemas import ConversionResult, OutputFile, TocEntry

logger = logging.getLogger(__name__)

# Returns the HTML of a document entry, or None when its content is missing.
HtmlLoader = Callable[[TocEntry], Awaitable["str | None"]]


@dataclass
class ConversionOptions:
    """Options for a conversion run.

    Attributes:
        download_images: If True, download referenced images into an
            ``attachments/`` folder next to each document and rewrite the
            image links to point at them.
    """

    download_images: bool = field(default_factory=lambda: LAKEBOOK2MD_DOWNLOAD_IMAGES)


def html_to_markdown(html: str) -> str:
    """Convert an HTML document body into final, normalized Markdown."""
    return normalize_markdown(convert_html_to_markdown(html))


async def convert_lakebook(data: bytes, options: ConversionOptions | None = None) -> ConversionResult:
    """Convert the bytes of a ``.lakebook`` export into Markdown output files.

    Raises:
        InputError: If ``data`` is empty.
        ArchiveError, MetaNotFoundError: If the container is unusable.
        TocError: If the table of contents is missing or empty.
    """
    if not data:
        raise InputError("No file uploaded")

    archive = read_lakebook(data)
    logger.info("Total %d entries in %s", len(archive.toc), archive.repo_dir)

    async def load_html(entry: TocEntry) -> str | None:
        return load_document_html(archive.files, archive.repo_dir, entry.url)

    return await convert_entries(archive.toc, load_html, options)


async def convert_entries(
    entries: Iterable[TocEntry],
    load_html: HtmlLoader,
    options: ConversionOptions | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> ConversionResult:
    """Render every document entry of a TOC into the output tree.

    Documents are processed one at a time in TOC order. Images, when
    requested, are fetched sequentially over a single shared client.
    """
    opts = options or ConversionOptions()
    if opts.download_images and client is None:
        async with create_client() as own_client:
            return await _convert_entries(entries, load_html, opts, own_client)
    return await _convert_entries(entries, load_html, opts, client)


async def _convert_entries(
    entries: Iterable[TocEntry],
    load_html: HtmlLoader,
    opts: ConversionOptions,
    client: httpx.AsyncClient | None,
) -> ConversionResult:
    result = ConversionResult()

    for entry, assigned in assign_paths(entries):
        html = await load_html(entry)
        if html is None:
            logger.warning("Missing content for document %r (%s)", entry.title, entry.url)
            result.skipped.append(entry.title)
            continue

        if opts.download_images and html:
            html, attachments = await rehome_images(html, assigned.name, client=client)
            for relative_path, payload in attachments.items():
                result.files.append(OutputFile(path=assigned.join(relative_path), content=payload))
            result.attachment_count += len(attachments)

        result.files.append(OutputFile.markdown(assigned.path, html_to_markdown(html)))
        result.document_count += 1
        logger.debug("Converted %s", assigned.path)

    return result
