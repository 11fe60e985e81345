"""Run conversions for the HTTP endpoints and map failures to responses."""

from __future__ import annotations

from urllib.parse import quote

from fastapi import status
from fastapi.responses import JSONResponse, Response

from lakebook2md.exceptions import (
    ArchiveError,
    FetchError,
    InputError,
    Lakebook2mdError,
    PageNotFoundError,
    ParseError,
    TocError,
)
from lakebook2md.ingestion import ConversionOptions, convert_lakebook
from lakebook2md.remote import convert_remote_page, remote_file_stem
from lakebook2md.utils.logging_config import get_logger
from server.models import ErrorResponse
from server.server_config import MARKDOWN_MEDIA_TYPE, OUTPUT_FILENAME, ZIP_MEDIA_TYPE

# Initialize logger for this module
logger = get_logger(__name__)

_ERROR_STATUS: tuple[tuple[type[Lakebook2mdError], int, str], ...] = (
    (InputError, status.HTTP_400_BAD_REQUEST, "Invalid input"),
    (ArchiveError, status.HTTP_400_BAD_REQUEST, "Invalid .lakebook file"),
    (TocError, status.HTTP_400_BAD_REQUEST, "Invalid .lakebook file"),
    (PageNotFoundError, status.HTTP_404_NOT_FOUND, "Page not found"),
    (FetchError, status.HTTP_502_BAD_GATEWAY, "Failed to fetch page"),
    (ParseError, status.HTTP_422_UNPROCESSABLE_CONTENT, "Unrecognized page"),
)


async def process_upload(data: bytes, *, download_images: bool, filename: str | None = None) -> Response:
    """Convert an uploaded ``.lakebook`` and return the ZIP (or a JSON error)."""
    logger.info(
        "Processing upload",
        extra={"upload_filename": filename, "size_bytes": len(data), "download_images": download_images},
    )
    try:
        result = await convert_lakebook(data, ConversionOptions(download_images=download_images))
    except Exception as exc:
        return _error_response(exc, source=filename)

    logger.info(
        "Upload converted successfully",
        extra={
            "upload_filename": filename,
            "documents": result.document_count,
            "attachments": result.attachment_count,
            "skipped": len(result.skipped),
        },
    )
    return zip_response(result.to_zip(), OUTPUT_FILENAME)


async def process_url(url: str, *, download_images: bool) -> Response:
    """Convert a public page; a single plain document comes back as Markdown."""
    logger.info("Processing URL", extra={"url": url, "download_images": download_images})
    try:
        conversion = await convert_remote_page(url, ConversionOptions(download_images=download_images))
    except Exception as exc:
        return _error_response(exc, source=url)

    if conversion.is_book or conversion.result.attachment_count:
        return zip_response(conversion.result.to_zip(), OUTPUT_FILENAME)
    return Response(
        content=conversion.markdown.encode("utf-8"),
        media_type=MARKDOWN_MEDIA_TYPE,
        headers={"Content-Disposition": _content_disposition(f"{remote_file_stem(conversion)}.md")},
    )


def zip_response(data: bytes, filename: str) -> Response:
    return Response(
        content=data,
        media_type=ZIP_MEDIA_TYPE,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


def _content_disposition(filename: str) -> str:
    if filename.isascii():
        return f'attachment; filename="{filename}"'
    return f"attachment; filename*=UTF-8''{quote(filename)}"


def _error_response(exc: Exception, *, source: str | None) -> JSONResponse:
    for exc_class, status_code, message in _ERROR_STATUS:
        if isinstance(exc, exc_class):
            logger.warning("Conversion rejected", extra={"source": source, "error": str(exc)})
            body = ErrorResponse(error=message, details=str(exc))
            return JSONResponse(status_code=status_code, content=body.model_dump())

    logger.error("Conversion failed", extra={"source": source, "error": str(exc)}, exc_info=exc)
    body = ErrorResponse(error="Failed to process file", details=str(exc))
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())
