"""Conversion endpoints."""

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, Response

from server.form_types import OptFileForm, OptStrForm
from server.models import ErrorResponse, UrlConvertRequest, parse_flag
from server.query_processor import process_upload, process_url
from server.server_config import MAX_UPLOAD_SIZE_BYTES, MAX_UPLOAD_SIZE_MB
from server.upload_page import UPLOAD_PAGE_HTML

router = APIRouter()

COMMON_CONVERT_RESPONSES: dict = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Missing or invalid input"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Conversion failed"},
}

UPLOAD_RESPONSES: dict = {
    **COMMON_CONVERT_RESPONSES,
    status.HTTP_200_OK: {"content": {"application/zip": {}}, "description": "Converted archive"},
    status.HTTP_413_CONTENT_TOO_LARGE: {"model": ErrorResponse, "description": "Upload exceeds the size limit"},
}

URL_RESPONSES: dict = {
    **COMMON_CONVERT_RESPONSES,
    status.HTTP_200_OK: {
        "content": {"text/markdown": {}, "application/zip": {}},
        "description": "Converted document or archive",
    },
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Page not found or not public"},
    status.HTTP_422_UNPROCESSABLE_CONTENT: {"model": ErrorResponse, "description": "Unrecognized page"},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse, "description": "Failed to fetch page"},
}


@router.get("/", response_class=HTMLResponse)
async def upload_form() -> HTMLResponse:
    """Serve the upload form."""
    return HTMLResponse(UPLOAD_PAGE_HTML)


@router.post("/", responses=UPLOAD_RESPONSES, response_model=None)
async def convert_upload(
    request: Request,  # noqa: ARG001 (unused-function-argument) # pylint: disable=unused-argument
    lakebook: OptFileForm = None,
    downloadImages: OptStrForm = None,  # noqa: N803 (form field name used by the upload page)
) -> Response:
    """Convert an uploaded ``.lakebook`` export into a ZIP of Markdown files.

    **Form fields**

    - **lakebook** (`file`): the exported archive
    - **downloadImages** (`str`, optional): ``"true"`` to download images into
      ``attachments/`` folders next to each document

    **Returns**

    - **Response**: ``markdown-output.zip`` on success, or a JSON error body
      with status **400** (no file / invalid archive), **413** (too large) or **500**
    """
    if lakebook is None:
        return _error(status.HTTP_400_BAD_REQUEST, "No file uploaded")

    data = await lakebook.read()
    if not data:
        return _error(status.HTTP_400_BAD_REQUEST, "No file uploaded")
    if len(data) > MAX_UPLOAD_SIZE_BYTES:
        return _error(
            status.HTTP_413_CONTENT_TOO_LARGE,
            f"File exceeds the {MAX_UPLOAD_SIZE_MB} MB limit",
        )

    return await process_upload(data, download_images=parse_flag(downloadImages), filename=lakebook.filename)


@router.post("/api/convert/url", responses=URL_RESPONSES, response_model=None)
async def convert_url(convert_request: UrlConvertRequest) -> Response:
    """Convert a public document or knowledge-base page.

    A single document without downloaded images is returned as Markdown;
    knowledge-base pages and documents with attachments come back as a ZIP.
    """
    return await process_url(convert_request.url, download_images=convert_request.download_images)


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())
