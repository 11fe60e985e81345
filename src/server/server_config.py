"""Server configuration."""

from __future__ import annotations

import os

MAX_UPLOAD_SIZE_MB = int(os.getenv("MAX_UPLOAD_SIZE_MB", "100"))
MAX_UPLOAD_SIZE_BYTES = MAX_UPLOAD_SIZE_MB * 1024 * 1024

OUTPUT_FILENAME = "markdown-output.zip"
ZIP_MEDIA_TYPE = "application/zip"
MARKDOWN_MEDIA_TYPE = "text/markdown; charset=utf-8"

CORS_ALLOW_ORIGINS = ["*"]
CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type"]

SERVER_HOST = os.getenv("HOST", "0.0.0.0")  # noqa: S104
SERVER_PORT = int(os.getenv("PORT", "8000"))
SERVER_RELOAD = os.getenv("RELOAD", "false").lower() == "true"
