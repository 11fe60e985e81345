"""Local configuration for lakebook2md."""

from __future__ import annotations

import os

DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "lakebook2md/0.1 (+https://github.com/lakebook2md/lakebook2md)"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "text"

LAKEBOOK2MD_FETCH_TIMEOUT_S = float(os.getenv("LAKEBOOK2MD_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
LAKEBOOK2MD_FETCH_MAX_RETRIES = int(os.getenv("LAKEBOOK2MD_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
LAKEBOOK2MD_FETCH_BACKOFF_S = float(os.getenv("LAKEBOOK2MD_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
LAKEBOOK2MD_USER_AGENT = os.getenv("LAKEBOOK2MD_USER_AGENT", DEFAULT_USER_AGENT)

# Default for the "download images" switch when the caller does not set it.
LAKEBOOK2MD_DOWNLOAD_IMAGES = os.getenv("LAKEBOOK2MD_DOWNLOAD_IMAGES", "false").lower() == "true"

LAKEBOOK2MD_LOG_LEVEL = os.getenv("LAKEBOOK2MD_LOG_LEVEL", DEFAULT_LOG_LEVEL)
LAKEBOOK2MD_LOG_FORMAT = os.getenv("LAKEBOOK2MD_LOG_FORMAT", DEFAULT_LOG_FORMAT)
