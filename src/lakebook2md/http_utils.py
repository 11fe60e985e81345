"""HTTP utilities for fetching content with retry logic and connection pooling."""

from __future__ import annotations

import asyncio
from typing import Final

import httpx

from lakebook2md.config import (
    LAKEBOOK2MD_FETCH_BACKOFF_S,
    LAKEBOOK2MD_FETCH_MAX_RETRIES,
    LAKEBOOK2MD_FETCH_TIMEOUT_S,
    LAKEBOOK2MD_USER_AGENT,
)
from lakebook2md.exceptions import FetchError

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


def create_client() -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` with the project-wide defaults.

    Callers that issue several requests in a row (image rehoming, knowledge-base
    pages) share one client so connections are pooled.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(LAKEBOOK2MD_FETCH_TIMEOUT_S),
        headers={"User-Agent": LAKEBOOK2MD_USER_AGENT},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )


async def fetch_response(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    on_404: type[Exception] | None = None,
    on_404_message: str | None = None,
) -> httpx.Response:
    """Fetch a URL with retry logic and return the successful response.

    Args:
        url: The URL to fetch.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.
        on_404: Custom exception class to raise on 404. Defaults to FetchError.
        on_404_message: Custom error message for 404 responses. If None,
            a generic message is used.

    Returns:
        The first response with a non-retryable, non-error status.

    Raises:
        FetchError (or custom on_404 exception): If the fetch fails after all
            retries or returns 404.
    """
    last_exc: Exception | None = None
    not_found_exc_class = on_404 or FetchError

    async def do_fetch(http_client: httpx.AsyncClient) -> httpx.Response:
        nonlocal last_exc

        for attempt in range(LAKEBOOK2MD_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.get(url)

                if response.status_code == 404:
                    message = on_404_message or f"Resource not found at {url}"
                    raise not_found_exc_class(message)

                if response.status_code in RETRY_STATUS_CODES:
                    last_exc = FetchError(f"HTTP {response.status_code} from {url}")
                else:
                    response.raise_for_status()
                    return response
            except (httpx.UnsupportedProtocol, httpx.InvalidURL) as exc:
                # No retry can fix a data: URI or a relative path.
                raise FetchError(f"Cannot fetch {url}: {exc}") from exc
            except (httpx.RequestError, httpx.HTTPStatusError) as exc:
                last_exc = exc
            except not_found_exc_class:
                raise

            if attempt < LAKEBOOK2MD_FETCH_MAX_RETRIES:
                backoff = LAKEBOOK2MD_FETCH_BACKOFF_S * (2**attempt)
                await asyncio.sleep(backoff)

        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await do_fetch(client)

    async with create_client() as new_client:
        return await do_fetch(new_client)


async def fetch_with_retries(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    return_bytes: bool = False,
    on_404: type[Exception] | None = None,
    on_404_message: str | None = None,
) -> str | bytes:
    """Fetch content from a URL with retry logic for transient failures.

    Returns the decoded text by default, or the raw bytes when
    ``return_bytes`` is True. See :func:`fetch_response` for the remaining
    arguments and the errors raised.
    """
    response = await fetch_response(
        url,
        client=client,
        on_404=on_404,
        on_404_message=on_404_message,
    )
    return response.content if return_bytes else response.text
