"""Test setup for lakebook2md."""

from __future__ import annotations

import io
import json
import sys
import tarfile
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (make real network calls)",
    )


def build_tar_gz(files: dict[str, bytes]) -> bytes:
    """Pack ``files`` into an in-memory tar.gz archive."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def build_lakebook(
    toc: list[dict[str, Any]],
    docs: dict[str, dict[str, Any]],
    repo_dir: str = "repo",
) -> bytes:
    """Build a .lakebook export with the given TOC and ``{url: doc payload}``."""
    meta = {"book": {"tocYml": yaml.safe_dump(toc, allow_unicode=True)}}
    files = {f"{repo_dir}/$meta.json": json.dumps({"meta": json.dumps(meta)}).encode("utf-8")}
    for url, doc in docs.items():
        files[f"{repo_dir}/{url}.json"] = json.dumps({"doc": doc}).encode("utf-8")
    return build_tar_gz(files)


@pytest.fixture
def make_lakebook() -> Callable[..., bytes]:
    """Factory fixture for .lakebook archives."""
    return build_lakebook


@pytest.fixture
def sample_toc() -> list[dict[str, Any]]:
    """A small TOC with one section holding two documents."""
    return [
        {"type": "TITLE", "title": "Guide", "level": 0},
        {"type": "DOC", "title": "Getting Started", "url": "start", "level": 1},
        {"type": "DOC", "title": "FAQ: Common?", "url": "faq", "level": 1},
        {"type": "DOC", "title": "Changelog", "url": "changes", "level": 0},
    ]


@pytest.fixture
def sample_docs() -> dict[str, dict[str, Any]]:
    """Payloads for :func:`sample_toc`."""
    return {
        "start": {"body": "<h1>Start</h1><p>Hello <strong>world</strong></p>"},
        "faq": {"body_asl": "<ul><li>One</li><li>Two</li></ul>"},
        "changes": {"body": "<p>v1 &amp; v2</p>"},
    }


def mock_response(
    *,
    status_code: int = 200,
    content: bytes = b"",
    text: str = "",
    content_type: str = "",
) -> MagicMock:
    """An httpx-like response double."""
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = text
    response.headers = {"Content-Type": content_type} if content_type else {}
    response.raise_for_status = MagicMock()
    return response


def mock_client(*responses: Any) -> AsyncMock:
    """An httpx.AsyncClient double returning ``responses`` in order."""
    client = AsyncMock()
    client.get = AsyncMock(side_effect=list(responses))
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    return client
