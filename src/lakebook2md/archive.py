"""Read ``.lakebook`` exports and write ZIP output archives."""

from __future__ import annotations

import io
import json
import logging
import tarfile
import zipfile
from dataclasses import dataclass, field
from typing import Any, Iterable

import yaml
from pydantic import ValidationError

from lakebook2md.exceptions import ArchiveError, MetaNotFoundError, TocError
from lakebook2md.schemas import OutputFile, TocEntry

logger = logging.getLogger(__name__)

META_JSON = "$meta.json"


@dataclass
class LakebookArchive:
    """Files extracted from a ``.lakebook`` export, plus its parsed TOC."""

    files: dict[str, bytes]
    repo_dir: str
    toc: list[TocEntry] = field(default_factory=list)


def read_lakebook(data: bytes) -> LakebookArchive:
    """Unpack a ``.lakebook`` export held in memory.

    Raises:
        ArchiveError: If the bytes are not a readable tar container.
        MetaNotFoundError: If no top-level directory holds ``$meta.json``.
        TocError: If the table of contents is missing or empty.
    """
    files = extract_tar(data)
    repo_dir = find_repo_dir(files)
    if not repo_dir:
        raise MetaNotFoundError(f"Invalid .lakebook file: no {META_JSON} found")
    toc = read_toc(files, repo_dir)
    return LakebookArchive(files=files, repo_dir=repo_dir, toc=toc)


def extract_tar(data: bytes) -> dict[str, bytes]:
    """Return the regular files of a (usually gzip-compressed) tar archive."""
    if not data:
        raise ArchiveError("Archive is empty")

    files: dict[str, bytes] = {}
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as tar:
            for member in tar.getmembers():
                if not member.isfile():
                    continue
                # Security: filter out absolute paths and parent traversal
                if member.name.startswith("/") or ".." in member.name.split("/"):
                    logger.warning("Skipping unsafe archive member %s", member.name)
                    continue
                extracted = tar.extractfile(member)
                if extracted is None:
                    continue
                files[_normalize_member_name(member.name)] = extracted.read()
    except (tarfile.TarError, EOFError, OSError) as exc:
        raise ArchiveError(f"Unable to read archive: {exc}") from exc
    return files


def _normalize_member_name(name: str) -> str:
    return name[2:] if name.startswith("./") else name


def find_repo_dir(files: dict[str, bytes]) -> str:
    """Name of the first top-level directory that contains ``$meta.json``."""
    for path in files:
        parts = path.split("/")
        if len(parts) >= 2 and parts[1] == META_JSON:
            return parts[0]
    return ""


def read_toc(files: dict[str, bytes], repo_dir: str) -> list[TocEntry]:
    """Decode the TOC from ``$meta.json`` (JSON, then JSON, then YAML)."""
    meta_path = f"{repo_dir}/{META_JSON}"
    meta_data = files.get(meta_path)
    if meta_data is None:
        raise MetaNotFoundError("Meta file not found")

    try:
        meta_file = json.loads(meta_data.decode("utf-8"))
        meta = json.loads(meta_file["meta"])
        toc_yml = (meta.get("book") or {}).get("tocYml") or ""
        raw_toc = yaml.safe_load(toc_yml) if toc_yml else None
    except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, AttributeError) as exc:
        raise TocError(f"Malformed {META_JSON}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise TocError(f"Malformed table of contents: {exc}") from exc

    return parse_toc(raw_toc)


def parse_toc(raw_toc: Any) -> list[TocEntry]:
    """Validate a decoded TOC list into :class:`TocEntry` models."""
    if not raw_toc or not isinstance(raw_toc, list):
        raise TocError("Table of contents is empty")
    try:
        entries = [TocEntry.model_validate(item) for item in raw_toc if isinstance(item, dict)]
    except ValidationError as exc:
        raise TocError(f"Malformed table of contents: {exc}") from exc
    if not entries:
        raise TocError("Table of contents has no entries")
    return entries


def load_document_html(files: dict[str, bytes], repo_dir: str, url: str | None) -> str | None:
    """Return the HTML body of a document, or None if its payload is absent.

    ``body`` is preferred; ``body_asl`` is the fallback.
    """
    if not url:
        return None
    raw = files.get(f"{repo_dir}/{url}.json")
    if raw is None:
        return None
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Unreadable document payload %s: %s", url, exc)
        return None
    doc = payload.get("doc") if isinstance(payload, dict) else None
    if not isinstance(doc, dict):
        return ""
    return doc.get("body") or doc.get("body_asl") or ""


def build_zip(outputs: Iterable[OutputFile]) -> bytes:
    """Write ``outputs`` into an in-memory, deflate-compressed ZIP archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
        for output in outputs:
            archive.writestr(output.path, output.content)
    return buffer.getvalue()
