"""lakebook2md: convert knowledge-base exports into Markdown trees."""

from lakebook2md.exceptions import (
    ArchiveError,
    FetchError,
    InputError,
    Lakebook2mdError,
    MetaNotFoundError,
    PageNotFoundError,
    ParseError,
    TocError,
)
from lakebook2md.hierarchy import PathAssigner, assign_paths
from lakebook2md.html_parser import parse_html
from lakebook2md.ingestion import ConversionOptions, convert_lakebook, html_to_markdown
from lakebook2md.markdown import convert_html_to_markdown, decode_entities, render_markdown
from lakebook2md.naming import sanitize_file_name
from lakebook2md.normalizer import normalize_markdown
from lakebook2md.remote import RemoteConversion, convert_remote_page
from lakebook2md.schemas import AssignedPath, ConversionResult, OutputFile, TocEntry, TocEntryType

__all__ = [
    "ArchiveError",
    "AssignedPath",
    "ConversionOptions",
    "ConversionResult",
    "FetchError",
    "InputError",
    "Lakebook2mdError",
    "MetaNotFoundError",
    "OutputFile",
    "PageNotFoundError",
    "ParseError",
    "PathAssigner",
    "RemoteConversion",
    "TocEntry",
    "TocEntryType",
    "TocError",
    "assign_paths",
    "convert_html_to_markdown",
    "convert_lakebook",
    "convert_remote_page",
    "decode_entities",
    "html_to_markdown",
    "normalize_markdown",
    "parse_html",
    "render_markdown",
    "sanitize_file_name",
]
