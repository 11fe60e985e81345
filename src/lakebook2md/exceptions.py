"""Custom exceptions for lakebook2md."""


class Lakebook2mdError(Exception):
    """Base exception for lakebook2md operations."""


class InputError(Lakebook2mdError):
    """No usable input was supplied (no file, empty upload, no URL)."""


class ArchiveError(Lakebook2mdError):
    """The uploaded container could not be read as a gzip-compressed tar."""


class MetaNotFoundError(ArchiveError):
    """The archive has no top-level directory holding ``$meta.json``."""


class TocError(Lakebook2mdError):
    """The table of contents is missing, empty, or malformed."""


class FetchError(Lakebook2mdError):
    """Error during content fetching."""


class PageNotFoundError(FetchError):
    """The remote page does not exist or is not public."""


class ParseError(Lakebook2mdError):
    """A remote page carried no recognizable document content."""
