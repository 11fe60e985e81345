"""Conversion output models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AssignedPath(BaseModel):
    """Where a document lands in the output tree."""

    directory: str = ""
    name: str
    file_name: str

    @property
    def path(self) -> str:
        """Archive-relative path of the Markdown file."""
        return f"{self.directory}/{self.file_name}" if self.directory else self.file_name

    def join(self, relative: str) -> str:
        """Resolve ``relative`` against the document's directory."""
        return f"{self.directory}/{relative}" if self.directory else relative


class OutputFile(BaseModel):
    """A single entry of the output archive."""

    path: str
    content: bytes

    @classmethod
    def markdown(cls, path: str, text: str) -> OutputFile:
        return cls(path=path, content=text.encode("utf-8"))


class ConversionResult(BaseModel):
    """Everything produced by one conversion run."""

    files: list[OutputFile] = Field(default_factory=list)
    document_count: int = 0
    attachment_count: int = 0
    skipped: list[str] = Field(default_factory=list)

    def to_zip(self) -> bytes:
        """Package the files into a ZIP archive."""
        from lakebook2md.archive import build_zip

        return build_zip(self.files)
