"""Table-of-contents models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TocEntryType(str, Enum):
    """Entry kinds found in an exported table of contents."""

    DOC = "DOC"
    TITLE = "TITLE"


class TocEntry(BaseModel):
    """One node of a depth-annotated, pre-order table of contents.

    Exports carry more keys than these (uuids, visibility flags); they are
    ignored. ``type`` stays a plain string because only ``DOC`` matters:
    every other kind behaves like a ``TITLE``.
    """

    model_config = ConfigDict(extra="ignore")

    type: str = TocEntryType.TITLE.value
    url: str | None = None
    level: int = Field(default=0, ge=0)
    title: str = ""

    @property
    def is_doc(self) -> bool:
        return self.type == TocEntryType.DOC.value

    @field_validator("type", "title", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Treat ``None`` as empty and stringify scalars (YAML may yield ints)."""
        if v is None:
            return ""
        return str(v)

    @field_validator("url", mode="before")
    @classmethod
    def coerce_url(cls, v: Any) -> str | None:
        """Stringify non-empty URLs."""
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("level", mode="before")
    @classmethod
    def coerce_level(cls, v: Any) -> int:
        """Missing or negative levels count as the root depth."""
        if v is None or v == "":
            return 0
        return max(int(v), 0)
