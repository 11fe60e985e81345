"""Pydantic models for the conversion API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def parse_flag(value: str | bool | None) -> bool:
    """Interpret an HTML form checkbox value."""
    if isinstance(value, bool):
        return value
    return (value or "").strip().lower() in {"true", "on", "1", "yes"}


class UrlConvertRequest(BaseModel):
    """Request model for the /api/convert/url endpoint.

    Attributes
    ----------
    url : str
        Public document or knowledge-base page to convert.
    download_images : bool
        Download images into ``attachments/`` folders and relink them.

    """

    url: str = Field(..., description="Public document or knowledge-base page URL")
    download_images: bool = Field(default=False, description="Download images next to each document")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that ``url`` is not empty."""
        if not v.strip():
            err = "url cannot be empty"
            raise ValueError(err)
        return v.strip()


class ErrorResponse(BaseModel):
    """Error response model.

    Attributes
    ----------
    error : str
        Error message describing what went wrong.
    details : str | None
        Underlying exception text, when there is one.

    """

    error: str = Field(..., description="Error message")
    details: str | None = Field(default=None, description="Underlying error")
