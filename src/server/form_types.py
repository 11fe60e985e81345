"""Reusable form type aliases for FastAPI form parameters."""

from __future__ import annotations

from typing import Annotated, Optional, TypeAlias

from fastapi import File, Form, UploadFile

OptFileForm: TypeAlias = Annotated[Optional[UploadFile], File()]
OptStrForm: TypeAlias = Annotated[Optional[str], Form()]
