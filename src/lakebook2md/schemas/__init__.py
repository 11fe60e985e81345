"""Shared schemas for lakebook2md."""

from lakebook2md.schemas.conversion import AssignedPath, ConversionResult, OutputFile
from lakebook2md.schemas.toc import TocEntry, TocEntryType

__all__ = ["AssignedPath", "ConversionResult", "OutputFile", "TocEntry", "TocEntryType"]
