"""File-name helpers shared by the path assigner and image rehoming."""

from __future__ import annotations

# Replaced one after another; no replacement introduces another target.
UNSAFE_FILENAME_CHARS = ("/", "\\", " ", "?", "*", "<", ">", "|", '"', ":")


def sanitize_file_name(name: str) -> str:
    """Replace file-system-unsafe characters in ``name`` with underscores."""
    for char in UNSAFE_FILENAME_CHARS:
        name = name.replace(char, "_")
    return name
