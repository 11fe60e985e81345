"""Map a flat, depth-annotated table of contents onto output paths."""

from __future__ import annotations

from typing import Iterable, Iterator

from lakebook2md.naming import sanitize_file_name
from lakebook2md.schemas import AssignedPath, TocEntry


class PathAssigner:
    """Stateful fold over TOC entries in pre-order.

    The directory stack grows by one segment (the previous entry's name) when
    the level increases and shrinks by the level difference when it
    decreases. Names are unique across the whole run, not per directory.
    """

    def __init__(self) -> None:
        self.stack: list[str] = []
        self.last_sanitized_title = ""
        self.last_level = 0
        self.used_names: set[str] = set()
        self._suffix_counters: dict[str, int] = {}

    def assign(self, entry: TocEntry) -> AssignedPath | None:
        """Advance the state past ``entry``; return its path if it is a document."""
        if not entry.title:
            return None

        name = self._unique_name(entry.title)
        level = entry.level

        if level > self.last_level:
            self.stack.append(self.last_sanitized_title)
        elif level < self.last_level:
            depth = max(len(self.stack) - (self.last_level - level), 0)
            del self.stack[depth:]

        assigned = None
        if entry.is_doc:
            # A TOC that starts deeper than level 0 pushes an empty segment;
            # it keeps the pop arithmetic right but never reaches a path.
            directory = "/".join(segment for segment in self.stack if segment)
            assigned = AssignedPath(directory=directory, name=name, file_name=f"{name}.md")

        self.last_sanitized_title = name
        self.last_level = level
        return assigned

    def _unique_name(self, title: str) -> str:
        base = sanitize_file_name(title)
        name = base
        while name in self.used_names:
            counter = self._suffix_counters.get(base, 0) + 1
            self._suffix_counters[base] = counter
            name = f"{base}{counter}"
        self.used_names.add(name)
        return name


def assign_paths(entries: Iterable[TocEntry]) -> Iterator[tuple[TocEntry, AssignedPath]]:
    """Yield ``(entry, path)`` for every document entry, in TOC order."""
    assigner = PathAssigner()
    for entry in entries:
        assigned = assigner.assign(entry)
        if assigned is not None:
            yield entry, assigned
