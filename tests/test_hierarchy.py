"""Tests for output path assignment and file-name sanitization."""

from __future__ import annotations

from lakebook2md.hierarchy import PathAssigner, assign_paths
from lakebook2md.naming import UNSAFE_FILENAME_CHARS, sanitize_file_name
from lakebook2md.schemas import TocEntry


def _entry(title: str, level: int, kind: str = "DOC", url: str | None = None) -> TocEntry:
    return TocEntry(title=title, level=level, type=kind, url=url or title.lower())


def _paths(entries: list[TocEntry]) -> list[str]:
    return [assigned.path for _, assigned in assign_paths(entries)]


class TestSanitizeFileName:
    """Tests for ``sanitize_file_name``."""

    def test_all_unsafe_characters_replaced(self) -> None:
        """Every unsafe character becomes an underscore."""
        result = sanitize_file_name('a/b\\c d?e*f<g>h|i"j:k')
        assert result == "a_b_c_d_e_f_g_h_i_j_k"
        assert not any(char in result for char in UNSAFE_FILENAME_CHARS)

    def test_safe_names_unchanged(self) -> None:
        """Names without unsafe characters pass through."""
        assert sanitize_file_name("Release-notes_v2.0") == "Release-notes_v2.0"
        assert sanitize_file_name("文档") == "文档"


class TestAssignPaths:
    """Tests for hierarchy reconstruction."""

    def test_level_increase_opens_directory(self) -> None:
        """A deeper entry nests under the previous entry's name."""
        entries = [
            _entry("A", 0, "TITLE"),
            _entry("B", 1),
            _entry("C", 1),
            _entry("D", 0),
        ]
        assert _paths(entries) == ["A/B.md", "A/C.md", "D.md"]

    def test_doc_can_be_a_directory(self) -> None:
        """A document with children also names their directory."""
        entries = [_entry("Parent", 0), _entry("Child", 1)]
        assert _paths(entries) == ["Parent.md", "Parent/Child.md"]

    def test_multi_level_return(self) -> None:
        """Dropping several levels pops several segments."""
        entries = [
            _entry("A", 0, "TITLE"),
            _entry("B", 1, "TITLE"),
            _entry("C", 2),
            _entry("D", 1),
            _entry("E", 2),
            _entry("F", 0),
        ]
        assert _paths(entries) == ["A/B/C.md", "A/D.md", "A/D/E.md", "F.md"]

    def test_level_jump_pushes_one_segment(self) -> None:
        """Skipping depths pushes only the previous title."""
        entries = [_entry("A", 0, "TITLE"), _entry("B", 3), _entry("C", 3)]
        assert _paths(entries) == ["A/B.md", "A/C.md"]

    def test_pop_is_clamped(self) -> None:
        """Returning further than the stack depth empties it without error."""
        entries = [_entry("A", 0, "TITLE"), _entry("B", 3), _entry("C", 0)]
        assert _paths(entries) == ["A/B.md", "C.md"]

    def test_toc_starting_below_root(self) -> None:
        """A first entry deeper than level 0 still lands at the root."""
        assert _paths([_entry("A", 1), _entry("B", 1)]) == ["A.md", "B.md"]

    def test_directory_names_are_sanitized(self) -> None:
        """Directory segments use sanitized titles."""
        entries = [_entry("Part 1: Intro", 0, "TITLE"), _entry("What? Why?", 1)]
        assert _paths(entries) == ["Part_1__Intro/What__Why_.md"]

    def test_untitled_entries_are_skipped(self) -> None:
        """Entries without a title leave the state untouched."""
        entries = [_entry("A", 0), _entry("", 1), _entry("B", 0)]
        assert _paths(entries) == ["A.md", "B.md"]

    def test_titles_never_produce_files(self) -> None:
        """Only ``DOC`` entries are assigned paths."""
        assigner = PathAssigner()
        assert assigner.assign(_entry("Section", 0, "TITLE")) is None
        assert assigner.assign(_entry("Link", 0, "LINK")) is None
        assigned = assigner.assign(_entry("Page", 0))
        assert assigned is not None
        assert assigned.path == "Page.md"

    def test_entries_are_yielded_with_paths(self) -> None:
        """``assign_paths`` pairs each document with its path."""
        doc = _entry("Doc", 0, url="doc-url")
        pairs = list(assign_paths([_entry("T", 0, "TITLE"), doc]))
        assert len(pairs) == 1
        entry, assigned = pairs[0]
        assert entry is doc
        assert (assigned.directory, assigned.name, assigned.file_name) == ("", "Doc", "Doc.md")


class TestNameCollisions:
    """Tests for duplicate title handling."""

    def test_duplicate_titles_get_numeric_suffix(self) -> None:
        """The second occurrence gets a counter appended."""
        paths = _paths([_entry("Intro", 0), _entry("Intro", 0)])
        assert paths == ["Intro.md", "Intro1.md"]
        assert len(set(paths)) == 2

    def test_suffixes_are_deterministic(self) -> None:
        """Running twice on the same input gives the same names."""
        entries = [_entry("Same", 0), _entry("Same", 0), _entry("Same", 0)]
        assert _paths(entries) == _paths(entries) == ["Same.md", "Same1.md", "Same2.md"]

    def test_suffix_skips_taken_names(self) -> None:
        """A suffixed candidate already used by another title is skipped."""
        entries = [_entry("A", 0), _entry("A1", 0), _entry("A", 0)]
        assert _paths(entries) == ["A.md", "A1.md", "A2.md"]

    def test_names_unique_across_directories(self) -> None:
        """Uniqueness is global, not per directory."""
        entries = [
            _entry("X", 0, "TITLE"),
            _entry("Notes", 1),
            _entry("Y", 0, "TITLE"),
            _entry("Notes", 1),
        ]
        assert _paths(entries) == ["X/Notes.md", "Y/Notes1.md"]

    def test_sanitized_collisions(self) -> None:
        """Titles that differ only in unsafe characters collide."""
        assert _paths([_entry("a b", 0), _entry("a/b", 0)]) == ["a_b.md", "a_b1.md"]

    def test_fresh_assigner_forgets_names(self) -> None:
        """State does not leak between runs."""
        assert _paths([_entry("Intro", 0)]) == ["Intro.md"]
        assert _paths([_entry("Intro", 0)]) == ["Intro.md"]
