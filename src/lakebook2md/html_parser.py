"""Lenient HTML parser producing a small node tree for Markdown rendering.

The parser is a single left-to-right scan over the input with an explicit
cursor. Elements are parsed by recursive descent; closing tags are matched by
a case-insensitive string search rather than a strict tag stack, so malformed
markup degrades to a best-effort tree instead of raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Union

VOID_TAGS = frozenset(
    {
        "img",
        "br",
        "hr",
        "input",
        "meta",
        "link",
        "area",
        "base",
        "col",
        "embed",
        "param",
        "source",
        "track",
        "wbr",
    }
)

_TAG_NAME_RE = re.compile(r"[a-zA-Z0-9]+")
_ATTRIBUTE_RE = re.compile(r'([a-zA-Z0-9_-]+)(?:="([^"]*)")?')


@dataclass
class TextNode:
    """Raw character data, still entity-encoded."""

    content: str


@dataclass
class ElementNode:
    """An HTML element with a lowercase tag name."""

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[HtmlNode] = field(default_factory=list)


@dataclass
class RootNode:
    """Synthetic container for the top-level nodes of a document."""

    children: list[HtmlNode] = field(default_factory=list)


HtmlNode = Union[RootNode, ElementNode, TextNode]


def parse_html(html: str) -> RootNode:
    """Parse ``html`` into a node tree. Never raises on malformed markup."""
    return HtmlParser(html).parse()


class HtmlParser:
    """Recursive-descent parser over a cursor into the raw HTML text."""

    def __init__(self, html: str) -> None:
        self.html = html
        self.pos = 0

    def parse(self) -> RootNode:
        root = RootNode()
        # A closing tag with no open element ends the document.
        self._parse_children(root.children)
        return root

    def _parse_children(self, children: list[HtmlNode]) -> None:
        html = self.html
        while self.pos < len(html):
            if html[self.pos] == "<":
                if html.startswith("</", self.pos):
                    return
                if html.startswith("<!--", self.pos):
                    self._skip_comment()
                    continue
                element = self._parse_element()
                if element is not None:
                    children.append(element)
            else:
                text = self._parse_text()
                if text.strip() or " " in text:
                    children.append(TextNode(text))

    def _skip_comment(self) -> None:
        end = self.html.find("-->", self.pos)
        self.pos = end + 3 if end != -1 else len(self.html)

    def _parse_element(self) -> ElementNode | None:
        html = self.html
        self.pos += 1  # '<'

        name_match = _TAG_NAME_RE.match(html, self.pos)
        if not name_match:
            return None
        tag = name_match.group(0).lower()
        self.pos = name_match.end()

        attributes: dict[str, str] = {}
        while self.pos < len(html) and html[self.pos] not in ">/":
            self._skip_whitespace()
            if self.pos >= len(html) or html[self.pos] in ">/":
                break
            attr_match = _ATTRIBUTE_RE.match(html, self.pos)
            if attr_match:
                attributes[attr_match.group(1)] = attr_match.group(2) or ""
                self.pos = attr_match.end()
            else:
                self.pos += 1

        if html.startswith("/", self.pos):
            self.pos += 1
        if html.startswith(">", self.pos):
            self.pos += 1

        node = ElementNode(tag=tag, attributes=attributes)
        if tag in VOID_TAGS:
            return node

        self._parse_children(node.children)

        end_match = _closing_tag_re(tag).search(html, self.pos)
        if end_match:
            self.pos = end_match.end()
        return node

    def _parse_text(self) -> str:
        end = self.html.find("<", self.pos)
        if end == -1:
            end = len(self.html)
        text = self.html[self.pos : end]
        self.pos = end
        return text

    def _skip_whitespace(self) -> None:
        html = self.html
        while self.pos < len(html) and html[self.pos].isspace():
            self.pos += 1


@lru_cache(maxsize=128)
def _closing_tag_re(tag: str) -> re.Pattern[str]:
    return re.compile(re.escape(f"</{tag}>"), re.IGNORECASE)
