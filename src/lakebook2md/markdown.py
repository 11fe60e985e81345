"""Render the HTML node tree as Markdown."""

from __future__ import annotations

import re

from lakebook2md.html_parser import ElementNode, HtmlNode, RootNode, TextNode, parse_html

# Applied in order, before numeric character references.
NAMED_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
    ("&copy;", "©"),
    ("&reg;", "®"),
    ("&trade;", "™"),
    ("&mdash;", "—"),
    ("&ndash;", "–"),
    ("&hellip;", "…"),
    ("&lsquo;", "'"),
    ("&rsquo;", "'"),
    ("&ldquo;", '"'),
    ("&rdquo;", '"'),
)

_DECIMAL_REF_RE = re.compile(r"&#(\d+);")
_HEX_REF_RE = re.compile(r"&#x([0-9a-fA-F]+);")
_LANGUAGE_CLASS_RE = re.compile(r"language-(\w+)")
_EDGE_NEWLINES_RE = re.compile(r"^\n+|\n+$")

_HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
_DISCARDED_TAGS = frozenset({"script", "style", "noscript"})


def convert_html_to_markdown(html: str) -> str:
    """Convert an HTML fragment into raw (un-normalized) Markdown."""
    if not html or not html.strip():
        return ""
    return render_markdown(parse_html(html))


def decode_entities(text: str) -> str:
    """Decode the supported named entities and numeric character references."""
    for entity, char in NAMED_ENTITIES:
        text = text.replace(entity, char)
    text = _DECIMAL_REF_RE.sub(lambda m: _char_from_code(m.group(0), int(m.group(1))), text)
    text = _HEX_REF_RE.sub(lambda m: _char_from_code(m.group(0), int(m.group(1), 16)), text)
    return text


def _char_from_code(original: str, code: int) -> str:
    if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        return original
    return chr(code)


def render_markdown(node: HtmlNode) -> str:
    """Render a node (and its subtree) as Markdown."""
    if isinstance(node, TextNode):
        return decode_entities(node.content)
    if isinstance(node, RootNode):
        return _render_children(node.children)
    return _render_element(node)


def _render_children(children: list[HtmlNode]) -> str:
    return "".join(render_markdown(child) for child in children)


def _render_element(node: ElementNode) -> str:
    tag = node.tag
    attrs = node.attributes

    if tag in _DISCARDED_TAGS:
        return ""
    if tag == "tr":
        return _render_table_row(node)

    children = _render_children(node.children)

    if tag in _HEADING_LEVELS:
        return f"\n{'#' * _HEADING_LEVELS[tag]} {children.strip()}\n\n"
    if tag == "p":
        return f"\n{children}\n\n"
    if tag == "br":
        return "\n"
    if tag == "hr":
        return "\n---\n\n"
    if tag in {"strong", "b"}:
        return f"**{children}**"
    if tag in {"em", "i"}:
        return f"*{children}*"
    if tag == "code":
        return f"`{children}`"
    if tag == "pre":
        language = _code_language(attrs)
        code = _EDGE_NEWLINES_RE.sub("", children)
        return f"\n```{language}\n{code}\n```\n\n"
    if tag == "blockquote":
        lines = children.strip().split("\n")
        return "\n" + "\n".join(f"> {line}" for line in lines) + "\n\n"
    if tag in {"ul", "ol", "table"}:
        return f"\n{children}\n"
    if tag == "li":
        return f"- {children.strip()}\n"
    if tag == "a":
        href = attrs.get("href", "")
        if not href:
            return children
        return f"[{children}]({href}{_title_suffix(attrs)})"
    if tag == "img":
        return f"![{attrs.get('alt', '')}]({attrs.get('src', '')}{_title_suffix(attrs)})"
    if tag in {"del", "s", "strike"}:
        return f"~~{children}~~"
    if tag == "sup":
        return f"^{children}^"
    if tag == "sub":
        return f"~{children}~"
    # Known containers and unrecognized tags alike are unwrapped.
    return children


def _render_table_row(node: ElementNode) -> str:
    cells = [
        render_markdown(child).strip()
        for child in node.children
        if isinstance(child, ElementNode) and child.tag in {"td", "th"}
    ]
    row = f"| {' | '.join(cells)} |\n"
    is_header = any(isinstance(child, ElementNode) and child.tag == "th" for child in node.children)
    if is_header:
        separator = f"| {' | '.join('---' for _ in cells)} |\n"
        return row + separator
    return row


def _code_language(attrs: dict[str, str]) -> str:
    language = attrs.get("data-language", "")
    if language:
        return language
    match = _LANGUAGE_CLASS_RE.search(attrs.get("class", ""))
    return match.group(1) if match else ""


def _title_suffix(attrs: dict[str, str]) -> str:
    title = attrs.get("title", "")
    return f' "{title}"' if title else ""
