"""Tests for Markdown rendering and entity decoding."""

from __future__ import annotations

import pytest

from lakebook2md.html_parser import parse_html
from lakebook2md.markdown import convert_html_to_markdown, decode_entities, render_markdown


def _render(html: str) -> str:
    return render_markdown(parse_html(html))


class TestBlockElements:
    """Tests for block-level tag rules."""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level: int) -> None:
        """Each heading level renders with the matching number of hashes."""
        assert _render(f"<h{level}>Title</h{level}>") == f"\n{'#' * level} Title\n\n"

    def test_heading_content_is_trimmed(self) -> None:
        """Whitespace around heading text is removed."""
        assert _render("<h3>  Spaced out  </h3>") == "\n### Spaced out\n\n"

    def test_paragraph_keeps_inner_whitespace(self) -> None:
        """Paragraph children are not trimmed."""
        assert _render("<p>Hello <strong>world</strong></p>") == "\nHello **world**\n\n"

    def test_line_break_and_rule(self) -> None:
        """``br`` is a newline and ``hr`` a thematic break."""
        assert _render("a<br>b") == "a\nb"
        assert _render("<hr>") == "\n---\n\n"

    def test_blockquote_prefixes_every_line(self) -> None:
        """Each line of the quoted content gets a ``> `` prefix."""
        assert _render("<blockquote> line1<br>line2 </blockquote>") == "\n> line1\n> line2\n\n"

    def test_lists_use_dash_bullets(self) -> None:
        """Ordered and unordered lists render identically."""
        expected = "\n- One\n- Two\n\n"
        assert _render("<ul><li>One</li><li> Two </li></ul>") == expected
        assert _render("<ol><li>One</li><li> Two </li></ol>") == expected


class TestCodeBlocks:
    """Tests for fenced code blocks."""

    def test_language_from_data_attribute(self) -> None:
        """``data-language`` wins over the class."""
        html = '<pre data-language="python" class="language-js">x = 1\ny = 2\n</pre>'
        assert _render(html) == "\n```python\nx = 1\ny = 2\n```\n\n"

    def test_language_from_class(self) -> None:
        """The first ``language-*`` class token names the language."""
        assert _render('<pre class="hljs language-js">a()</pre>') == "\n```js\na()\n```\n\n"

    def test_no_language(self) -> None:
        """Without hints the fence has no info string."""
        assert _render("<pre>a</pre>") == "\n```\na\n```\n\n"

    def test_edge_newlines_stripped(self) -> None:
        """Leading and trailing newlines inside the block are dropped."""
        assert _render("<pre>\n\nbody\n\n</pre>") == "\n```\nbody\n```\n\n"

    def test_inline_code(self) -> None:
        """``code`` outside ``pre`` is a backtick span."""
        assert _render("use <code>pip</code> here") == "use `pip` here"


class TestInlineElements:
    """Tests for inline tag rules."""

    def test_emphasis_variants(self) -> None:
        """Bold, italic and strikethrough wrappers."""
        assert _render("<b>b</b><em>e</em><i>i</i><del>d</del><s>s</s><strike>k</strike>") == (
            "**b***e**i*~~d~~~~s~~~~k~~"
        )

    def test_superscript_and_subscript(self) -> None:
        """``sup`` and ``sub`` use caret and tilde markers."""
        assert _render("x<sup>2</sup>H<sub>2</sub>O") == "x^2^H~2~O"

    def test_link_with_title(self) -> None:
        """A title attribute is appended inside the parentheses."""
        assert _render('<a href="https://example.com" title="Home">go</a>') == '[go](https://example.com "Home")'

    def test_link_without_href_is_unwrapped(self) -> None:
        """Missing or empty ``href`` drops the link markup."""
        assert _render("<a>plain</a>") == "plain"
        assert _render('<a href="">plain</a>') == "plain"

    def test_image(self) -> None:
        """Images render from ``alt``, ``src`` and ``title``."""
        assert _render('<img src="a.png" alt="A">') == "![A](a.png)"
        assert _render('<img src="a.png" title="T">') == '![](a.png "T")'


class TestTables:
    """Tests for table rows."""

    def test_header_row_gets_separator(self) -> None:
        """A row with ``th`` cells is followed by the delimiter row."""
        html = "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"
        assert _render(html) == "\n| A | B |\n| --- | --- |\n| 1 | 2 |\n\n"

    def test_sections_are_unwrapped(self) -> None:
        """``thead`` and ``tbody`` add nothing of their own."""
        html = "<table><thead><tr><th>A</th></tr></thead><tbody><tr><td> 1 </td></tr></tbody></table>"
        assert _render(html) == "\n| A |\n| --- |\n| 1 |\n\n"

    def test_cell_content_is_rendered(self) -> None:
        """Cells render their children and are trimmed."""
        html = "<table><tr><td><strong>x</strong> </td><td><em>y</em></td></tr></table>"
        assert _render(html) == "\n| **x** | *y* |\n\n"


class TestPassThroughAndDiscard:
    """Tests for unwrapped and discarded tags."""

    @pytest.mark.parametrize("tag", ["div", "span", "section", "article", "header", "footer", "main", "aside", "nav"])
    def test_containers_are_unwrapped(self, tag: str) -> None:
        """Layout containers render only their children."""
        assert _render(f"<{tag}>inner</{tag}>") == "inner"

    def test_unknown_tags_are_unwrapped(self) -> None:
        """Unrecognized tags keep their content."""
        assert _render("<foo>bar</foo>") == "bar"

    def test_unquoted_attribute_slash_keeps_trailing_text(self) -> None:
        """Text after an element with an unquoted slashed attribute is rendered."""
        assert "hello world" in convert_html_to_markdown("<p><span class=a/b>hello</span> world</p>")
        assert "more" in convert_html_to_markdown("<p><a href=http://x/y>text</a> more</p>")

    @pytest.mark.parametrize("tag", ["script", "style", "noscript"])
    def test_discarded_tags(self, tag: str) -> None:
        """Script-like tags drop their content entirely."""
        assert _render(f"a<{tag}>hidden text</{tag}>b") == "ab"


class TestEntities:
    """Tests for entity decoding."""

    def test_named_entities(self) -> None:
        """The named table is decoded."""
        assert decode_entities("&lt;a&gt; &quot;q&quot; &#39;s&#39; &copy;&reg;&trade;") == "<a> \"q\" 's' ©®™"
        assert decode_entities("a&nbsp;b") == "a b"

    def test_typographic_entities(self) -> None:
        """Dashes, ellipsis and curly quotes."""
        assert decode_entities("&mdash;&ndash;&hellip;") == "—–…"
        assert decode_entities("&lsquo;x&rsquo; &ldquo;y&rdquo;") == "'x' \"y\""

    def test_numeric_references(self) -> None:
        """Decimal and hexadecimal references are decoded."""
        assert decode_entities("&#65;&#x42;&#X;") == "AB&#X;"
        assert decode_entities("&#x20AC;") == "€"

    def test_out_of_range_references_are_kept(self) -> None:
        """References outside the Unicode range or in the surrogate block stay as text."""
        assert decode_entities("&#1114112;") == "&#1114112;"
        assert decode_entities("&#xD800;") == "&#xD800;"

    def test_unknown_named_entity_is_kept(self) -> None:
        """Entities outside the table pass through unchanged."""
        assert decode_entities("&euro;") == "&euro;"

    def test_attributes_are_not_decoded(self) -> None:
        """Only text nodes go through entity decoding."""
        assert _render('<a href="/q?a=1&amp;b=2">x &amp; y</a>') == "[x & y](/q?a=1&amp;b=2)"


class TestPlainText:
    """Tests for markup-free input."""

    @pytest.mark.parametrize(
        "text",
        [
            "hello world",
            "a &amp; b &lt; c",
            "  padded  ",
            "&#8364; 5 &hellip;",
            "line one\nline two",
        ],
    )
    def test_plain_text_round_trip(self, text: str) -> None:
        """Text without markup renders as its decoded form."""
        assert _render(text) == decode_entities(text)

    def test_blank_input_converts_to_empty(self) -> None:
        """Empty and whitespace-only HTML yields no Markdown."""
        assert convert_html_to_markdown("") == ""
        assert convert_html_to_markdown(" \n\t ") == ""
