"""Tests for the HTML Renderer."""

from quotemark.blocks import Divider, HardBreak, HeaderField, MessageHeader
from quotemark.pipeline.renderer import Renderer
from quotemark.pipeline.tokens import (
    END_PARAGRAPH,
    END_QUOTE,
    SIGNATURE_MARKER,
    START_PARAGRAPH,
    START_QUOTE,
    Token,
    block_token,
    text_token,
)


def _paragraph(text: str) -> tuple[Token, ...]:
    return (START_PARAGRAPH, text_token(text), END_PARAGRAPH)


class TestRenderer:
    """Markup and indentation."""

    def test_empty_stream(self) -> None:
        """No tokens render to an empty string."""
        assert Renderer().render(()) == ""

    def test_paragraph(self) -> None:
        """Paragraph text is indented one level."""
        assert Renderer().render(_paragraph("Hello\n")) == "<p>\n  Hello\n</p>\n"

    def test_multiline_text(self) -> None:
        """Every line of a text token is indented."""
        assert Renderer().render(_paragraph("one\ntwo\n")) == "<p>\n  one\n  two\n</p>\n"

    def test_nested_quote(self) -> None:
        """Quotes nest and unwind one level per tag."""
        tokens = (START_QUOTE, START_QUOTE, *_paragraph("deep\n"), END_QUOTE, END_QUOTE)

        assert Renderer().render(tokens) == (
            "<blockquote>\n"
            "  <blockquote>\n"
            "    <p>\n"
            "      deep\n"
            "    </p>\n"
            "  </blockquote>\n"
            "</blockquote>\n"
        )

    def test_text_escaped(self) -> None:
        """Text is HTML-escaped."""
        html = Renderer().render(_paragraph('a < b & "c"\n'))

        assert "a &lt; b &amp; &quot;c&quot;" in html
        assert "<b" not in html

    def test_signature(self) -> None:
        """The signature marker renders as a rule."""
        assert Renderer().render((SIGNATURE_MARKER,)) == "<hr>\n"

    def test_block_in_quote(self) -> None:
        """Blocks are indented to the current level."""
        tokens = (START_QUOTE, block_token(Divider()), END_QUOTE)

        assert Renderer().render(tokens) == "<blockquote>\n  <hr>\n</blockquote>\n"

    def test_multiline_block_indented(self) -> None:
        """Every line of a block's markup is indented."""
        header = MessageHeader(fields=(HeaderField(name="To", value="Bob"),))
        tokens = (START_QUOTE, block_token(header), END_QUOTE)

        assert Renderer().render(tokens) == (
            "<blockquote>\n"
            '  <div class="inline-message-header">\n'
            '    <dl class="field-list">\n'
            "      <dt>To</dt>\n"
            "      <dd>Bob</dd>\n"
            "    </dl>\n"
            "  </div>\n"
            "</blockquote>\n"
        )

    def test_hard_break_renders_nothing(self) -> None:
        """Hard breaks only separate the surrounding paragraphs."""
        tokens = (*_paragraph("a"), block_token(HardBreak()), *_paragraph("b"))

        assert Renderer().render(tokens) == "<p>\n  a\n</p>\n<p>\n  b\n</p>\n"

    def test_blank_line_in_text_not_indented(self) -> None:
        """Empty lines inside text carry no indentation."""
        assert Renderer().render(_paragraph("\nb\n")) == "<p>\n\n  b\n</p>\n"

    def test_custom_indent(self) -> None:
        """The indent string is configurable."""
        assert Renderer(indent="\t").render(_paragraph("x\n")) == "<p>\n\tx\n</p>\n"

    def test_stray_close_does_not_go_negative(self) -> None:
        """A closing tag at level zero is written unindented."""
        assert Renderer().render((END_PARAGRAPH, *_paragraph("x\n"))) == "</p>\n<p>\n  x\n</p>\n"

    def test_only_newlines_split_lines(self) -> None:
        """Other Unicode line separators stay inside their line."""
        assert Renderer().render(_paragraph("a\u2028b\x0cc\n")) == "<p>\n  a\u2028b\x0cc\n</p>\n"

    def test_block_token_without_block(self) -> None:
        """A block token carrying no block renders nothing."""
        assert Token("BLOCK").to_html() == ""
        assert Renderer().render((Token("BLOCK"),)) == ""
