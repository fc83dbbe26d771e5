"""Tests for the BlockExtractor component."""

import datetime as dt

from quotemark.blocks import Attribution, Divider, HardBreak, match_divider
from quotemark.pipeline.extractor import BlockExtractor
from quotemark.pipeline.lines import LineClassifier
from quotemark.pipeline.tokenizer import Tokenizer
from quotemark.pipeline.tokens import (
    END_PARAGRAPH,
    END_QUOTE,
    SIGNATURE_MARKER,
    START_PARAGRAPH,
    START_QUOTE,
    Token,
    block_token,
    is_balanced,
    text_token,
)


def _extract(lines: list[str], extractor: BlockExtractor | None = None) -> tuple[Token, ...]:
    """Helper to run classification, tokenization and block extraction."""
    tokens = Tokenizer().tokenize(LineClassifier().classify_all(lines))
    return (extractor or BlockExtractor()).extract(tokens)


def _paragraph(text: str) -> tuple[Token, ...]:
    return (START_PARAGRAPH, text_token(text), END_PARAGRAPH)


class TestFindBlocks:
    """Block search within one paragraph's text."""

    def test_plain_text(self) -> None:
        """Text without blocks stays a single paragraph."""
        assert BlockExtractor().find_blocks("plain\n") == _paragraph("plain\n")

    def test_blank_text(self) -> None:
        """Blank text produces nothing."""
        assert BlockExtractor().find_blocks("") == ()
        assert BlockExtractor().find_blocks("  \n") == ()

    def test_divider_only(self) -> None:
        """A paragraph made of a divider becomes just the block."""
        assert BlockExtractor().find_blocks("----------\n") == (block_token(Divider()),)

    def test_text_around_block(self) -> None:
        """Text on both sides becomes separate paragraphs."""
        tokens = BlockExtractor().find_blocks("above\n----\nbelow\n")

        assert tokens == (
            *_paragraph("above\n"),
            block_token(Divider()),
            *_paragraph("\nbelow\n"),
        )

    def test_recursion_into_both_sides(self) -> None:
        """Both sides of a match are searched again."""
        tokens = BlockExtractor().find_blocks("a<br>b\n----\nc\n")

        assert tokens == (
            *_paragraph("a"),
            block_token(HardBreak()),
            *_paragraph("b\n"),
            block_token(Divider()),
            *_paragraph("\nc\n"),
        )

    def test_priority_over_position(self) -> None:
        """A higher-priority block is split out first even if it comes later."""
        tokens = BlockExtractor().find_blocks("On 3/4/03, Jane wrote:\n----\n")

        assert tokens == (
            block_token(Attribution(name="Jane", date=dt.date(2003, 3, 4))),
            block_token(Divider()),
        )

    def test_restricted_matchers(self) -> None:
        """Only the configured matchers are used."""
        extractor = BlockExtractor(matchers=(match_divider,))

        assert extractor.find_blocks("a<br>b\n") == _paragraph("a<br>b\n")


class TestExtract:
    """Extraction over a whole token stream."""

    def test_divider_line(self) -> None:
        """A standalone divider line becomes a block with no paragraph."""
        assert _extract(["----------"]) == (block_token(Divider()),)

    def test_paragraph_split_by_divider(self) -> None:
        """A divider inside a paragraph splits it."""
        tokens = _extract(["Hello", "----", "World"])

        assert tokens == (
            *_paragraph("Hello\n"),
            block_token(Divider()),
            *_paragraph("\nWorld\n"),
        )

    def test_quotes_and_signature_pass_through(self) -> None:
        """Non-paragraph tokens are kept in place."""
        tokens = _extract(["> quoted", "-- ", "sig"])

        assert tokens == (
            START_QUOTE,
            *_paragraph("quoted\n"),
            SIGNATURE_MARKER,
            END_QUOTE,
            *_paragraph("sig\n"),
        )

    def test_attribution_before_quote(self) -> None:
        """An attribution paragraph followed by its quote."""
        tokens = _extract(['--- In group@yahoogroups.com, "Jane Doe" <jane@x.com> wrote:', "> Original"])

        assert tokens == (
            block_token(Attribution(name="Jane Doe")),
            START_QUOTE,
            *_paragraph("Original\n"),
            END_QUOTE,
        )

    def test_multiline_paragraph_text_joined(self) -> None:
        """Text tokens of a paragraph are searched as one string."""
        tokens = _extract(["first", "second"])

        assert tokens == _paragraph("first\nsecond\n")

    def test_balanced_after_extraction(self) -> None:
        """Extraction keeps the stream balanced."""
        lines = [
            "Hi<br>there",
            "",
            "From: Jane",
            "To: Bob",
            "",
            "> ----",
            "> On 3/4/03, Jane wrote:",
            ">> deep",
        ]

        assert is_balanced(_extract(lines))

    def test_empty_stream(self) -> None:
        """No tokens in, no tokens out."""
        assert BlockExtractor().extract(()) == ()


class TestManyBlocks:
    """Paragraphs holding a large number of blocks."""

    def test_hard_break_on_every_line(self) -> None:
        """A long paragraph with a <br> per line is split without exhausting the stack."""
        tokens = _extract([f"line {i}<br>" for i in range(2000)])

        assert sum(1 for token in tokens if token.kind == "BLOCK") == 2000
        assert [token.text for token in tokens if token.kind == "TEXT"] == [f"line {i}" for i in range(2000)]
        assert is_balanced(tokens)

    def test_blocks_before_and_after_lower_priority_blocks(self) -> None:
        """Blocks found before each higher-priority block keep document order."""
        tokens = BlockExtractor().find_blocks("--- Jane Doe wrote:\n----\n--- Bob wrote:\n----\ntail\n")

        assert tokens == (
            block_token(Attribution(name="Jane Doe")),
            block_token(Divider()),
            block_token(Attribution(name="Bob")),
            block_token(Divider()),
            *_paragraph("\ntail\n"),
        )
