"""Inline block extraction.

Runs after tokenization, on the accumulated text of each closed paragraph,
so that quote and paragraph boundaries are settled independently of block
content. A paragraph is split around the first block found by the
highest-priority matcher, and both sides are searched again.
"""

from typing import Iterable, Sequence

from quotemark.blocks import DEFAULT_MATCHERS, BlockMatch, BlockMatcher
from quotemark.pipeline.tokens import (
    END_PARAGRAPH,
    START_PARAGRAPH,
    Token,
    block_token,
    text_token,
)


class BlockExtractor:
    """Replaces paragraphs with prose paragraphs and recognized blocks."""

    def __init__(self, matchers: Sequence[BlockMatcher] = DEFAULT_MATCHERS) -> None:
        """Initialize the extractor.

        Args:
            matchers: Block matchers in priority order.
        """
        self._matchers = tuple(matchers)

    def find_blocks(self, text: str) -> tuple[Token, ...]:
        """Split paragraph text into paragraphs and blocks.

        The first matcher, in priority order, that matches anywhere in the
        text wins. Text before and after the match is searched again
        independently, so blocks never overlap.

        Args:
            text: Raw text of one paragraph.

        Returns:
            Tokens replacing the paragraph; empty if the text is blank.
        """
        tokens: list[Token] = []
        remaining = text

        # Text after a block is consumed iteratively; only the text before
        # it recurses, and that text holds no match of the winning matcher
        # or any higher-priority one.
        while True:
            match = self._first_match(remaining)
            if match is None:
                break

            tokens.extend(self.find_blocks(match.before))
            tokens.append(block_token(match.block))
            remaining = match.after

        if remaining.strip():
            tokens.extend((START_PARAGRAPH, text_token(remaining), END_PARAGRAPH))

        return tuple(tokens)

    def _first_match(self, text: str) -> BlockMatch | None:
        for matcher in self._matchers:
            match = matcher(text)
            if match is not None:
                return match
        return None

    def extract(self, tokens: Iterable[Token]) -> tuple[Token, ...]:
        """Run block extraction over every paragraph of a token stream.

        Args:
            tokens: Tokenizer output.

        Returns:
            Token stream with each paragraph replaced by find_blocks output.
        """
        output: list[Token] = []
        paragraph: list[str] = []

        for token in tokens:
            if token.kind == "START_PARAGRAPH":
                paragraph = []
            elif token.kind == "END_PARAGRAPH":
                output.extend(self.find_blocks("".join(paragraph)))
                paragraph = []
            elif token.kind == "TEXT":
                paragraph.append(token.text)
            else:
                output.append(token)

        return tuple(output)
