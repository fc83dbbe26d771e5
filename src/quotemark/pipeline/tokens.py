"""Structural tokens produced by the tokenizer and block extractor."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Literal

if TYPE_CHECKING:
    from quotemark.blocks import Block

TokenKind = Literal[
    "START_PARAGRAPH",
    "END_PARAGRAPH",
    "START_QUOTE",
    "END_QUOTE",
    "SIGNATURE",
    "TEXT",
    "BLOCK",
]

TagType = Literal["OPEN", "CLOSE", "SELF_CLOSING"]

TAG_TYPES: dict[TokenKind, TagType] = {
    "START_PARAGRAPH": "OPEN",
    "END_PARAGRAPH": "CLOSE",
    "START_QUOTE": "OPEN",
    "END_QUOTE": "CLOSE",
    "SIGNATURE": "SELF_CLOSING",
    "TEXT": "SELF_CLOSING",
    "BLOCK": "SELF_CLOSING",
}

_MARKUP: dict[TokenKind, str] = {
    "START_PARAGRAPH": "<p>",
    "END_PARAGRAPH": "</p>",
    "START_QUOTE": "<blockquote>",
    "END_QUOTE": "</blockquote>",
    "SIGNATURE": "<hr>",
}

# Open/close pairs checked by is_balanced
_PAIRS: tuple[tuple[TokenKind, TokenKind], ...] = (
    ("START_PARAGRAPH", "END_PARAGRAPH"),
    ("START_QUOTE", "END_QUOTE"),
)


@dataclass(frozen=True, slots=True)
class Token:
    """An element of the structural token stream.

    Attributes:
        kind: Token variant.
        text: Raw (unescaped) text, for TEXT tokens only.
        block: The recognized block, for BLOCK tokens only.
    """

    kind: TokenKind
    text: str = ""
    block: Block | None = None

    @property
    def tag_type(self) -> TagType:
        """How the token affects render indentation."""
        return TAG_TYPES[self.kind]

    def to_html(self) -> str:
        """Markup fragment for this token."""
        if self.kind == "TEXT":
            return html.escape(self.text)
        if self.kind == "BLOCK":
            if self.block is None:
                return ""
            return self.block.to_html()
        return _MARKUP[self.kind]


START_PARAGRAPH = Token("START_PARAGRAPH")
END_PARAGRAPH = Token("END_PARAGRAPH")
START_QUOTE = Token("START_QUOTE")
END_QUOTE = Token("END_QUOTE")
SIGNATURE_MARKER = Token("SIGNATURE")


def text_token(text: str) -> Token:
    """Create a TEXT token."""
    return Token("TEXT", text=text)


def block_token(block: Block) -> Token:
    """Create a BLOCK token."""
    return Token("BLOCK", block=block)


def is_balanced(tokens: Iterable[Token]) -> bool:
    """Check that paragraph and quote tokens nest correctly.

    Every opening token must be closed later and no prefix of the stream
    may close more than it has opened.

    Args:
        tokens: A token stream.

    Returns:
        True if the stream is well-formed.
    """
    depths = {opener: 0 for opener, _ in _PAIRS}
    closers = {closer: opener for opener, closer in _PAIRS}

    for token in tokens:
        if token.kind in depths:
            depths[token.kind] += 1
        elif token.kind in closers:
            opener = closers[token.kind]
            depths[opener] -= 1
            if depths[opener] < 0:
                return False

    return all(depth == 0 for depth in depths.values())
