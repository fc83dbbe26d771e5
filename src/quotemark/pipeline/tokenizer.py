"""Paragraph and quote tokenizer.

A single-pass state machine over classified lines. The state is explicit
(TokenizerState) and each transition is a pure function of the state and
one line, so every transition can be exercised on its own.

The archive's producer predates RFC 3676 and diverges from it in one place:
a quote block whose last line is flowed continues on the next line even if
that line has a lower quote depth. The tokenizer therefore keeps one line
of lookback (the previous line's kind).
"""

from dataclasses import dataclass
from typing import Iterable

from quotemark.pipeline.lines import Line, LineKind
from quotemark.pipeline.tokens import (
    END_PARAGRAPH,
    END_QUOTE,
    SIGNATURE_MARKER,
    START_PARAGRAPH,
    START_QUOTE,
    Token,
    text_token,
)


@dataclass(frozen=True, slots=True)
class TokenizerState:
    """State carried between lines.

    Attributes:
        quote_depth: Number of currently open quote blocks.
        previous_kind: Kind of the previously consumed line.
    """

    quote_depth: int = 0
    previous_kind: LineKind = "EMPTY"

    @property
    def paragraph_open(self) -> bool:
        """Whether a paragraph is currently open.

        A FIXED line closes its paragraph as soon as its text is emitted,
        so only CONTENT and FLOWED lines leave one open.
        """
        return self.previous_kind in ("CONTENT", "FLOWED")


INITIAL_STATE = TokenizerState()


def _open_content(line: Line, tokens: list[Token]) -> None:
    """Emit the paragraph text of a line that starts a new paragraph."""
    tokens.append(START_PARAGRAPH)
    tokens.append(text_token(line.content + "\n"))
    if line.kind == "FIXED":
        tokens.append(END_PARAGRAPH)


def step(state: TokenizerState, line: Line) -> tuple[TokenizerState, tuple[Token, ...]]:
    """Consume one line.

    Args:
        state: State before the line.
        line: The classified line.

    Returns:
        Tuple of (state after the line, tokens emitted for the line).
    """
    tokens: list[Token] = []
    depth = state.quote_depth

    if line.kind == "SIGNATURE":
        if state.paragraph_open:
            tokens.append(END_PARAGRAPH)
        tokens.append(SIGNATURE_MARKER)

    elif line.quote_depth > depth:
        if state.paragraph_open:
            tokens.append(END_PARAGRAPH)
        tokens.extend(START_QUOTE for _ in range(line.quote_depth - depth))
        depth = line.quote_depth
        if line.has_content:
            _open_content(line, tokens)

    elif line.quote_depth < depth and not (line.has_content and state.previous_kind == "FLOWED"):
        if state.paragraph_open:
            tokens.append(END_PARAGRAPH)
        tokens.extend(END_QUOTE for _ in range(depth - line.quote_depth))
        depth = line.quote_depth
        if line.has_content:
            _open_content(line, tokens)

    elif line.kind == "EMPTY":
        if state.paragraph_open:
            tokens.append(END_PARAGRAPH)

    elif not state.paragraph_open:
        _open_content(line, tokens)

    else:
        # Continues the open paragraph. A lower depth lands here only after
        # a flowed line, in which case the quote block carries on.
        tokens.append(text_token(line.content + "\n"))
        if line.kind == "FIXED":
            tokens.append(END_PARAGRAPH)

    return TokenizerState(quote_depth=depth, previous_kind=line.kind), tuple(tokens)


def finish(state: TokenizerState) -> tuple[Token, ...]:
    """Close everything still open at end of input.

    Args:
        state: State after the last line.

    Returns:
        Closing tokens: the open paragraph first, then quotes innermost first.
    """
    tokens: list[Token] = []

    if state.paragraph_open:
        tokens.append(END_PARAGRAPH)

    tokens.extend(END_QUOTE for _ in range(state.quote_depth))

    return tuple(tokens)


class Tokenizer:
    """Turns classified lines into a balanced stream of structural tokens."""

    def tokenize(self, lines: Iterable[Line]) -> tuple[Token, ...]:
        """Tokenize a whole message body.

        Args:
            lines: Classified lines in document order.

        Returns:
            Token stream; paragraph and quote tokens are always balanced.
        """
        state = INITIAL_STATE
        tokens: list[Token] = []

        for line in lines:
            state, emitted = step(state, line)
            tokens.extend(emitted)

        tokens.extend(finish(state))

        return tuple(tokens)
