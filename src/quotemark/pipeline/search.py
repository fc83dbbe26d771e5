"""Plain text derived from a token stream for search indexing.

Only the author's own prose is indexed: text inside quote blocks belongs to
other messages and is skipped, as are recognized blocks.
"""

from typing import Iterable

from quotemark.pipeline.tokens import Token

# Maximum summary length in characters
SUMMARY_LENGTH = 400


def search_text(tokens: Iterable[Token]) -> str:
    """Collect unquoted prose from a token stream.

    Args:
        tokens: Token stream, before or after block extraction.

    Returns:
        Prose text; each paragraph is followed by a blank line.
    """
    parts: list[str] = []
    quote_level = 0

    for token in tokens:
        if token.kind == "START_QUOTE":
            quote_level += 1
        elif token.kind == "END_QUOTE":
            quote_level -= 1
        elif token.kind == "TEXT":
            if quote_level > 0:
                continue
            parts.append(token.text)
        elif token.kind == "END_PARAGRAPH" and quote_level == 0:
            parts.append("\n")

    return "".join(parts)


def summarize(text: str, length: int = SUMMARY_LENGTH) -> str:
    """Truncate text to at most length characters."""
    return text[:length]
