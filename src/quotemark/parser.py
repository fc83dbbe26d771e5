"""MessageBodyParser - Main public interface for message body parsing.

Provides three parsing methods:
- render(): HTML fragment only
- parse(): Full result with token stream and search text, raises on bad input
- parse_safe(): Full result, returns None on failure
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from quotemark.config import ParserConfig
from quotemark.exceptions import InvalidInputError
from quotemark.pipeline.extractor import BlockExtractor
from quotemark.pipeline.lines import LineClassifier, split_lines
from quotemark.pipeline.renderer import Renderer
from quotemark.pipeline.search import search_text, summarize
from quotemark.pipeline.tokenizer import Tokenizer
from quotemark.pipeline.tokens import Token

logger = logging.getLogger(__name__)

Body = str | Iterable[str]


@dataclass(frozen=True, slots=True)
class ParsedBody:
    """Full parse result.

    Attributes:
        tokens: Token stream after block extraction.
        html: Rendered HTML fragment.
        search_text: Unquoted prose for indexing.
        summary: Truncated search text.
        has_signature: Whether a signature delimiter was found.
        max_quote_depth: Deepest quote nesting in the body.
    """

    tokens: tuple[Token, ...]
    html: str
    search_text: str
    summary: str
    has_signature: bool
    max_quote_depth: int


def _max_quote_depth(tokens: Iterable[Token]) -> int:
    depth = 0
    deepest = 0

    for token in tokens:
        if token.kind == "START_QUOTE":
            depth += 1
            deepest = max(deepest, depth)
        elif token.kind == "END_QUOTE":
            depth -= 1

    return deepest


class MessageBodyParser:
    """Main class for turning archived plain-text bodies into HTML.

    The parsing pipeline:
    1. Split and classify lines (quote depth, stuffing, flow, signature)
    2. Tokenize into paragraphs and quote blocks
    3. Extract inline blocks from paragraph text
    4. Render HTML and derive search text

    Example:
        parser = MessageBodyParser()

        # HTML only
        html = parser.render(body)

        # Full result (raises on invalid input)
        parsed = parser.parse(body)

        # Safe parsing (returns None on failure)
        parsed = parser.parse_safe(body)
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        """Initialize the parser.

        Args:
            config: Parser settings. Defaults to ParserConfig().
        """
        self._config = config if config is not None else ParserConfig()

        # Pipeline components
        self._classifier = LineClassifier(flowed=self._config.flowed)
        self._tokenizer = Tokenizer()
        self._extractor = BlockExtractor(self._config.matchers)
        self._renderer = Renderer(indent=self._config.indent)

    @property
    def config(self) -> ParserConfig:
        """The parser's configuration."""
        return self._config

    def _lines(self, body: Body) -> tuple[str, ...]:
        if isinstance(body, (bytes, bytearray)):
            raise InvalidInputError(message="Body must be decoded text, got bytes")

        if isinstance(body, str):
            return split_lines(body)

        try:
            lines = tuple(body)
        except TypeError as exc:
            raise InvalidInputError(
                message=f"Body must be a string or an iterable of strings, got {type(body).__name__}"
            ) from exc

        for line in lines:
            if not isinstance(line, str):
                raise InvalidInputError(message=f"Body lines must be strings, got {type(line).__name__}")

        return lines

    def tokenize(self, body: Body) -> tuple[Token, ...]:
        """Tokenize a body and extract inline blocks.

        Args:
            body: Decoded body text, or its lines.

        Returns:
            Balanced token stream.

        Raises:
            InvalidInputError: If the body is bytes or not text.
        """
        lines = self._classifier.classify_all(self._lines(body))
        tokens = self._tokenizer.tokenize(lines)
        extracted = self._extractor.extract(tokens)

        logger.debug(
            "Tokenized %d lines into %d tokens (%d after block extraction)",
            len(lines),
            len(tokens),
            len(extracted),
        )

        return extracted

    def render(self, body: Body) -> str:
        """Render a body as an HTML fragment.

        Raises:
            InvalidInputError: If the body is bytes or not text.
        """
        return self._renderer.render(self.tokenize(body))

    def parse(self, body: Body) -> ParsedBody:
        """Parse a body with full metadata.

        Args:
            body: Decoded body text, or its lines.

        Returns:
            ParsedBody with HTML, tokens and search text.

        Raises:
            InvalidInputError: If the body is bytes or not text.
        """
        tokens = self.tokenize(body)
        text = search_text(tokens)

        return ParsedBody(
            tokens=tokens,
            html=self._renderer.render(tokens),
            search_text=text,
            summary=summarize(text, self._config.summary_length),
            has_signature=any(token.kind == "SIGNATURE" for token in tokens),
            max_quote_depth=_max_quote_depth(tokens),
        )

    def parse_safe(self, body: Body) -> ParsedBody | None:
        """Parse a body, returning None on any failure.

        Args:
            body: Decoded body text, or its lines.

        Returns:
            ParsedBody, or None if parsing failed.
        """
        try:
            return self.parse(body)
        except InvalidInputError as exc:
            logger.warning("Invalid message body: %s", exc)
            return None
        except Exception:
            logger.exception("Unexpected error during parsing")
            return None


def to_html(body: Body, *, flowed: bool = False) -> str:
    """Render a body with default settings.

    Args:
        body: Decoded body text, or its lines.
        flowed: Whether the body uses format=flowed.

    Returns:
        HTML fragment.
    """
    return MessageBodyParser(ParserConfig(flowed=flowed)).render(body)
