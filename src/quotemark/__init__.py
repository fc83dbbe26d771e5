"""quotemark - Render archived plain-text mailing list bodies as HTML."""

from quotemark.blocks import (
    Attribution,
    Block,
    BlockMatch,
    Divider,
    HardBreak,
    HeaderField,
    MessageHeader,
)
from quotemark.config import ParserConfig, load_config
from quotemark.exceptions import (
    ConfigError,
    InvalidInputError,
    QuotemarkError,
)
from quotemark.parser import MessageBodyParser, ParsedBody, to_html
from quotemark.pipeline import (
    BlockExtractor,
    Line,
    LineClassifier,
    LineKind,
    Renderer,
    Token,
    Tokenizer,
    TokenizerState,
    TokenKind,
    search_text,
    split_lines,
)

__version__ = "0.1.0"

__all__ = [
    "Attribution",
    "Block",
    "BlockExtractor",
    "BlockMatch",
    "ConfigError",
    "Divider",
    "HardBreak",
    "HeaderField",
    "InvalidInputError",
    "Line",
    "LineClassifier",
    "LineKind",
    "load_config",
    "MessageBodyParser",
    "MessageHeader",
    "ParsedBody",
    "ParserConfig",
    "QuotemarkError",
    "Renderer",
    "search_text",
    "split_lines",
    "to_html",
    "Token",
    "Tokenizer",
    "TokenizerState",
    "TokenKind",
]
