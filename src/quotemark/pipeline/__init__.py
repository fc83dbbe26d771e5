"""Pipeline components for message body parsing."""

from quotemark.pipeline.extractor import BlockExtractor
from quotemark.pipeline.lines import CONTENT_KINDS, Line, LineClassifier, LineKind, split_lines
from quotemark.pipeline.renderer import DEFAULT_INDENT, Renderer
from quotemark.pipeline.search import SUMMARY_LENGTH, search_text, summarize
from quotemark.pipeline.tokenizer import INITIAL_STATE, Tokenizer, TokenizerState, finish, step
from quotemark.pipeline.tokens import (
    END_PARAGRAPH,
    END_QUOTE,
    SIGNATURE_MARKER,
    START_PARAGRAPH,
    START_QUOTE,
    TAG_TYPES,
    TagType,
    Token,
    TokenKind,
    block_token,
    is_balanced,
    text_token,
)

__all__ = [
    "BlockExtractor",
    "block_token",
    "CONTENT_KINDS",
    "DEFAULT_INDENT",
    "END_PARAGRAPH",
    "END_QUOTE",
    "finish",
    "INITIAL_STATE",
    "is_balanced",
    "Line",
    "LineClassifier",
    "LineKind",
    "Renderer",
    "search_text",
    "SIGNATURE_MARKER",
    "split_lines",
    "START_PARAGRAPH",
    "START_QUOTE",
    "step",
    "summarize",
    "SUMMARY_LENGTH",
    "TAG_TYPES",
    "TagType",
    "text_token",
    "Token",
    "Tokenizer",
    "TokenizerState",
    "TokenKind",
]
