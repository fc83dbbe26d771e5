"""Inline blocks recognized inside paragraph text.

The set of block kinds is closed. Matchers are listed in priority order:
hard breaks and dividers come before the more permissive header and
attribution patterns, which could otherwise swallow them.
"""

from quotemark.blocks.attribution import Attribution, match_attribution
from quotemark.blocks.base import BlockMatch, BlockMatcher
from quotemark.blocks.divider import Divider, match_divider
from quotemark.blocks.hard_break import HardBreak, match_hard_break
from quotemark.blocks.header import FIELD_NAMES, HeaderField, MessageHeader, match_message_header

Block = HardBreak | Divider | MessageHeader | Attribution

MATCHERS_BY_NAME: dict[str, BlockMatcher] = {
    "hard_break": match_hard_break,
    "divider": match_divider,
    "message_header": match_message_header,
    "attribution": match_attribution,
}

BLOCK_NAMES: tuple[str, ...] = tuple(MATCHERS_BY_NAME)

DEFAULT_MATCHERS: tuple[BlockMatcher, ...] = tuple(MATCHERS_BY_NAME.values())

__all__ = [
    "Attribution",
    "Block",
    "BLOCK_NAMES",
    "BlockMatch",
    "BlockMatcher",
    "DEFAULT_MATCHERS",
    "Divider",
    "FIELD_NAMES",
    "HardBreak",
    "HeaderField",
    "MATCHERS_BY_NAME",
    "MessageHeader",
    "match_attribution",
    "match_divider",
    "match_hard_break",
    "match_message_header",
]
