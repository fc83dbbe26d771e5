"""Shared types for inline block matchers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from quotemark.blocks import Block

# Horizontal whitespace only; \s would let patterns run across lines
WS = r"[\t ]*"


@dataclass(frozen=True, slots=True)
class BlockMatch:
    """A block found inside paragraph text.

    Attributes:
        before: Unmatched text preceding the block.
        block: The recognized block.
        after: Unmatched text following the block.
    """

    before: str
    block: Block
    after: str


BlockMatcher = Callable[[str], "BlockMatch | None"]
