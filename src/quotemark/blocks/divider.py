"""Horizontal divider detection.

A divider is a line made only of two or more dashes, underscores or hashes,
optionally surrounded by horizontal whitespace.
"""

import re
from dataclasses import dataclass

from quotemark.blocks.base import WS, BlockMatch

_DIVIDER_PATTERN = re.compile(rf"^{WS}(?:-{{2,}}|_{{2,}}|#{{2,}}){WS}$", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class Divider:
    """A horizontal rule."""

    def to_html(self) -> str:
        return "<hr>"


def match_divider(text: str) -> BlockMatch | None:
    """Find the first divider line in text.

    Args:
        text: Accumulated paragraph text.

    Returns:
        BlockMatch splitting the text around the divider, or None.
    """
    match = _DIVIDER_PATTERN.search(text)
    if match is None:
        return None

    return BlockMatch(before=text[: match.start()], block=Divider(), after=text[match.end() :])
