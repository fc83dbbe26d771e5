"""Forced line breaks left in plain text bodies by the archive's web editor."""

import re
from dataclasses import dataclass

from quotemark.blocks.base import BlockMatch

_HARD_BREAK_PATTERN = re.compile(r"(?:<br>\s*)+")


@dataclass(frozen=True, slots=True)
class HardBreak:
    """A presence-only marker; splits the paragraph and renders nothing."""

    def to_html(self) -> str:
        return ""


def match_hard_break(text: str) -> BlockMatch | None:
    """Find the first run of <br> markers in text."""
    match = _HARD_BREAK_PATTERN.search(text)
    if match is None:
        return None

    return BlockMatch(before=text[: match.start()], block=HardBreak(), after=text[match.end() :])
