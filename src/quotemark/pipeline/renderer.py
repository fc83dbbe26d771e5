"""HTML rendering of a token stream.

Opening tokens are written and then increase the indent; closing tokens
decrease it first. Each token supplies its own markup fragment, and every
line of a fragment is indented to the current level.
"""

from typing import Iterable

from quotemark.pipeline.tokens import Token

DEFAULT_INDENT = "  "


class Renderer:
    """Renders tokens as a pretty-printed HTML fragment."""

    def __init__(self, indent: str = DEFAULT_INDENT) -> None:
        """Initialize the renderer.

        Args:
            indent: String repeated once per nesting level.
        """
        self._indent = indent

    def render(self, tokens: Iterable[Token]) -> str:
        """Render a token stream.

        Args:
            tokens: Balanced token stream.

        Returns:
            HTML fragment; empty string for an empty stream.
        """
        output: list[str] = []
        level = 0

        for token in tokens:
            tag_type = token.tag_type

            if tag_type == "CLOSE":
                level = max(level - 1, 0)

            self._write(output, token.to_html(), level)

            if tag_type == "OPEN":
                level += 1

        return "".join(output)

    def _write(self, output: list[str], fragment: str, level: int) -> None:
        prefix = self._indent * level

        lines = fragment.split("\n")
        if lines[-1] == "":
            lines.pop()

        for line in lines:
            output.append(f"{prefix}{line}\n" if line else "\n")
