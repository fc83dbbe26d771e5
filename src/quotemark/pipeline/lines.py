"""Line classification for archived message bodies.

Splits decoded body text into lines and classifies each one:
- Quote depth from leading > markers (including the "> > " nesting variant)
- Space-stuffing removal
- Signature delimiter detection ("-- ")
- Flowed/fixed detection when the body uses format=flowed (RFC 3676)
"""

import re
from dataclasses import dataclass
from typing import Iterable, Literal

LineKind = Literal["EMPTY", "SIGNATURE", "CONTENT", "FLOWED", "FIXED"]

CONTENT_KINDS: frozenset[LineKind] = frozenset({"CONTENT", "FLOWED", "FIXED"})

_QUOTE_CHAR = ">"
_STUFF_CHAR = " "
_FLOW_CHAR = " "
_SIGNATURE_LINE = "-- "

# LF, CRLF and bare CR all terminate a line
_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class Line:
    """A classified line of a message body.

    Attributes:
        kind: Classification of the line.
        quote_depth: Number of quote markers stripped from the line start.
        content: Line text without quote markers, stuffing or flow marker.
    """

    kind: LineKind
    quote_depth: int = 0
    content: str = ""

    @property
    def has_content(self) -> bool:
        """Whether the line carries paragraph text."""
        return self.kind in CONTENT_KINDS


def split_lines(text: str) -> tuple[str, ...]:
    """Split decoded body text into lines without line endings.

    A trailing line terminator does not produce an extra empty line.

    Args:
        text: Decoded message body.

    Returns:
        Tuple of lines.
    """
    if not text:
        return ()

    lines = _LINE_BREAK_PATTERN.split(text)
    if lines[-1] == "":
        lines.pop()

    return tuple(lines)


def _trim_line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _strip_quote_markers(line: str) -> tuple[int, str]:
    """Strip leading quote markers, returning (depth, remainder)."""
    if not line.startswith(_QUOTE_CHAR):
        return 0, line

    depth = 1
    index = 1

    while True:
        if index < len(line) and line[index] == _QUOTE_CHAR:
            index += 1
            depth += 1
        elif index + 1 < len(line) and line[index] == " " and line[index + 1] == _QUOTE_CHAR:
            # Strictly this is a literal "> " inside the outer quote, but the
            # archive's producer writes nested quotes as "> > ".
            index += 2
            depth += 1
        else:
            break

    return depth, line[index:]


class LineClassifier:
    """Classifies raw body lines.

    Every line classifies to exactly one kind; there is no reject state.
    """

    def __init__(self, *, flowed: bool = False) -> None:
        """Initialize the classifier.

        Args:
            flowed: If True, distinguish flowed lines (trailing space) from
                fixed lines, as for format=flowed bodies.
        """
        self._flowed = flowed

    @property
    def flowed(self) -> bool:
        """Whether flow-awareness is enabled."""
        return self._flowed

    def classify(self, raw: str) -> Line:
        """Classify a single raw line.

        Args:
            raw: One line of the body, with or without its line ending.

        Returns:
            The classified Line.
        """
        text = _trim_line_ending(raw)

        if text == _SIGNATURE_LINE:
            return Line(kind="SIGNATURE", content=text)

        quote_depth, content = _strip_quote_markers(text)

        if content.startswith(_STUFF_CHAR):
            content = content[1:]

        # Checked again after stripping: a stuffed line that is not quoted
        # is never a signature delimiter.
        if quote_depth > 0 and content == _SIGNATURE_LINE:
            return Line(kind="SIGNATURE", quote_depth=quote_depth, content=content)

        if not self._flowed:
            if not content.strip():
                return Line(kind="EMPTY", quote_depth=quote_depth)
            return Line(kind="CONTENT", quote_depth=quote_depth, content=content)

        if not content:
            return Line(kind="EMPTY", quote_depth=quote_depth)

        if content.endswith(_FLOW_CHAR):
            return Line(kind="FLOWED", quote_depth=quote_depth, content=content[:-1])

        return Line(kind="FIXED", quote_depth=quote_depth, content=content)

    def classify_all(self, lines: Iterable[str]) -> tuple[Line, ...]:
        """Classify every line in order."""
        return tuple(self.classify(line) for line in lines)
