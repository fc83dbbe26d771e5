"""Inline quoted-message header detection.

Replies often paste the header of the message being answered:

    -----Original Message-----
    From: Jane Doe
    Sent: Monday, March 3, 2003 10:15 AM
    To: group@yahoogroups.com
    Subject: Re: meeting

The header starts at the beginning of the paragraph, after a blank line, or
after an "Original Message" banner, and runs until the next blank line.
"""

import html
import re
from dataclasses import dataclass

from quotemark.blocks.base import WS, BlockMatch

FIELD_NAMES: tuple[str, ...] = ("From", "Reply-To", "To", "Subject", "Date", "Sent", "Message")

_FIELD_NAME_PART = "|".join(re.escape(name) for name in FIELD_NAMES)
_BANNER_PART = rf"{WS}-+ ?Original Message ?-+{WS}"

_HEADER_START_PATTERN = re.compile(
    rf"(?:^{_BANNER_PART}\n|^{WS}\n?|\n{WS}(?:{_BANNER_PART})?\n)"
    rf"{WS}(?P<name>{_FIELD_NAME_PART}): +(?P<value>\S)"
)
_FIELD_LABEL_PATTERN = re.compile(rf"^{WS}(?P<name>{_FIELD_NAME_PART}): +(?P<value>\S)", re.MULTILINE)
_HEADER_END_PATTERN = re.compile(rf"^{WS}\n", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class HeaderField:
    """A single header field.

    Attributes:
        name: Field name, one of FIELD_NAMES.
        value: Field value with surrounding whitespace removed.
    """

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class MessageHeader:
    """The header block of an inline quoted message.

    Attributes:
        fields: Header fields in document order.
    """

    fields: tuple[HeaderField, ...]

    def to_html(self) -> str:
        rows = "".join(
            f"    <dt>{html.escape(field.name)}</dt>\n    <dd>{html.escape(field.value)}</dd>\n"
            for field in self.fields
        )
        return (
            '<div class="inline-message-header">\n'
            '  <dl class="field-list">\n'
            f"{rows}"
            "  </dl>\n"
            "</div>"
        )


def match_message_header(text: str) -> BlockMatch | None:
    """Find the first inline message header in text.

    Args:
        text: Accumulated paragraph text.

    Returns:
        BlockMatch whose after text starts past the blank line ending the
        header, or None.
    """
    start = _HEADER_START_PATTERN.search(text)
    if start is None:
        return None

    # (label start, value start) for every field
    positions: list[tuple[int, int]] = [(start.start("name"), start.start("value"))]
    cursor = start.end("name")

    fields_end = len(text)
    after = ""

    end = _HEADER_END_PATTERN.search(text, cursor)
    if end is not None:
        fields_end = end.start()
        after = text[end.end() :]

    while True:
        label = _FIELD_LABEL_PATTERN.search(text, cursor, fields_end)
        if label is None:
            break
        positions.append((label.start("name"), label.start("value")))
        cursor = label.end("name")

    fields: list[HeaderField] = []
    for index, (label_start, value_start) in enumerate(positions):
        value_end = positions[index + 1][0] if index + 1 < len(positions) else fields_end
        name = text[label_start:value_start].split(":", 1)[0]
        fields.append(HeaderField(name=name.strip(), value=text[value_start:value_end].strip()))

    return BlockMatch(
        before=text[: start.start()],
        block=MessageHeader(fields=tuple(fields)),
        after=after,
    )
