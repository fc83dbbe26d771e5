"""Attribution byline detection.

Recognizes the lines mail clients and the archive's web interface put above a
quoted reply, such as:

    On Mon, 3 Mar 2003 10:15:00 -0800, "Jane Doe" <jane@example.com> wrote:
    --- In group@yahoogroups.com, Jane Doe <jane@example.com> wrote:
    --- Jane Doe wrote:

Each attribution shape is a single regular expression in which the name, date
and time positions are alternations of every supported format. Every format
alternative is its own named group, so the format that actually matched is
found by checking which group participated. The matched date and time are
then parsed with that format; a value that matches syntactically but does not
parse (e.g. month 13) moves on to the next shape.
"""

import datetime as dt
import html
import logging
import re
from dataclasses import dataclass, field
from typing import Literal

from quotemark.blocks.base import WS, BlockMatch

logger = logging.getLogger(__name__)

CaptureKind = Literal["name", "date", "time"]

# A name never spans lines
_NAME_PART = r'(?:[^<>,"\s]|[^<>,"\s][^<>,"\n]*[^<>,"\s])'
_EMAIL_PART = r"[^<>@\s]+@[^<>@\s]*"
_GROUP_EMAIL_PART = r"[^\s@]+@(?:yahoogroups\.com|y?\.{3})"
_MONTH_PART = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)"
_WEEKDAY_PART = r"(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)"

# Trailing parenthesized zone abbreviation, e.g. " (PST)"
_ZONE_NAME_PATTERN = re.compile(r"\s+\([A-Z]{2,5}\)$")


@dataclass(frozen=True, slots=True)
class _Format:
    """One way of spelling a name, date or time.

    The captured value is the part matched by core; prefix and suffix must
    match around it but are not captured.
    """

    key: str
    core: str
    prefix: str = ""
    suffix: str = ""
    strptime_format: str = ""
    has_timezone: bool = False

    def regex(self, kind: CaptureKind) -> str:
        return f"{self.prefix}(?P<{kind}_{self.key}>{self.core}){self.suffix}"


NAME_FORMATS: tuple[_Format, ...] = (
    _Format("quoted_name_duplicate_email", _NAME_PART, '"', rf'\s+<{_EMAIL_PART}>"\s+<{_EMAIL_PART}>'),
    _Format("quoted_name_email", _NAME_PART, '"', rf'"\s+<{_EMAIL_PART}>'),
    _Format("name_email", _NAME_PART, "", rf"\s+<{_EMAIL_PART}>"),
    _Format("email", _EMAIL_PART, "<", ">"),
    _Format("quoted_name", _NAME_PART, '"', '"'),
    _Format("name", _NAME_PART),
)

# Only formats carrying an address; used where a bare name would match too much
EMAIL_NAME_FORMATS: tuple[_Format, ...] = NAME_FORMATS[:4]

DATE_FORMATS: tuple[_Format, ...] = (
    _Format("long_dmy_weekday", rf"{_WEEKDAY_PART}, \d{{1,2}} {_MONTH_PART} \d{{4}}", strptime_format="%a, %d %b %Y"),
    _Format("long_mdy_weekday", rf"{_WEEKDAY_PART}, {_MONTH_PART} \d{{1,2}}, \d{{4}}", strptime_format="%a, %b %d, %Y"),
    _Format("long_dmy", rf"\d{{1,2}} {_MONTH_PART} \d{{4}}", strptime_format="%d %b %Y"),
    _Format("long_mdy", rf"{_MONTH_PART} \d{{1,2}}, \d{{4}}", strptime_format="%b %d, %Y"),
    _Format("iso_weekday", rf"{_WEEKDAY_PART}, \d{{4}}-\d{{2}}-\d{{2}}", strptime_format="%a, %Y-%m-%d"),
    _Format("iso", r"\d{4}-\d{2}-\d{2}", strptime_format="%Y-%m-%d"),
    _Format("short_padded_weekday", rf"{_WEEKDAY_PART}, \d{{2}}/\d{{2}}/\d{{2}}", strptime_format="%a, %m/%d/%y"),
    _Format("short_weekday", rf"{_WEEKDAY_PART}, \d{{1,2}}/\d{{1,2}}/\d{{2}}", strptime_format="%a, %m/%d/%y"),
    _Format("short_padded", r"\d{2}/\d{2}/\d{2}", strptime_format="%m/%d/%y"),
    _Format("short", r"\d{1,2}/\d{1,2}/\d{2}", strptime_format="%m/%d/%y"),
)

TIME_FORMATS: tuple[_Format, ...] = (
    _Format(
        "long_zone_name",
        r"\d{2}:\d{2}:\d{2} [+-]\d{4} \([A-Z]{2,5}\)",
        strptime_format="%H:%M:%S %z",
        has_timezone=True,
    ),
    _Format("long", r"\d{2}:\d{2}:\d{2} [+-]\d{4}", strptime_format="%H:%M:%S %z", has_timezone=True),
    _Format("short_12hr", r"\d{1,2}:\d{2} (?:AM|PM)", strptime_format="%I:%M %p"),
    _Format("short_24hr", r"\d{1,2}:\d{2}", strptime_format="%H:%M"),
)


def _alternation(kind: CaptureKind, formats: tuple[_Format, ...]) -> str:
    return "(?:" + "|".join(fmt.regex(kind) for fmt in formats) + ")"


@dataclass(frozen=True, slots=True)
class _AttributionShape:
    """A family of attribution lines sharing one sentence structure.

    Attributes:
        key: Identifier used in log messages.
        template: %-style template with ws, name, date, time and group
            placeholders.
        name_formats: Name spellings accepted by this shape.
        date_formats: Date spellings, empty if the shape has no date.
        time_formats: Time spellings, empty if the shape has no time.
    """

    key: str
    template: str
    name_formats: tuple[_Format, ...]
    date_formats: tuple[_Format, ...] = ()
    time_formats: tuple[_Format, ...] = ()
    pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        regex = self.template % {
            "ws": WS,
            "group": _GROUP_EMAIL_PART,
            "name": _alternation("name", self.name_formats),
            "date": _alternation("date", self.date_formats),
            "time": _alternation("time", self.time_formats),
        }
        object.__setattr__(self, "pattern", re.compile(regex, re.MULTILINE))

    def formats_of(self, kind: CaptureKind) -> tuple[_Format, ...]:
        if kind == "name":
            return self.name_formats
        if kind == "date":
            return self.date_formats
        return self.time_formats


def matched_format(
    shape: _AttributionShape, match: re.Match[str], kind: CaptureKind
) -> tuple[_Format, str] | None:
    """Find which format alternative of a capture kind participated in a match.

    Args:
        shape: The shape whose pattern produced the match.
        match: A successful match of shape.pattern.
        kind: Which capture to look up.

    Returns:
        Tuple of (winning format, captured text), or None if the shape has no
        capture of that kind.
    """
    for fmt in shape.formats_of(kind):
        value = match.group(f"{kind}_{fmt.key}")
        if value is not None:
            return fmt, value
    return None


SHAPES: tuple[_AttributionShape, ...] = (
    _AttributionShape(
        key="date_time",
        template=r"^%(ws)s(?:-{2,3}\s+)?On\s+%(date)s\s+(?:at\s+)?%(time)s,?\s+%(name)s\s+wrote:\s+",
        name_formats=NAME_FORMATS,
        date_formats=DATE_FORMATS,
        time_formats=TIME_FORMATS,
    ),
    _AttributionShape(
        key="date",
        template=r"^%(ws)s(?:-{2,3}\s+)?On\s+%(date)s,?\s+%(name)s\s+wrote:\s+",
        name_formats=NAME_FORMATS,
        date_formats=DATE_FORMATS,
    ),
    _AttributionShape(
        key="group",
        template=r"^%(ws)s(?:-{2,3}\s+)?In\s+%(group)s,\s+%(name)s\s+wrote:\s+",
        name_formats=NAME_FORMATS,
    ),
    _AttributionShape(
        key="dashes",
        template=r"^%(ws)s-{2,3}\s+%(name)s\s+wrote:\s+",
        name_formats=NAME_FORMATS,
    ),
    _AttributionShape(
        key="bare",
        template=r"^%(ws)s%(name)s%(ws)swrote:\s+",
        name_formats=EMAIL_NAME_FORMATS,
    ),
)

_QUOTE_ICON = (
    '<span class="inline-icon" aria-hidden="true">\n'
    '  <svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" fill="currentColor"'
    ' class="bi bi-quote" viewBox="0 0 16 16">\n'
    '    <path d="M12 12a1 1 0 0 0 1-1V8.558a1 1 0 0 0-1-1h-1.388c0-.351.021-.703.062-1.054'
    ".062-.372.166-.703.31-.992.145-.29.331-.517.559-.683.227-.186.516-.279.868-.279V3"
    "c-.579 0-1.085.124-1.52.372a3.322 3.322 0 0 0-1.085.992 4.92 4.92 0 0 0-.62 1.458"
    "A7.712 7.712 0 0 0 9 7.558V11a1 1 0 0 0 1 1h2Zm-6 0a1 1 0 0 0 1-1V8.558a1 1 0 0 0-1-1"
    "H4.612c0-.351.021-.703.062-1.054.062-.372.166-.703.31-.992.145-.29.331-.517.559-.683"
    ".227-.186.516-.279.868-.279V3c-.579 0-1.085.124-1.52.372a3.322 3.322 0 0 0-1.085.992"
    ' 4.92 4.92 0 0 0-.62 1.458A7.712 7.712 0 0 0 3 7.558V11a1 1 0 0 0 1 1h2Z"/>\n'
    "  </svg>\n"
    "</span>"
)


@dataclass(frozen=True, slots=True)
class Attribution:
    """A byline introducing a quoted reply.

    Attributes:
        name: Who is being quoted (a display name or an address).
        date: Date of the quoted message, if stated.
        time: Time of day, if stated. In UTC when has_timezone is True.
        has_timezone: Whether the stated time carried a UTC offset.
    """

    name: str
    date: dt.date | None = None
    time: dt.time | None = None
    has_timezone: bool = False

    def byline(self) -> str:
        """The attribution sentence as HTML."""
        name = html.escape(self.name)

        if self.date is None:
            return f"{name} said:"

        formatted_date = f"{self.date.day} {self.date:%B %Y}"

        if self.time is None:
            return f"On {formatted_date}, {name} said:"

        zone = "UTC" if self.has_timezone else "<em>(local time)</em>"
        return f"On {formatted_date} at {self.time:%H:%M} {zone}, {name} said:"

    def to_html(self) -> str:
        icon = "\n".join(f"  {line}" for line in _QUOTE_ICON.split("\n"))
        return f'<div class="inline-quote-attribution">\n{icon}\n  {self.byline()}\n</div>'


def _parse_timestamp(
    shape: _AttributionShape, match: re.Match[str]
) -> tuple[dt.date | None, dt.time | None]:
    """Parse the date and time captured by a shape's match.

    Raises:
        ValueError: If a captured value does not parse with its format.
    """
    parsed_date: dt.date | None = None
    parsed_time: dt.time | None = None

    date_capture = matched_format(shape, match, "date")
    if date_capture is not None:
        fmt, value = date_capture
        parsed_date = dt.datetime.strptime(value, fmt.strptime_format).date()

    time_capture = matched_format(shape, match, "time")
    if time_capture is not None:
        fmt, value = time_capture
        parsed = dt.datetime.strptime(_ZONE_NAME_PATTERN.sub("", value), fmt.strptime_format)

        if fmt.has_timezone and parsed_date is not None:
            # Normalize to UTC; the date may roll over
            moment = dt.datetime.combine(parsed_date, parsed.timetz()).astimezone(dt.timezone.utc)
            parsed_date, parsed_time = moment.date(), moment.time()
        else:
            parsed_time = parsed.time()

    return parsed_date, parsed_time


def match_attribution(text: str) -> BlockMatch | None:
    """Find the first attribution byline in text.

    Shapes are tried in order; within a shape only the first match is
    considered.

    Args:
        text: Accumulated paragraph text.

    Returns:
        BlockMatch splitting the text around the byline, or None.
    """
    for shape in SHAPES:
        match = shape.pattern.search(text)
        if match is None:
            continue

        name_capture = matched_format(shape, match, "name")
        if name_capture is None:
            continue
        _, name = name_capture

        try:
            parsed_date, parsed_time = _parse_timestamp(shape, match)
        except ValueError as exc:
            logger.debug("Attribution shape '%s' matched but did not parse: %s", shape.key, exc)
            continue

        time_capture = matched_format(shape, match, "time")
        has_timezone = time_capture is not None and time_capture[0].has_timezone

        return BlockMatch(
            before=text[: match.start()],
            block=Attribution(name=name, date=parsed_date, time=parsed_time, has_timezone=has_timezone),
            after=text[match.end() :],
        )

    return None
