"""Location grammar for addressing source regions.

A location is written ``path:range[,range...]`` where each range is either a
single line ``N`` or an inclusive span ``N-M`` (1-indexed). The path is
everything before the *last* colon, so paths that themselves contain colons
(``C:\\src\\app.py:3-4``) are tolerated.
"""

from pydantic import BaseModel, ConfigDict, Field


class LineRange(BaseModel):
    """Inclusive, 1-indexed line span."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start_line: int = Field(alias="startLine", ge=1)
    end_line: int = Field(alias="endLine", ge=1)

    @property
    def is_single_line(self) -> bool:
        return self.start_line == self.end_line


class ParsedLocation(BaseModel):
    """A file path plus the line ranges addressed within it.

    Ranges keep the order they were written in; they are not sorted or
    merged.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    ranges: tuple[LineRange, ...] = Field(min_length=1)


def _parse_line(token: str) -> int | None:
    try:
        return int(token.strip())
    except ValueError:
        return None


def _parse_range(token: str) -> LineRange | None:
    token = token.strip()
    if "-" in token:
        start_text, _, end_text = token.partition("-")
        start = _parse_line(start_text)
        end = _parse_line(end_text)
    else:
        start = end = _parse_line(token)

    if start is None or end is None or start < 1 or end < start:
        return None
    return LineRange(start_line=start, end_line=end)


def parse_location(text: str) -> ParsedLocation | None:
    """Parse a ``path:range,range`` location string.

    Malformed range tokens are skipped. Returns None when there is no colon
    or when no valid range remains.

    Args:
        text: Location string, e.g. ``src/server.ts:10-20,33``

    Returns:
        ParsedLocation, or None if the string is not a location
    """
    path, colon, ranges_text = text.rpartition(":")
    if not colon:
        return None

    ranges = [r for r in (_parse_range(token) for token in ranges_text.split(",")) if r]
    if not ranges:
        return None

    return ParsedLocation(path=path, ranges=tuple(ranges))


def format_location(location: ParsedLocation) -> str:
    """Serialize a ParsedLocation as ``path:start-end,start-end``.

    Single-line ranges are written as ``N-N``, never collapsed to ``N``.
    """
    spans = ",".join(f"{r.start_line}-{r.end_line}" for r in location.ranges)
    return f"{location.path}:{spans}"
