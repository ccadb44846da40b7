"""
Table boundaries and headers: locate the GROUP block enclosing an offset,
and resolve the column names from its HEADING line.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator

from .grammar import GROUP_MARKER, HEADING_MARKER, LineKind, classify_line, split_fields, strip_quotes

logger = logging.getLogger(__name__)

_GROUP_LINE_RE = re.compile(r'^"GROUP"', re.MULTILINE)


class NoEnclosingTable(LookupError):
    """Raised when an offset precedes every GROUP line of the document."""

    def __init__(self, offset: int):
        super().__init__(f"No table found at offset {offset}")
        self.offset = offset


@dataclass(frozen=True)
class Table:
    """Half-open character range [start, end) of one GROUP block."""

    start: int
    end: int
    name: str
    document: str = field(repr=False, compare=False)

    @property
    def text(self) -> str:
        return self.document[self.start:self.end]

    def iter_lines(self) -> Iterator[tuple[int, str]]:
        """Yield (line_start_offset, line_text) for each line of the table."""
        pos = self.start
        while pos < self.end:
            line_end = _line_end(self.document, pos)
            yield pos, self.document[pos:min(line_end, self.end)].rstrip("\r")
            pos = line_end + 1


def check_offset(document: str, offset: int) -> None:
    if not 0 <= offset <= len(document):
        raise ValueError(f"Offset {offset} outside document of length {len(document)}")


def line_start(document: str, offset: int) -> int:
    """Offset of the first character of the line containing offset."""
    return document.rfind("\n", 0, offset) + 1


def _line_end(document: str, start: int) -> int:
    idx = document.find("\n", start)
    return len(document) if idx == -1 else idx


def line_at(document: str, offset: int) -> tuple[int, str]:
    """Return (line_start_offset, line_text) for the line containing offset."""
    start = line_start(document, offset)
    return start, document[start:_line_end(document, start)].rstrip("\r")


def marker_fields(line: str, marker: str) -> list[str]:
    """
    Fields following a marker token, quotes stripped.
    Accepts both '"HEADING","A"' and '"HEADING""A"'.
    """
    rest = line[len(marker):] if line.startswith(marker) else line
    if rest.startswith(","):
        rest = rest[1:]
    return [strip_quotes(f) for f in split_fields(rest)]


def _group_name(line: str) -> str:
    names = marker_fields(line, GROUP_MARKER)
    return names[0] if names else ""


def _table_from(document: str, start: int) -> Table:
    next_line = _line_end(document, start) + 1
    m = _GROUP_LINE_RE.search(document, next_line) if next_line <= len(document) else None
    end = m.start() if m else len(document)
    _, line = line_at(document, start)
    return Table(start=start, end=end, name=_group_name(line), document=document)


def locate_table(document: str, offset: int) -> Table:
    """
    Find the table enclosing offset.
    Searches backward (including the offset's own line) for the nearest GROUP
    line, then forward for the next GROUP line or end of document.
    """
    check_offset(document, offset)
    start, line = line_at(document, offset)
    while classify_line(line) is not LineKind.GROUP:
        if start == 0:
            logger.debug("No GROUP line before offset %d", offset)
            raise NoEnclosingTable(offset)
        start, line = line_at(document, start - 1)

    table = _table_from(document, start)
    logger.debug("Offset %d -> table %s [%d, %d)", offset, table.name, table.start, table.end)
    return table


def iter_tables(document: str) -> Iterator[Table]:
    """Yield every table of the document in order."""
    starts = [m.start() for m in _GROUP_LINE_RE.finditer(document)]
    for i, start in enumerate(starts):
        end = starts[i + 1] if i + 1 < len(starts) else len(document)
        _, line = line_at(document, start)
        yield Table(start=start, end=end, name=_group_name(line), document=document)


def resolve_header(table: Table) -> list[str]:
    """
    Column names from the first HEADING line of the table.
    Missing HEADING returns an empty list.
    """
    for _, line in table.iter_lines():
        if classify_line(line) is LineKind.HEADING:
            return marker_fields(line, HEADING_MARKER)
    return []
