"""
Line grammar: GROUP / HEADING marker lines and quote-aware field splitting.
"""
from __future__ import annotations

import csv
import io
from enum import Enum

GROUP_MARKER = '"GROUP"'
HEADING_MARKER = '"HEADING"'


class LineKind(str, Enum):
    GROUP = "GROUP"
    HEADING = "HEADING"
    DATA = "DATA"
    OTHER = "OTHER"


def classify_line(text: str) -> LineKind:
    """
    Classify one line of an AGS document.
    - GROUP: starts with the quoted token "GROUP"
    - HEADING: starts with the quoted token "HEADING"
    - DATA: any other line starting with a quote
    - OTHER: blank or unquoted lines
    """
    line = text.rstrip("\r\n")
    if line.startswith(GROUP_MARKER):
        return LineKind.GROUP
    if line.startswith(HEADING_MARKER):
        return LineKind.HEADING
    if line.startswith('"'):
        return LineKind.DATA
    return LineKind.OTHER


def joined_marker_length(text: str) -> int:
    """
    Length of a GROUP/HEADING marker written without its comma
    ('"HEADING""COL1",...'), 0 when the marker is absent or followed by a comma.
    """
    for marker in (GROUP_MARKER, HEADING_MARKER):
        if text.startswith(marker) and text[len(marker):].startswith('"'):
            return len(marker)
    return 0


def separator_positions(text: str) -> list[int]:
    """
    Indices of the field separators in a line.
    A comma separates only outside quotes; every quote toggles the quote state,
    so an unterminated quote keeps the rest of the line inside the field.
    """
    positions = []
    in_quotes = False
    for i, ch in enumerate(text):
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            positions.append(i)
    return positions


def split_fields(text: str) -> list[str]:
    """
    Split a line into raw field tokens, keeping their surrounding quotes.
    Doubled quotes are not decoded here.
    """
    line = text.rstrip("\r\n")
    if not line:
        return []
    fields = []
    begin = 0
    for pos in separator_positions(line):
        fields.append(line[begin:pos])
        begin = pos + 1
    fields.append(line[begin:])
    return fields


def strip_quotes(field: str) -> str:
    """Remove surrounding whitespace and one enclosing pair of quotes."""
    s = field.strip()
    if len(s) >= 2 and s.startswith('"') and s.endswith('"'):
        return s[1:-1]
    return s.strip('"')


def safe_csv_split(line: str) -> list[str]:
    """
    Quote-safe CSV line split that decodes quoting ("" -> ").
    Respects quoted fields; commas inside quotes are not delimiters.
    """
    if not line.strip():
        return []
    reader = csv.reader(io.StringIO(line))
    row = next(reader)
    return list(row)
