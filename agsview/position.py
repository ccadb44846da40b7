"""
Position resolver: offset -> (table, 1-based column index, column name).

Column 1 is the marker field of the row ("DATA", "UNIT", "HEADING", ...);
the HEADING names therefore start at column 2.
"""
from __future__ import annotations

from dataclasses import dataclass

from .grammar import joined_marker_length, separator_positions
from .tables import Table, line_at, locate_table, resolve_header


@dataclass(frozen=True)
class Position:
    table: Table
    column_index: int
    column_name: str | None


def column_index_at(line: str, col: int) -> int:
    """
    1-based field index of character position col within line.
    A position on a separator belongs to the field after it. A marker joined
    to the next field ('"HEADING""COL1"') still counts as column 1 on its own.
    """
    marker_len = joined_marker_length(line)
    if marker_len:
        if col < marker_len:
            return 1
        return 1 + column_index_at(line[marker_len:], col - marker_len)
    return 1 + sum(1 for pos in separator_positions(line) if pos <= col)


def column_name_for(header: list[str], column_index: int) -> str | None:
    """HEADING name for a column index, None for the marker column or past the header."""
    i = column_index - 2
    if 0 <= i < len(header):
        return header[i]
    return None


def resolve_position(document: str, offset: int) -> Position:
    """Resolve the table, column index and column name at offset."""
    table = locate_table(document, offset)
    start, line = line_at(document, offset)
    column_index = column_index_at(line, offset - start)
    return Position(
        table=table,
        column_index=column_index,
        column_name=column_name_for(resolve_header(table), column_index),
    )
