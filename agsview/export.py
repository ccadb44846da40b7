"""
Table extraction and CSV export.

serialize_to_csv doubles every quote of the raw table text, marker lines
included, so already-quoted AGS fields come out as ""A"". decode_to_csv is the
standard-CSV alternative: AGS quoting is decoded first, then re-quoted.
"""
from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import IO

import pandas as pd

from .config import DEFAULTS, EXPORT_QUOTING_MODES, AppConfig
from .grammar import safe_csv_split
from .tables import Table, locate_table, resolve_header

logger = logging.getLogger(__name__)


def extract_table_text(document: str, offset: int) -> str:
    """Raw text of the table enclosing offset, GROUP line to next GROUP line."""
    return locate_table(document, offset).text


def serialize_to_csv(table_text: str) -> str:
    """Escape every double quote by doubling it. No other change."""
    return table_text.replace('"', '""')


def decode_to_csv(table_text: str, newline: str = "\n") -> str:
    """Decode AGS quoting per line and write standard CSV rows. Blank lines are dropped."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator=newline)
    for line in table_text.splitlines():
        row = safe_csv_split(line)
        if row:
            writer.writerow(row)
    return buf.getvalue()


def table_to_frame(table: Table) -> pd.DataFrame:
    """
    DATA rows of one table as a DataFrame under its HEADING names.
    Short rows are padded with "", long rows truncated. Without a HEADING the
    columns are named by their AGS column index ("2", "3", ...).
    """
    headers = resolve_header(table)
    rows = []
    for _, line in table.iter_lines():
        parts = safe_csv_split(line)
        if not parts or parts[0].strip().upper() != "DATA":
            continue
        rows.append(parts[1:])

    if not headers:
        width = max((len(r) for r in rows), default=0)
        headers = [str(i + 2) for i in range(width)]
    rows = [[r[i] if i < len(r) else "" for i in range(len(headers))] for r in rows]
    return pd.DataFrame(rows, columns=headers)


def export_table_text(table_text: str, quoting: str | None = None, config: AppConfig = DEFAULTS) -> str:
    """Serialize raw table text with the configured quoting mode."""
    mode = quoting or config.export.quoting
    if mode not in EXPORT_QUOTING_MODES:
        raise ValueError(f"Unknown export quoting {mode!r}; expected one of {EXPORT_QUOTING_MODES}")
    if mode == "decode":
        return decode_to_csv(table_text, newline=config.export.newline)
    return serialize_to_csv(table_text)


def write_table_csv(
    document: str,
    offset: int,
    dest: str | Path | IO[str],
    quoting: str | None = None,
    config: AppConfig = DEFAULTS,
) -> str:
    """
    Export the table enclosing offset to a path or text stream.
    Returns the written text.
    """
    table = locate_table(document, offset)
    out = export_table_text(table.text, quoting=quoting, config=config)
    if hasattr(dest, "write"):
        dest.write(out)
    else:
        with open(dest, "w", encoding=config.export.encoding, newline="") as f:
            f.write(out)
    logger.info("Exported table %s (%d chars) to %s", table.name, len(out), getattr(dest, "name", dest))
    return out
