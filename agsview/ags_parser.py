"""
AGS Parser: parse a whole AGS document into one DataFrame per GROUP.
"""
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .export import table_to_frame
from .tables import iter_tables

logger = logging.getLogger(__name__)


def parse_ags_text(text: str) -> dict[str, pd.DataFrame]:
    """
    Parse AGS text content into group DataFrames.
    - Group start: lines beginning with "GROUP"
    - Columns from the group's "HEADING" line
    - Only "DATA" rows become DataFrame rows
    Repeated group names are concatenated in document order.
    """
    frames: dict[str, list[pd.DataFrame]] = {}
    for table in iter_tables(text):
        name = table.name or f"@{table.start}"
        frames.setdefault(name, []).append(table_to_frame(table))

    groups = {k: pd.concat(v, ignore_index=True) if len(v) > 1 else v[0] for k, v in frames.items()}
    logger.debug("Parsed %d groups: %s", len(groups), ", ".join(groups))
    return groups


def parse_ags_file(path: str | Path) -> dict[str, pd.DataFrame]:
    """Parse AGS file from path."""
    path = Path(path)
    text = path.read_text(encoding="utf-8", errors="replace")
    return parse_ags_text(text)
