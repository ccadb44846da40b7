"""
Table plot: one AGS group as a Plotly table, header cells filled by column tag.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from .tags import column_color

# Frame column 0 is AGS column 2 (column 1 holds the row marker).
FIRST_DATA_COLUMN = 2


def header_colors(columns: Sequence[str], palette: Sequence[str]) -> list[str]:
    """Tag colour of each DataFrame column, aligned with the cursor tags."""
    return [column_color(j + FIRST_DATA_COLUMN, palette) for j in range(len(columns))]


def plot_table(frame: pd.DataFrame, palette: Sequence[str], title: str | None = None) -> go.Figure:
    """Build a go.Table for frame with tag-coloured header cells."""
    columns = [str(c) for c in frame.columns]
    fig = go.Figure(
        data=[
            go.Table(
                header=dict(
                    values=[f"<b>{c}</b>" for c in columns],
                    fill_color=header_colors(columns, palette),
                    font=dict(color="white", size=12),
                    align="left",
                ),
                cells=dict(
                    values=[frame[c].astype(str).tolist() for c in frame.columns],
                    fill_color="white",
                    line_color="#ddd",
                    align="left",
                    font=dict(size=11, color="#222"),
                ),
            )
        ]
    )
    fig.update_layout(
        template="plotly_white",
        title=dict(text=title or ""),
        margin=dict(l=10, r=10, t=40 if title else 10, b=10),
        height=min(900, 120 + 24 * len(frame)),
    )
    return fig
