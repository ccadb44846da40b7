"""
AGS Viewer - Streamlit UI for AGS table/column inspection and table export.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

import pandas as pd
import streamlit as st

from agsview.config import DEFAULTS, EXPORT_QUOTING_MODES
from agsview.display import on_cursor_moved, render_label_html, render_line_html
from agsview.export import export_table_text, table_to_frame
from agsview.plots_table import plot_table
from agsview.tables import NoEnclosingTable, iter_tables, locate_table
from agsview.tags import build_style_map

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("agsview.app")


def _safe_key(s: str) -> str:
    """Convert free text to a stable Streamlit key suffix."""
    k = re.sub(r"[^0-9A-Za-z_]+", "_", str(s)).strip("_").lower()
    return k or "item"


def _line_starts(text: str) -> list[int]:
    """Offset of the first character of every line."""
    starts = [0]
    for m in re.finditer(r"\n", text):
        starts.append(m.end())
    if len(starts) > 1 and starts[-1] == len(text):
        starts.pop()
    return starts


@st.cache_data
def get_style_map(palette: tuple[str, ...]) -> dict[int, str]:
    return build_style_map(palette)


@st.cache_data(ttl=3600)
def table_frame_cached(text: str, table_start: int) -> pd.DataFrame:
    """Cached DataFrame of the table starting at table_start, keyed by file content."""
    return table_to_frame(locate_table(text, table_start))


st.set_page_config(page_title="AGS Viewer", layout="wide")

# Sidebar
st.sidebar.title("AGS Viewer")
uploaded = st.sidebar.file_uploader("Upload AGS", type=["ags", "txt"])
quoting = st.sidebar.radio(
    "CSV quoting",
    list(EXPORT_QUOTING_MODES),
    index=list(EXPORT_QUOTING_MODES).index(DEFAULTS.export.quoting),
    help='double = every " doubled as-is;  decode = AGS quoting removed, then standard CSV',
)

if uploaded is None:
    st.info("Upload an AGS file to start.")
    st.stop()

file_prefix = Path(uploaded.name).stem
text = uploaded.getvalue().decode(DEFAULTS.export.encoding, errors="replace")
tables = list(iter_tables(text))
if not tables:
    st.warning("No GROUP found in this file.")

palette = DEFAULTS.display.palette
style_map = get_style_map(tuple(palette))

# Cursor: jump to a table, then pick line and character.
starts = _line_starts(text)
line_of = {s: i for i, s in enumerate(starts)}
jump_options = ["(none)"] + [f"{t.name or '?'} @ line {line_of.get(t.start, 0) + 1}" for t in tables]
jump = st.sidebar.selectbox("Jump to table", jump_options)
default_line = 1
if jump != "(none)":
    default_line = line_of.get(tables[jump_options.index(jump) - 1].start, 0) + 1

line_no = st.sidebar.number_input(
    "Line", min_value=1, max_value=len(starts), value=default_line, step=1, key=f"line_{_safe_key(jump)}"
)
line_start = starts[int(line_no) - 1]
line_end = text.find("\n", line_start)
line_text = text[line_start:len(text) if line_end == -1 else line_end].rstrip("\r")
col = st.sidebar.slider("Character", min_value=0, max_value=max(len(line_text), 1), value=0)
offset = line_start + min(int(col), len(line_text))

st.subheader(f"{uploaded.name}")
st.markdown(
    f"<div style='font-family:monospace;white-space:pre-wrap'>{render_line_html(line_text, style_map)}</div>",
    unsafe_allow_html=True,
)

try:
    ctx = on_cursor_moved(text, offset)
except NoEnclosingTable:
    st.warning("No table found at the cursor.")
    st.stop()

table = ctx.table
c1, c2, c3 = st.columns(3)
c1.metric("Table", ctx.table_name or "?")
c2.metric("Column", ctx.column_index)
c3.metric("Name", ctx.column_name or "-")
st.markdown(render_label_html(ctx), unsafe_allow_html=True)

frame = table_frame_cached(text, table.start)
if frame.empty:
    st.caption("No DATA rows in this table.")
else:
    st.plotly_chart(plot_table(frame, palette, title=table.name), use_container_width=True)

out = export_table_text(table.text, quoting=quoting)
logger.info("Prepared %s export for table %s", quoting, table.name)
st.download_button(
    f"Download {table.name or 'table'}.csv",
    out.encode(DEFAULTS.export.encoding),
    f"{file_prefix}_{_safe_key(table.name)}.csv",
    "text/csv",
    key="dl_table_csv",
)
