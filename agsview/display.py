"""
Display context for a cursor position: table name, column label and tag style.
"""
from __future__ import annotations

import html
from dataclasses import dataclass, field

from .config import DEFAULTS, AppConfig
from .grammar import joined_marker_length, split_fields
from .position import resolve_position
from .tables import Table
from .tags import column_tag


@dataclass(frozen=True)
class DisplayContext:
    table_name: str
    column_index: int
    column_name: str | None
    tag: int
    style: str
    table: Table | None = field(default=None, repr=False, compare=False)


def on_cursor_moved(document: str, offset: int, config: AppConfig = DEFAULTS) -> DisplayContext:
    """
    Recompute the display context for offset. The host decides when to call it;
    NoEnclosingTable propagates.
    """
    palette = config.display.palette
    pos = resolve_position(document, offset)
    tag = column_tag(pos.column_index, len(palette))
    return DisplayContext(
        table_name=pos.table.name,
        column_index=pos.column_index,
        column_name=pos.column_name,
        tag=tag,
        style=config.display.style_template.format(color=palette[tag]),
        table=pos.table,
    )


def format_label(ctx: DisplayContext, config: AppConfig = DEFAULTS) -> str:
    """'GROUP:COLUMN [index]', or 'GROUP [index]' without a column name."""
    name = ctx.table_name or config.display.unnamed_table_label
    if ctx.column_name:
        return f"{name}:{ctx.column_name} [{ctx.column_index}]"
    return f"{name} [{ctx.column_index}]"


def render_label_html(ctx: DisplayContext, config: AppConfig = DEFAULTS) -> str:
    """Label span in the context's style; names from the file are escaped."""
    return f"<span style='{ctx.style}'>{html.escape(format_label(ctx, config))}</span>"


def render_line_html(line: str, style_map: dict[int, str]) -> str:
    """
    Wrap each field of line in a span styled by its column tag.
    A marker joined to the next field gets its own column-1 span.
    Without styles the line is returned escaped and unstyled.
    """
    if not style_map:
        return html.escape(line, quote=False)

    def _span(i: int, text: str) -> str:
        style = style_map[column_tag(i, len(style_map))]
        return f"<span style='{style}'>{html.escape(text, quote=False)}</span>"

    marker_len = joined_marker_length(line)
    first = 1
    prefix = ""
    if marker_len:
        prefix = _span(1, line[:marker_len])
        line = line[marker_len:]
        first = 2
    spans = [_span(i, f) for i, f in enumerate(split_fields(line), start=first)]
    return prefix + ",".join(spans)
