"""Test display context, label and line preview."""
import pytest

from agsview.config import AppConfig, DisplayConfig
from agsview.display import DisplayContext, format_label, on_cursor_moved, render_label_html, render_line_html
from agsview.tables import NoEnclosingTable
from agsview.tags import build_style_map

DOC = '"GROUP","LOCA"\n"HEADING","LOCA_ID","LOCA_GL"\n"DATA","BH1","5.20"\n'


def test_on_cursor_moved_context():
    cfg = AppConfig(display=DisplayConfig(palette=("#a", "#b"), style_template="color:{color}"))
    ctx = on_cursor_moved(DOC, DOC.index("5.20"), config=cfg)
    assert ctx.table_name == "LOCA"
    assert ctx.column_index == 3
    assert ctx.column_name == "LOCA_GL"
    assert ctx.tag == 0
    assert ctx.style == "color:#a"


def test_on_cursor_moved_propagates_missing_table():
    with pytest.raises(NoEnclosingTable):
        on_cursor_moved('"DATA","x"\n', 1)


def test_format_label():
    assert format_label(DisplayContext("LOCA", 3, "LOCA_GL", 2, "")) == "LOCA:LOCA_GL [3]"
    assert format_label(DisplayContext("LOCA", 1, None, 0, "")) == "LOCA [1]"
    assert format_label(DisplayContext("", 2, None, 1, "")) == "? [2]"


def test_render_line_html_cycles_styles():
    style_map = build_style_map(["r", "g"], template="color:{color}")
    out = render_line_html('"DATA","<a>","b"', style_map)
    assert out == (
        "<span style='color:r'>\"DATA\"</span>,"
        "<span style='color:g'>\"&lt;a&gt;\"</span>,"
        "<span style='color:r'>\"b\"</span>"
    )


def test_on_cursor_moved_carries_table():
    ctx = on_cursor_moved(DOC, DOC.index("BH1"))
    assert ctx.table is not None
    assert ctx.table.name == "LOCA"
    assert ctx.table.start == 0
    assert ctx.table.end == len(DOC)


def test_render_label_html_escapes_file_names():
    doc = '"GROUP","<img src=x onerror=alert(1)>"\n"HEADING","<b>ID</b>"\n"DATA","1"\n'
    ctx = on_cursor_moved(doc, doc.index('"1"'))
    out = render_label_html(ctx)
    assert "<img" not in out
    assert "<b>" not in out
    assert "&lt;img src=x onerror=alert(1)&gt;:&lt;b&gt;ID&lt;/b&gt; [2]" in out
    assert out.startswith(f"<span style='{ctx.style}'>")


def test_render_line_html_joined_marker():
    style_map = build_style_map(["r", "g", "b"], template="color:{color}")
    out = render_line_html('"HEADING""COL1","COL2"', style_map)
    assert out == (
        "<span style='color:r'>\"HEADING\"</span>"
        "<span style='color:g'>\"COL1\"</span>,"
        "<span style='color:b'>\"COL2\"</span>"
    )


def test_render_line_html_without_styles():
    assert render_line_html('"DATA","<x>"', {}) == '"DATA","&lt;x&gt;"'


def test_display_config_rejects_empty_palette():
    with pytest.raises(ValueError):
        DisplayConfig(palette=())
