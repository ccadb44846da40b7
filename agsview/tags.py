"""
Column tags: positional palette slots repeating cyclically across columns.
"""
from __future__ import annotations

from typing import Sequence

from .config import DEFAULTS


def column_tag(column_index: int, palette_size: int) -> int:
    """Palette slot for a 1-based column index; the same for every table."""
    if column_index < 1:
        raise ValueError(f"column_index must be >= 1, got {column_index}")
    if palette_size < 1:
        raise ValueError(f"palette_size must be >= 1, got {palette_size}")
    return (column_index - 1) % palette_size


def build_style_map(palette: Sequence[str], template: str | None = None) -> dict[int, str]:
    """Build slot -> CSS style map from an ordered palette."""
    template = template or DEFAULTS.display.style_template
    return {i: template.format(color=color) for i, color in enumerate(palette)}


def column_color(column_index: int, palette: Sequence[str]) -> str:
    return palette[column_tag(column_index, len(palette))]
