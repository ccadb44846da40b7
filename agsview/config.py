# config.py
from __future__ import annotations

from dataclasses import dataclass, field

from plotly.colors import qualitative

EXPORT_QUOTING_MODES = ("double", "decode")


@dataclass
class DisplayConfig:
    # Ordered palette; its length is the tag cycle
    palette: tuple[str, ...] = tuple(qualitative.Plotly)
    # CSS template applied to a field in the line preview
    style_template: str = "color: {color}; font-weight: 600;"
    unnamed_table_label: str = "?"

    def __post_init__(self):
        if not self.palette:
            raise ValueError("DisplayConfig.palette must hold at least one colour")


@dataclass
class ExportConfig:
    # "double": every quote doubled verbatim; "decode": AGS quoting decoded, then standard CSV
    quoting: str = "double"
    encoding: str = "utf-8"
    newline: str = "\n"


@dataclass
class AppConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


# Global defaults used across modules
DEFAULTS = AppConfig()
