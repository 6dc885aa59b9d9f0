#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/options/readview.py
"""Configuration options for the read-view projection.

The :class:`Theme` holds every colour the projector assigns; the terminal
front end only interprets the resulting styles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from adfmd.constants import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_BULLET_SYMBOL,
    DEFAULT_CODE_BG,
    DEFAULT_CODE_BLOCK_BG,
    DEFAULT_CODE_FG,
    DEFAULT_DATE_FORMAT,
    DEFAULT_HEADING_COLORS,
    DEFAULT_LINK_COLOR,
    DEFAULT_MUTED_COLOR,
    DEFAULT_PANEL_COLORS,
    DEFAULT_RULE_WIDTH,
    DEFAULT_STATUS_COLORS,
    DEFAULT_SUCCESS_COLOR,
    DEFAULT_TEXT_COLOR,
    DEFAULT_UNKNOWN_COLOR,
    DEFAULT_WARNING_COLOR,
)
from adfmd.options.base import BaseRendererOptions, CloneFrozenMixin


@dataclass(frozen=True)
class Theme(CloneFrozenMixin):
    """Colour palette for the read-view.

    Parameters
    ----------
    heading_colors : tuple of str
        Foreground colour per heading level (index 0 is level 1)
    muted : str
        List markers, quote bars, table rules and fences
    code_fg, code_bg : str
        Inline code colours
    code_block_bg : str
        Code block fence background
    link : str
        Link and mention colour
    accent : str
        Media, expand and date colour
    success, warning : str
        Done tasks / decided items and undecided items
    unknown : str
        Unknown component labels
    text : str
        Fallback panel colour
    panel_colors : dict
        Colour per panel type
    status_colors : dict
        Colour per status lozenge colour name

    """

    heading_colors: tuple[str, ...] = DEFAULT_HEADING_COLORS
    muted: str = DEFAULT_MUTED_COLOR
    code_fg: str = DEFAULT_CODE_FG
    code_bg: str = DEFAULT_CODE_BG
    code_block_bg: str = DEFAULT_CODE_BLOCK_BG
    link: str = DEFAULT_LINK_COLOR
    accent: str = DEFAULT_ACCENT_COLOR
    success: str = DEFAULT_SUCCESS_COLOR
    warning: str = DEFAULT_WARNING_COLOR
    unknown: str = DEFAULT_UNKNOWN_COLOR
    text: str = DEFAULT_TEXT_COLOR
    panel_colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PANEL_COLORS))
    status_colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_STATUS_COLORS))

    def __post_init__(self) -> None:
        """Normalise list-valued heading colours loaded from configuration files."""
        if not isinstance(self.heading_colors, tuple):
            object.__setattr__(self, "heading_colors", tuple(self.heading_colors))
        if not self.heading_colors:
            raise ValueError("heading_colors must contain at least one colour")

    def heading_color(self, level: int) -> str:
        """Colour for a heading level; out-of-range levels use level 1."""
        if 1 <= level <= len(self.heading_colors):
            return self.heading_colors[level - 1]
        return self.heading_colors[0]

    def panel_color(self, panel_type: str) -> str:
        """Colour for a panel type, falling back to the text colour."""
        return self.panel_colors.get(panel_type, self.text)

    def status_color(self, color: str) -> str:
        """Colour for a status lozenge, falling back to ``neutral``."""
        return self.status_colors.get(color, self.status_colors.get("neutral", self.muted))


@dataclass(frozen=True)
class ReadViewOptions(BaseRendererOptions):
    """Configuration options for ADF-to-read-view projection.

    Parameters
    ----------
    theme : Theme
        Colour palette
    bullet_symbol : str, default "•"
        Marker for bullet list items
    rule_width : int, default 40
        Width of the horizontal rule line
    date_format : str, default "%Y-%m-%d"
        ``strftime`` format for ``date`` nodes (rendered in UTC)

    """

    theme: Theme = field(default_factory=Theme, metadata={"help": "Colour palette"})
    bullet_symbol: str = field(default=DEFAULT_BULLET_SYMBOL, metadata={"help": "Bullet list marker"})
    rule_width: int = field(default=DEFAULT_RULE_WIDTH, metadata={"help": "Horizontal rule width"})
    date_format: str = field(default=DEFAULT_DATE_FORMAT, metadata={"help": "strftime format for date nodes"})

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.rule_width < 0:
            raise ValueError(f"rule_width must be non-negative, got {self.rule_width}")

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> ReadViewOptions:
        """Build options from a mapping whose ``theme`` entry may be a nested table."""
        values = dict(data)
        theme = values.pop("theme", None)
        options = super().from_mapping(values)
        if isinstance(theme, dict):
            options = options.create_updated(theme=Theme.from_mapping(theme))
        return options
