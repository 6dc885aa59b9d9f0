#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for adfmd.

This module centralizes the fixed values and default configuration used
across the conversion engine.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Document Format - ADF structural constants
3. Markdown Output - serializer defaults
4. Markdown Parsing - block priorities and parser defaults
5. Read-View - theme colours, symbols and projection defaults
6. CLI - configuration discovery and exit codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

PanelType = Literal["info", "note", "warning", "error", "success"]
TaskState = Literal["TODO", "DONE"]
DecisionState = Literal["DECIDED", "UNDECIDED"]
BulletMarker = Literal["-", "*"]

# =============================================================================
# Document Format
# =============================================================================

ADF_VERSION = 1
DOC_TYPE = "doc"
TEXT_TYPE = "text"

UNKNOWN_COMPONENT_LABEL = "Unknown Component"

TASK_STATE_DONE: TaskState = "DONE"
TASK_STATE_TODO: TaskState = "TODO"
DECISION_STATE_DECIDED: DecisionState = "DECIDED"

DEFAULT_TABLE_ATTRS: dict[str, object] = {"isNumberColumnEnabled": False, "layout": "default"}

# =============================================================================
# Markdown Output
# =============================================================================

DEFAULT_BULLET_MARKER: BulletMarker = "-"
DEFAULT_LIST_INDENT_WIDTH = 2
DEFAULT_COLLAPSE_BLANK_LINES = False
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DATE_PLACEHOLDER = "[Date]"

CODE_FENCE = "```"
HARD_BREAK_MARKDOWN = "  \n"
RULE_MARKDOWN = "\n---\n\n"
TABLE_SEPARATOR_CELL = "---"

PANEL_ICONS: dict[str, str] = {
    "info": "ℹ",
    "note": "📝",
    "warning": "⚠",
    "error": "❌",
    "success": "✓",
}
DEFAULT_PANEL_ICON = "•"
DEFAULT_PANEL_TYPE = "info"

DECISION_ICON_DECIDED = "✓"
DECISION_ICON_UNDECIDED = "○"

# =============================================================================
# Markdown Parsing
# =============================================================================

# Lower values are tried first by the block dispatcher.
PARSE_PRIORITY_CODE_BLOCK = 10
PARSE_PRIORITY_HEADING = 20
PARSE_PRIORITY_RULE = 30
PARSE_PRIORITY_BLOCKQUOTE = 40
PARSE_PRIORITY_TASK_LIST = 50
PARSE_PRIORITY_BULLET_LIST = 60
PARSE_PRIORITY_ORDERED_LIST = 70
PARSE_PRIORITY_TABLE = 80
PARSE_PRIORITY_PARAGRAPH = 1000

DEFAULT_PARSE_TABLES = True
DEFAULT_PARSE_TASK_LISTS = True

# =============================================================================
# Read-View
# =============================================================================

DEFAULT_HEADING_COLORS: tuple[str, ...] = ("#bb9af7", "#7aa2f7", "#7dcfff", "#9ece6a", "#e0af68", "#f7768e")
DEFAULT_MUTED_COLOR = "#565f89"
DEFAULT_CODE_FG = "#f7768e"
DEFAULT_CODE_BG = "#2d3748"
DEFAULT_CODE_BLOCK_BG = "#1f2335"
DEFAULT_LINK_COLOR = "#7aa2f7"
DEFAULT_ACCENT_COLOR = "#7dcfff"
DEFAULT_SUCCESS_COLOR = "#9ece6a"
DEFAULT_WARNING_COLOR = "#e0af68"
DEFAULT_UNKNOWN_COLOR = "#e0af68"
DEFAULT_TEXT_COLOR = "#c0caf5"

DEFAULT_PANEL_COLORS: dict[str, str] = {
    "info": "#7aa2f7",
    "note": "#bb9af7",
    "warning": "#e0af68",
    "error": "#f7768e",
    "success": "#9ece6a",
}

DEFAULT_STATUS_COLORS: dict[str, str] = {
    "neutral": "#565f89",
    "purple": "#bb9af7",
    "blue": "#7aa2f7",
    "red": "#f7768e",
    "yellow": "#e0af68",
    "green": "#9ece6a",
}

DEFAULT_BULLET_SYMBOL = "•"
DEFAULT_RULE_WIDTH = 40
RULE_SYMBOL = "─"
QUOTE_PREFIX = "│ "
TASK_SYMBOL_DONE = "☑"
TASK_SYMBOL_TODO = "☐"
EXPAND_SYMBOL = "▶"
MEDIA_SYMBOL = "📎"

# =============================================================================
# CLI
# =============================================================================

CONFIG_FILENAMES: tuple[str, ...] = (".adfmd.toml", ".adfmd.yaml", ".adfmd.yml", ".adfmd.json")
PYPROJECT_TOOL_SECTION = "adfmd"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_FILE_ERROR = 3
