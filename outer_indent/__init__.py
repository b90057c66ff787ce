"""
outer-indent: aligned virtual indentation for numbered outlines.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    outer-indent notes.org --numbering

Library Usage:
    from outer_indent import NumberingConfig, build_tables, compute_hide_regions

    numbering = NumberingConfig(enabled=True, max_level=3)
    tables = build_tables(4, numbering)
    regions = compute_hide_regions(text, numbering)
"""

from .config import ConfigError, OutlineConfig
from .exceptions import (
    LineTooLongError,
    ParseError,
    TooManyHeadlinesError,
    UnsupportedDocumentError,
)
from .hider import MarkerHider, apply_hide_regions, compute_hide_regions
from .mode import ModeState, OuterIndentMode
from .models import HideRegion, IndentationTables, LineKind, ParseResult
from .numbering import NumberingConfig, dotted_format, number_headlines
from .parser import parse_outline
from .prefix import prefix_length
from .session import OutlineSession
from .tables import DefaultIndentation, OuterIndentation, build_default_tables, build_tables

__version__ = "0.1.0"

__all__ = [
    # Core computations
    "prefix_length",
    "build_tables",
    "build_default_tables",
    "compute_hide_regions",
    "apply_hide_regions",
    "number_headlines",
    "parse_outline",
    # Mode and host
    "OuterIndentMode",
    "ModeState",
    "OutlineSession",
    "MarkerHider",
    "DefaultIndentation",
    "OuterIndentation",
    # Data models
    "NumberingConfig",
    "OutlineConfig",
    "IndentationTables",
    "HideRegion",
    "LineKind",
    "ParseResult",
    "dotted_format",
    # Exceptions
    "ConfigError",
    "LineTooLongError",
    "ParseError",
    "TooManyHeadlinesError",
    "UnsupportedDocumentError",
    # Version
    "__version__",
]
