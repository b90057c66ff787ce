"""Constants used across the outer-indent package."""

from __future__ import annotations

import re

from .config import OutlineConfig

DEFAULT_CONFIG = OutlineConfig()

# Outline patterns
BLOCK_BEGIN_PATTERN = re.compile(r"^[ \t]*#\+begin_(?P<name>\S+)", re.IGNORECASE)
BLOCK_END_PATTERN = re.compile(r"^[ \t]*#\+end_(?P<name>\S+)", re.IGNORECASE)
INLINE_TASK_END_TITLE = "END"

# Lines end at "\n" only, the same boundary `^` uses in multiline patterns
LINE_PATTERN = re.compile(r"[^\n]*\n|[^\n]+")

# Documents the mode can be enabled on
OUTLINE_EXTENSIONS = (".org",)

# Limits
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
DEFAULT_MAX_LINE_LENGTH = DEFAULT_CONFIG.max_line_length
