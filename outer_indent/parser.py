"""Outline parsing utilities."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .config import ConfigError, OutlineConfig, validate_config
from .constants import (
    BLOCK_BEGIN_PATTERN,
    BLOCK_END_PATTERN,
    INLINE_TASK_END_TITLE,
    LINE_PATTERN,
)
from .exceptions import LineTooLongError, ParseError, TooManyHeadlinesError
from .filesystem import read_outline
from .models import Headline, LineKind, OutlineLine, ParseResult, ParserContext, ParserState

logger = logging.getLogger(__name__)


def headline_pattern(config: OutlineConfig) -> re.Pattern[str]:
    """Build the headline matcher for the configured marker and separator.

    Examples:
        headline_pattern(OutlineConfig()).match("** Tasks").group(1)  # "**"
    """
    marker = re.escape(config.marker_char)
    separator = re.escape(config.separator)
    return re.compile(rf"^({marker}+){separator}(.*)$")


def split_lines(content: str) -> list[str]:
    """Split content into lines, keeping their endings.

    Only `"\\n"` ends a line. Carriage returns, form feeds and other characters
    `str.splitlines` treats as breaks stay part of the line, so line offsets
    agree with the line starts seen by multiline patterns.

    Examples:
        split_lines("* a\\r\\n\\x0c\\nbody")  # ["* a\\r\\n", "\\x0c\\n", "body"]
    """
    return LINE_PATTERN.findall(content)


def _strip_line_ending(line: str) -> str:
    return line.rstrip("\r\n")


def _try_open_block(ctx: ParserContext, text: str) -> bool:
    """Detect the start of a ``#+BEGIN_<name>`` block.

    Args:
        ctx: Parser context to update when a block opens.
        text: Current line without its line ending.

    Returns:
        bool: True when the line begins a block and the context is updated.

    Examples:
        _try_open_block(ParserContext(), "#+BEGIN_SRC python")  # True
    """
    if ctx.state is ParserState.IN_BLOCK:
        return False

    begin_match = BLOCK_BEGIN_PATTERN.match(text)
    if not begin_match:
        return False

    ctx.resume_state = ctx.state
    ctx.state = ParserState.IN_BLOCK
    ctx.block_name = begin_match.group("name").lower()
    return True


def _try_close_block(ctx: ParserContext, text: str) -> bool:
    """Attempt to close the active block.

    Only an ``#+END_<name>`` line naming the open block closes it.

    Examples:
        ctx = ParserContext(state=ParserState.IN_BLOCK, block_name="src")
        _try_close_block(ctx, "#+end_src")  # True
    """
    if ctx.state is not ParserState.IN_BLOCK or ctx.block_name is None:
        return False

    end_match = BLOCK_END_PATTERN.match(text)
    if not end_match or end_match.group("name").lower() != ctx.block_name:
        return False

    ctx.state = ctx.resume_state
    ctx.block_name = None
    ctx.resume_state = ParserState.NORMAL
    return True


def _is_inline_task_end(match: re.Match[str], config: OutlineConfig) -> bool:
    return (
        len(match.group(1)) >= config.inlinetask_min_level
        and match.group(2).strip() == INLINE_TASK_END_TITLE
    )


def _inline_task_spans(
    lines: list[str], pattern: re.Pattern[str], config: OutlineConfig
) -> dict[int, int]:
    """Pair inline-task headlines with their ``END`` lines.

    A task whose ``END`` line is missing (a regular headline or the end of the
    document comes first) is a single-line task and gets no span.

    Returns:
        dict[int, int]: Zero-based start line mapped to the matching end line.
    """
    spans: dict[int, int] = {}
    open_task: int | None = None
    ctx = ParserContext()

    for line_number, line in enumerate(lines):
        text = _strip_line_ending(line)
        if ctx.state is ParserState.IN_BLOCK:
            _try_close_block(ctx, text)
            continue
        if _try_open_block(ctx, text):
            continue

        headline_match = pattern.match(text)
        if not headline_match:
            continue

        level = len(headline_match.group(1))
        if level < config.inlinetask_min_level:
            open_task = None
        elif _is_inline_task_end(headline_match, config):
            if open_task is not None:
                spans[open_task] = line_number
                open_task = None
        else:
            open_task = line_number

    return spans


def _check_line_length(line_number: int, text: str, max_line_length: int) -> None:
    if len(text) > max_line_length:
        raise LineTooLongError(line_number + 1, max_line_length)


def parse_outline(
    content: str, config: OutlineConfig | None = None, max_line_length: int | None = None
) -> ParseResult:
    """Parse outline content into headlines and classified lines.

    Lines inside ``#+BEGIN_...``/``#+END_...`` blocks are never headlines.
    Headlines at `config.inlinetask_min_level` or deeper are inline tasks: they
    keep the enclosing headline's level, and the lines up to their ``END``
    line are indented as inline-task lines.

    Args:
        content: The outline text to parse.
        config: Configuration controlling parsing behavior. Defaults to a new
            `OutlineConfig` when omitted.
        max_line_length: Optional override for the maximum allowed line length
            (excluding line endings).

    Returns:
        ParseResult: Document lines, headlines, and per-line classification.

    Raises:
        ConfigError: If the configuration fails validation.
        LineTooLongError: If a line exceeds the maximum line length.
        TooManyHeadlinesError: If the document has more headlines than allowed.

    Examples:
        parse_outline("* Title\\nBody\\n** Section\\n").deepest_level  # 2
    """
    config = config or OutlineConfig()
    validate_config(config)
    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )
    pattern = headline_pattern(config)

    lines = split_lines(content)
    task_spans = _inline_task_spans(lines, pattern, config)

    headlines: list[Headline] = []
    outline: list[OutlineLine] = []
    ctx = ParserContext()
    task_end: int | None = None

    for line_number, line in enumerate(lines):
        text = _strip_line_ending(line)
        _check_line_length(line_number, text, effective_max_line_length)

        if ctx.state is ParserState.IN_BLOCK:
            in_task = ctx.resume_state is ParserState.IN_INLINE_TASK
            kind = LineKind.INLINE_TASK if in_task else LineKind.TEXT
            _try_close_block(ctx, text)
            outline.append(OutlineLine(line_number, text, kind, ctx.level))
            continue

        if ctx.state is ParserState.IN_INLINE_TASK:
            if line_number == task_end:
                ctx.state = ParserState.NORMAL
                task_end = None
            else:
                _try_open_block(ctx, text)
            outline.append(OutlineLine(line_number, text, LineKind.INLINE_TASK, ctx.level))
            continue

        if _try_open_block(ctx, text):
            outline.append(OutlineLine(line_number, text, LineKind.TEXT, ctx.level))
            continue

        headline_match = pattern.match(text)
        if not headline_match:
            outline.append(OutlineLine(line_number, text, LineKind.TEXT, ctx.level))
            continue

        level = len(headline_match.group(1))
        is_inline_task = level >= config.inlinetask_min_level
        headlines.append(Headline(line_number, level, headline_match.group(2), is_inline_task))
        if len(headlines) > config.max_headlines:
            raise TooManyHeadlinesError(config.max_headlines)

        if is_inline_task:
            outline.append(OutlineLine(line_number, text, LineKind.INLINE_TASK, ctx.level))
            task_end = task_spans.get(line_number)
            if task_end is not None:
                ctx.state = ParserState.IN_INLINE_TASK
            continue

        ctx.level = level
        outline.append(OutlineLine(line_number, text, LineKind.HEADLINE, level))

    result = ParseResult(lines=lines, headlines=headlines, outline=outline)
    logger.debug(
        "Parsed %d lines, %d headlines (deepest level %d)",
        len(lines),
        len(headlines),
        result.deepest_level,
    )
    return result


class ParseFileError(Exception):
    """Raised when parsing an outline file fails."""


def parse_file(
    filepath: Path,
    config: OutlineConfig | None = None,
    max_line_length: int | None = None,
) -> ParseResult:
    """Read and parse an outline file.

    Args:
        filepath: Path to the outline file to parse.
        config: Configuration controlling parsing behavior; defaults to a new
            `OutlineConfig` when omitted.
        max_line_length: Optional override for the maximum allowed line length.

    Returns:
        ParseResult: Parsed document.

    Raises:
        ParseFileError: If configuration is invalid, parsing fails because of
            limits, or the file cannot be read or decoded.

    Examples:
        result = parse_file(Path("todo.org"), OutlineConfig(numbering=True))
    """
    config = config or OutlineConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )
    if effective_max_line_length <= 0:
        raise ParseFileError("`max_line_length` override must be a positive integer")

    try:
        content = read_outline(filepath)
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except IOError as error:
        raise ParseFileError(str(error)) from error

    try:
        return parse_outline(content, config, effective_max_line_length)
    except LineTooLongError as error:
        error_message = (
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
        raise ParseFileError(error_message) from error
    except TooManyHeadlinesError as error:
        error_message = f"{filepath} contains too many headlines (limit: {error.limit})."
        raise ParseFileError(error_message) from error
    except ParseError as error:
        error_message = f"{filepath}: {error}"
        raise ParseFileError(error_message) from error
