"""Indentation tables and the strategies that build them."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .models import IndentationTables, LineKind
from .numbering import NumberingConfig
from .prefix import prefix_length

logger = logging.getLogger(__name__)


def _spaces(width: int) -> str:
    return " " * max(width, 0)


def reference_level(deepest_level: int, config: NumberingConfig) -> int:
    """Level whose prefix width sets the column of every non-headline line."""
    if not config.enabled or config.max_level is None:
        return deepest_level
    return min(config.max_level, deepest_level)


def build_tables(deepest_level: int, config: NumberingConfig) -> IndentationTables:
    """Build outer-indent tables for a document.

    Body text and inline tasks are indented to the width of the deepest
    (numbered) headline prefix. Each headline is indented by whatever that
    width leaves after its own marker run or label, so shallower headlines get
    more leading spaces and all headline text starts in the same column.

    Args:
        deepest_level: Deepest headline level in the document.
        config: Numbering configuration.

    Returns:
        IndentationTables: Tables with `deepest_level` entries each, indexed
            ``0 .. deepest_level - 1``. Empty tables when the document has no
            headlines.

    Examples:
        tables = build_tables(3, NumberingConfig())
        tables.headline_prefixes  # ("   ", "  ", " ")
    """
    if deepest_level <= 0:
        logger.debug("No headlines; building empty indentation tables")
        return IndentationTables.empty()

    line_indentation = prefix_length(
        reference_level(deepest_level, config), config, config.max_level
    )
    line_prefix = _spaces(line_indentation)

    headline_prefixes = tuple(
        _spaces(line_indentation - prefix_length(level, config, config.max_level))
        for level in range(deepest_level)
    )
    logger.debug(
        "Built outer-indent tables for %d levels (line indentation %d)",
        deepest_level,
        line_indentation,
    )
    return IndentationTables(
        text_line_prefixes=(line_prefix,) * deepest_level,
        inline_task_prefixes=(line_prefix,) * deepest_level,
        headline_prefixes=headline_prefixes,
        line_indentation=line_indentation,
    )


def _default_prefixes(level: int, indentation_per_level: int) -> tuple[str, str, str]:
    indentation = 0 if level <= 1 else (indentation_per_level - 1) * (level - 1)
    headline = _spaces(indentation)
    inline_task = "" if level <= 1 else _spaces(level + indentation)
    # One extra boundary column separates body text from the headline above.
    text = _spaces(level + indentation + (1 if level > 0 else 0))
    return text, inline_task, headline


def build_default_tables(
    deepest_level: int,
    config: NumberingConfig | None = None,
    indentation_per_level: int = 2,
) -> IndentationTables:
    """Build the stock virtual-indentation tables used when the mode is off.

    Every level below the first adds `indentation_per_level - 1` columns before
    the headline, and body text starts one column past the headline's marker
    run. Numbering is ignored.

    Examples:
        build_default_tables(3).text_line_prefixes  # ("", "  ", "    ")
    """
    if deepest_level <= 0:
        return IndentationTables.empty()

    rows = [_default_prefixes(level, indentation_per_level) for level in range(deepest_level)]
    text, inline_task, headline = (tuple(column) for column in zip(*rows))
    return IndentationTables(
        text_line_prefixes=text,
        inline_task_prefixes=inline_task,
        headline_prefixes=headline,
    )


class IndentStrategy(ABC):
    """Supplies indentation tables and per-line prefixes to a session."""

    name = "base"

    @abstractmethod
    def build_tables(self, deepest_level: int, numbering: NumberingConfig) -> IndentationTables:
        """Build the tables for a document whose deepest headline is `deepest_level`."""

    def line_prefix(
        self,
        kind: LineKind,
        level: int,
        tables: IndentationTables,
        numbering: NumberingConfig,
    ) -> str:
        """Return the prefix for a line, extending the tables past their last level."""
        table = tables.table(kind)
        if 0 <= level < len(table):
            return table[level]
        return self._overflow_prefix(kind, level, tables, numbering)

    @abstractmethod
    def _overflow_prefix(
        self,
        kind: LineKind,
        level: int,
        tables: IndentationTables,
        numbering: NumberingConfig,
    ) -> str:
        """Prefix for a level the tables do not cover."""


class DefaultIndentation(IndentStrategy):
    name = "default"

    def __init__(self, indentation_per_level: int = 2):
        self.indentation_per_level = indentation_per_level

    def build_tables(self, deepest_level: int, numbering: NumberingConfig) -> IndentationTables:
        return build_default_tables(deepest_level, numbering, self.indentation_per_level)

    def _overflow_prefix(self, kind, level, tables, numbering):
        text, inline_task, headline = _default_prefixes(level, self.indentation_per_level)
        if kind is LineKind.HEADLINE:
            return headline
        if kind is LineKind.INLINE_TASK:
            return inline_task
        return text

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, DefaultIndentation)
            and other.indentation_per_level == self.indentation_per_level
        )

    def __hash__(self) -> int:
        return hash((self.name, self.indentation_per_level))


class OuterIndentation(IndentStrategy):
    name = "outer"

    def build_tables(self, deepest_level: int, numbering: NumberingConfig) -> IndentationTables:
        return build_tables(deepest_level, numbering)

    def _overflow_prefix(self, kind, level, tables, numbering):
        if kind is LineKind.HEADLINE:
            width = prefix_length(level, numbering, numbering.max_level)
            return _spaces(tables.line_indentation - width)
        return _spaces(tables.line_indentation)
