"""In-memory document session that hosts indentation and marker hiding."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from itertools import accumulate
from pathlib import Path

from .config import OutlineConfig, numbering_config, validate_config
from .constants import OUTLINE_EXTENSIONS
from .hider import MarkerHider, apply_hide_regions
from .models import IndentationTables, LineKind, OutlineLine, ParseResult
from .numbering import NumberingConfig, number_headlines
from .parser import parse_file, parse_outline
from .tables import DefaultIndentation, IndentStrategy

logger = logging.getLogger(__name__)

Listener = Callable[[], None]

OUTLINE_DOCUMENT_TYPES = tuple(extension.lstrip(".") for extension in OUTLINE_EXTENSIONS)


class OutlineSession:
    """One open outline document and its presentation state.

    The session owns the indentation tables, the hide regions and the refresh
    listeners of its document. Tables and regions are only ever replaced as a
    whole.

    Args:
        text: Document content.
        config: Rendering configuration; defaults to `OutlineConfig()`.
        name: Display name of the document.
        document_type: Kind of document (``"org"`` for outlines).
        max_line_length: Override for the configured maximum line length.
        parsed: Parse result for `text`, when the caller already has one.
    """

    def __init__(
        self,
        text: str = "",
        config: OutlineConfig | None = None,
        name: str = "*scratch*",
        document_type: str = "org",
        max_line_length: int | None = None,
        parsed: ParseResult | None = None,
    ):
        self.config = config or OutlineConfig()
        validate_config(self.config)
        self.name = name
        self.document_type = document_type
        self.max_line_length = max_line_length
        self.numbering = numbering_config(self.config)
        self.default_strategy: IndentStrategy = DefaultIndentation(
            self.config.indentation_per_level
        )
        self.strategy: IndentStrategy = self.default_strategy
        self.hider = MarkerHider(self.config.marker_char, self.config.separator)
        self.tables = IndentationTables.empty()
        self.redraw_pending = False
        self.redraw_count = 0
        self._listeners: list[Listener] = []
        self.set_text(text, parsed)
        self.recompute_indentation()

    @classmethod
    def from_file(
        cls,
        filepath: Path,
        config: OutlineConfig | None = None,
        max_line_length: int | None = None,
    ) -> OutlineSession:
        """Open a session on a file; the extension decides the document type."""
        result = parse_file(filepath, config, max_line_length)
        return cls(
            "".join(result.lines),
            config,
            name=str(filepath),
            document_type=filepath.suffix.lstrip(".").lower(),
            max_line_length=max_line_length,
            parsed=result,
        )

    @property
    def is_outline_document(self) -> bool:
        return self.document_type in OUTLINE_DOCUMENT_TYPES

    @property
    def deepest_level(self) -> int:
        return self.parsed.deepest_level

    @property
    def listeners(self) -> tuple[Listener, ...]:
        return tuple(self._listeners)

    def set_text(self, text: str, parsed: ParseResult | None = None) -> None:
        """Replace the document content.

        `text` is parsed unless `parsed` is given. Hide regions and tables are
        left as they are until the next refresh.
        """
        self.text = text
        if parsed is None:
            parsed = parse_outline(text, self.config, self.max_line_length)
        self.parsed = parsed
        self._line_offsets = [0, *accumulate(len(line) for line in self.parsed.lines)]

    # Indentation

    def set_indent_strategy(self, strategy: IndentStrategy) -> None:
        logger.debug("%s: indentation strategy %s", self.name, strategy.name)
        self.strategy = strategy

    def reset_indent_strategy(self) -> None:
        self.set_indent_strategy(self.default_strategy)

    def install_tables(self, tables: IndentationTables) -> None:
        self.tables = tables

    def recompute_indentation(self) -> IndentationTables:
        """Rebuild and install the tables of the active strategy, then redraw."""
        self.install_tables(self.strategy.build_tables(self.deepest_level, self.numbering))
        self.request_redraw()
        return self.tables

    def request_redraw(self) -> None:
        if self.redraw_pending:
            logger.debug("%s: redraw already pending", self.name)
            return
        self.redraw_pending = True
        self.redraw_count += 1

    def redraw(self) -> list[str]:
        """Perform a pending redraw and return the rendered lines."""
        self.redraw_pending = False
        return self.render()

    # Refresh events

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def refresh(self) -> None:
        """Notify listeners that the document needs to be re-presented."""
        for listener in list(self._listeners):
            listener()

    def set_numbering(self, numbering: NumberingConfig) -> None:
        self.numbering = numbering
        logger.debug(
            "%s: numbering %s", self.name, "enabled" if numbering.enabled else "disabled"
        )
        self.refresh()

    def toggle_numbering(self) -> None:
        self.set_numbering(replace(self.numbering, enabled=not self.numbering.enabled))

    # Rendering

    def _visible_text(self, line: OutlineLine, labels: dict[int, str]) -> str:
        start = self._line_offsets[line.line_number]
        end = start + len(line.text)
        hidden = self.hider.hidden_in(start, end)
        label = labels.get(line.line_number)

        if hidden:
            shifted = [
                replace(region, start=region.start - start, end=region.end - start)
                for region in hidden
            ]
            visible = apply_hide_regions(line.text, shifted)
            return f"{label}{visible}" if label else visible

        if label:
            marker_run = line.level + len(self.config.separator)
            return f"{line.text[:marker_run]}{label}{line.text[marker_run:]}"
        return line.text

    def render(self) -> list[str]:
        """Render every line with its indentation prefix and numbering label.

        Hidden marker runs are dropped from the visible text; numbered
        headlines show their label in place of the hidden run, or after the
        visible run when nothing is hidden.
        """
        labels = number_headlines(self.parsed.headlines, self.numbering)
        rendered = []
        for line in self.parsed.outline:
            prefix = self.strategy.line_prefix(line.kind, line.level, self.tables, self.numbering)
            visible = self._visible_text(line, labels if line.kind is LineKind.HEADLINE else {})
            rendered.append(f"{prefix}{visible}" if visible else "")
        return rendered
