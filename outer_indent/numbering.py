"""Hierarchical headline numbering."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from .models import Headline

FormatFunction = Callable[[Sequence[int]], str]


def dotted_format(counters: Sequence[int]) -> str:
    """Render counters as ``"1.2.3 "``.

    The trailing space makes a level-1 label exactly as wide as a level-1
    marker run (``"* "``).

    Examples:
        dotted_format([1, 2, 3])  # "1.2.3 "
    """
    return ".".join(str(counter) for counter in counters) + " "


def dotted_period_format(counters: Sequence[int]) -> str:
    """Render counters as ``"1.2.3. "``."""
    return ".".join(str(counter) for counter in counters) + ". "


def parenthesized_format(counters: Sequence[int]) -> str:
    """Render counters as ``"1.2.3) "``."""
    return ".".join(str(counter) for counter in counters) + ") "


NUMBER_FORMATS: dict[str, FormatFunction] = {
    "dotted": dotted_format,
    "dotted-period": dotted_period_format,
    "parenthesized": parenthesized_format,
}


def get_format(name: str) -> FormatFunction:
    """Look up a registered format function by name.

    Raises:
        ValueError: If no format is registered under `name`.
    """
    try:
        return NUMBER_FORMATS[name]
    except KeyError as error:
        choices = ", ".join(NUMBER_FORMATS)
        raise ValueError(f"Unknown number format {name!r} (expected one of: {choices})") from error


@dataclass(frozen=True)
class NumberingConfig:
    """Numbering settings shared by the indentation builder and the marker hider.

    Attributes:
        enabled: Whether headlines are numbered. When False, numbering has no
            effect on indentation or marker hiding.
        max_level: Deepest numbered level; None numbers every level.
        format_function: Renders a sequence of per-level counters as a label.
    """

    enabled: bool = False
    max_level: int | None = None
    format_function: FormatFunction = dotted_format

    def numbers(self, level: int) -> bool:
        """Return True when a headline at `level` receives a number."""
        return self.enabled and (self.max_level is None or level <= self.max_level)


def number_headlines(headlines: Iterable[Headline], config: NumberingConfig) -> dict[int, str]:
    """Compute rendered numbering labels for headlines.

    Counters increment at each headline's level and reset below it. A headline
    that skips intermediate levels gets ``0`` for the missing ones, so
    ``* A`` followed by ``*** B`` is numbered ``1`` then ``1.0.1``. Inline
    tasks and headlines deeper than `config.max_level` are left unnumbered and
    do not advance any counter.

    Every headline within range is numbered; excluding individual headlines is
    not supported because the indentation tables assume uniform numbering.

    Args:
        headlines: Headlines in document order.
        config: Numbering configuration.

    Returns:
        dict[int, str]: Labels keyed by the headline's line number. Empty when
            numbering is disabled.

    Examples:
        number_headlines([Headline(0, 1, "A"), Headline(1, 2, "B")], NumberingConfig(True))
        # {0: "1 ", 1: "1.1 "}
    """
    if not config.enabled:
        return {}

    counters: list[int] = []
    labels: dict[int, str] = {}
    for headline in headlines:
        if headline.is_inline_task or not config.numbers(headline.level):
            continue
        level = headline.level
        if len(counters) < level:
            counters.extend([0] * (level - len(counters)))
        del counters[level:]
        counters[level - 1] += 1
        labels[headline.line_number] = config.format_function(counters)
    return labels
