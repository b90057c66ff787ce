"""Hiding of leading marker runs on numbered headlines."""

from __future__ import annotations

import logging
import re
from bisect import bisect_left
from collections.abc import Iterable

from .models import HideRegion
from .numbering import NumberingConfig

logger = logging.getLogger(__name__)


def marker_run_pattern(
    config: NumberingConfig, marker: str = "*", separator: str = " "
) -> re.Pattern[str]:
    """Build the matcher for a hideable marker run.

    Matches at the start of a line: one to `config.max_level` marker
    characters (unbounded when no maximum is set) followed by exactly one
    separator.
    """
    upper = "" if config.max_level is None else str(config.max_level)
    return re.compile(
        rf"^{re.escape(marker)}{{1,{upper}}}{re.escape(separator)}", re.MULTILINE
    )


def compute_hide_regions(
    text: str, config: NumberingConfig, marker: str = "*", separator: str = " "
) -> list[HideRegion]:
    """Find the marker runs to hide when numbering is active.

    Args:
        text: Full document text.
        config: Numbering configuration. Nothing is hidden when numbering is
            disabled.
        marker: Marker character that forms headline runs.
        separator: Character that ends a marker run.

    Returns:
        list[HideRegion]: Non-overlapping regions in document order, each
            covering the marker run and its separator.

    Examples:
        compute_hide_regions("* a\\n** b\\n", NumberingConfig(True, 1))
        # [HideRegion(0, 2)]
    """
    if not config.enabled:
        return []
    if config.max_level is not None and config.max_level < 1:
        return []

    pattern = marker_run_pattern(config, marker, separator)
    return [HideRegion(match.start(), match.end()) for match in pattern.finditer(text)]


def apply_hide_regions(text: str, regions: Iterable[HideRegion]) -> str:
    """Return `text` with every hidden span removed.

    Regions must be sorted and non-overlapping, as produced by
    `compute_hide_regions`.
    """
    parts = []
    offset = 0
    for region in regions:
        parts.append(text[offset : region.start])
        offset = region.end
    parts.append(text[offset:])
    return "".join(parts)


class MarkerHider:
    """Owns the hide regions of one document.

    The region set is always replaced wholesale: every refresh discards all
    previous regions before computing new ones.

    Args:
        marker: Marker character that forms headline runs.
        separator: Character that ends a marker run.
    """

    def __init__(self, marker: str = "*", separator: str = " "):
        self.marker = marker
        self.separator = separator
        self._regions: tuple[HideRegion, ...] = ()
        self._starts: list[int] = []

    @property
    def regions(self) -> tuple[HideRegion, ...]:
        return self._regions

    def __len__(self) -> int:
        return len(self._regions)

    def clear(self) -> None:
        if self._regions:
            logger.debug("Removing %d hide regions", len(self._regions))
        self._regions = ()
        self._starts = []

    def refresh(self, text: str, config: NumberingConfig) -> tuple[HideRegion, ...]:
        """Replace the current regions with those computed for `text`."""
        self.clear()
        self._regions = tuple(compute_hide_regions(text, config, self.marker, self.separator))
        self._starts = [region.start for region in self._regions]
        logger.debug("Created %d hide regions", len(self._regions))
        return self._regions

    def hidden_in(self, start: int, end: int) -> list[HideRegion]:
        """Return the regions that fall inside the span ``[start, end)``.

        Regions are kept in document order, so only those starting inside the
        span are examined.
        """
        first = bisect_left(self._starts, start)
        last = bisect_left(self._starts, end, lo=first)
        return [region for region in self._regions[first:last] if region.end <= end]
