"""Column width occupied by a headline's marker run or numbering label."""

from __future__ import annotations

from .numbering import NumberingConfig


def prefix_length(level: int, config: NumberingConfig, deepest_numbered_level: int | None) -> int:
    """Return the number of columns a headline's leading run occupies.

    Without numbering, or past `deepest_numbered_level`, the run is `level`
    marker characters plus one separator. Within the numbered range it is the
    width of the label rendered for an all-ones path of depth `level`
    (``"1.1.1 "`` at level 3 with the dotted format).

    The all-ones path stands in for the real counters. Formats whose width
    depends on counter values rather than depth (``"10.1"`` versus
    ``"9.1"``) are measured with the width of the all-ones label.

    Args:
        level: Headline nesting level.
        config: Numbering configuration.
        deepest_numbered_level: Deepest level that receives a number; None
            numbers every level.

    Returns:
        int: Width of the marker run or label, in columns.

    Raises:
        ValueError: If `level` is negative.

    Examples:
        prefix_length(3, NumberingConfig(), None)  # 4
        prefix_length(3, NumberingConfig(enabled=True), 3)  # len("1.1.1 ") == 6
    """
    if level < 0:
        raise ValueError(f"`level` must be >= 0, got {level}")

    if not config.enabled or (
        deepest_numbered_level is not None and level > deepest_numbered_level
    ):
        return level + 1

    return len(config.format_function([1] * level))
