import pytest

from outer_indent.models import Headline
from outer_indent.numbering import (
    NUMBER_FORMATS,
    NumberingConfig,
    dotted_format,
    dotted_period_format,
    get_format,
    number_headlines,
    parenthesized_format,
)


def _headlines(*levels: int) -> list[Headline]:
    return [Headline(index, level, f"h{index}") for index, level in enumerate(levels)]


def test_formats():
    assert dotted_format([1, 2, 3]) == "1.2.3 "
    assert dotted_period_format([4]) == "4. "
    assert parenthesized_format([1, 10]) == "1.10) "


def test_get_format_looks_up_registry():
    assert get_format("dotted") is dotted_format
    assert set(NUMBER_FORMATS) == {"dotted", "dotted-period", "parenthesized"}


def test_get_format_rejects_unknown_names():
    with pytest.raises(ValueError, match="roman"):
        get_format("roman")


def test_numbers_respects_max_level():
    config = NumberingConfig(enabled=True, max_level=2)

    assert config.numbers(1)
    assert config.numbers(2)
    assert not config.numbers(3)
    assert not NumberingConfig().numbers(1)


def test_number_headlines_counts_per_level():
    labels = number_headlines(_headlines(1, 2, 2, 1, 2), NumberingConfig(enabled=True))

    assert labels == {0: "1 ", 1: "1.1 ", 2: "1.2 ", 3: "2 ", 4: "2.1 "}


def test_number_headlines_fills_skipped_levels_with_zero():
    labels = number_headlines(_headlines(1, 3, 2, 3), NumberingConfig(enabled=True))

    assert labels == {0: "1 ", 1: "1.0.1 ", 2: "1.1 ", 3: "1.1.1 "}


def test_number_headlines_skips_deep_headlines_and_inline_tasks():
    headlines = [
        Headline(0, 1, "a"),
        Headline(1, 3, "too deep"),
        Headline(2, 2, "b"),
        Headline(3, 15, "task", is_inline_task=True),
        Headline(4, 2, "c"),
    ]

    labels = number_headlines(headlines, NumberingConfig(enabled=True, max_level=2))

    assert labels == {0: "1 ", 2: "1.1 ", 4: "1.2 "}


def test_number_headlines_disabled():
    assert number_headlines(_headlines(1, 2), NumberingConfig()) == {}


def test_number_headlines_uses_format_function():
    config = NumberingConfig(enabled=True, format_function=dotted_period_format)

    assert number_headlines(_headlines(1, 2), config) == {0: "1. ", 1: "1.1. "}
