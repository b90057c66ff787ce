from outer_indent.hider import (
    MarkerHider,
    apply_hide_regions,
    compute_hide_regions,
    marker_run_pattern,
)
from outer_indent.models import HideRegion
from outer_indent.numbering import NumberingConfig

DOCUMENT = "* a\n** b\n*** c\n"


def test_disabled_numbering_hides_nothing():
    assert compute_hide_regions(DOCUMENT, NumberingConfig(enabled=False, max_level=2)) == []


def test_marker_runs_beyond_max_level_stay_visible():
    regions = compute_hide_regions(DOCUMENT, NumberingConfig(enabled=True, max_level=2))

    assert regions == [HideRegion(0, 2), HideRegion(4, 7)]
    assert [DOCUMENT[region.start : region.end] for region in regions] == ["* ", "** "]


def test_unbounded_numbering_hides_every_run():
    regions = compute_hide_regions(DOCUMENT, NumberingConfig(enabled=True))

    assert regions == [HideRegion(0, 2), HideRegion(4, 7), HideRegion(9, 13)]


def test_only_line_start_runs_with_separator_match():
    text = "text * a\n**bold**\n  * indented\n* ok\n"

    regions = compute_hide_regions(text, NumberingConfig(enabled=True))

    assert [text[region.start : region.end] for region in regions] == ["* "]


def test_custom_marker_and_separator():
    text = "## a\n#\tb\n"
    config = NumberingConfig(enabled=True)

    assert compute_hide_regions(text, config, marker="#", separator=" ") == [HideRegion(0, 3)]
    assert compute_hide_regions(text, config, marker="#", separator="\t") == [HideRegion(5, 7)]


def test_marker_run_pattern_bounds():
    pattern = marker_run_pattern(NumberingConfig(enabled=True, max_level=1))

    assert pattern.match("* a")
    assert not pattern.match("** a")


def test_apply_hide_regions_drops_hidden_spans():
    regions = compute_hide_regions(DOCUMENT, NumberingConfig(enabled=True, max_level=2))

    assert apply_hide_regions(DOCUMENT, regions) == "a\nb\n*** c\n"
    assert apply_hide_regions(DOCUMENT, []) == DOCUMENT


def test_hider_refresh_replaces_regions():
    hider = MarkerHider()

    first = hider.refresh(DOCUMENT, NumberingConfig(enabled=True))
    second = hider.refresh(DOCUMENT, NumberingConfig(enabled=True))

    assert first == second
    assert len(hider) == 3

    hider.refresh(DOCUMENT, NumberingConfig(enabled=True, max_level=1))
    assert hider.regions == (HideRegion(0, 2),)


def test_hider_refresh_with_numbering_off_removes_regions():
    hider = MarkerHider()
    hider.refresh(DOCUMENT, NumberingConfig(enabled=True))

    assert hider.refresh(DOCUMENT, NumberingConfig()) == ()
    assert hider.regions == ()


def test_hider_clear():
    hider = MarkerHider()
    hider.refresh(DOCUMENT, NumberingConfig(enabled=True))

    hider.clear()

    assert hider.regions == ()


def test_hidden_in_selects_regions_within_span():
    hider = MarkerHider()
    hider.refresh(DOCUMENT, NumberingConfig(enabled=True))

    assert hider.hidden_in(4, 8) == [HideRegion(4, 7)]
    assert hider.hidden_in(3, 4) == []


def test_max_level_below_one_hides_nothing():
    assert compute_hide_regions("* a\n", NumberingConfig(enabled=True, max_level=0)) == []


def test_hidden_in_picks_each_line_region_in_large_document():
    lines = [f"{'*' * (index % 3 + 1)} heading {index}\nbody {index}\n" for index in range(2000)]
    text = "".join(lines)
    hider = MarkerHider()
    regions = hider.refresh(text, NumberingConfig(enabled=True, max_level=2))

    offset = 0
    for line in text.splitlines(keepends=True):
        end = offset + len(line)
        expected = [region for region in regions if offset <= region.start and region.end <= end]
        assert hider.hidden_in(offset, end) == expected
        offset = end

    assert hider.hidden_in(len(text) - 20, len(text)) == []


def test_hidden_in_after_clear():
    hider = MarkerHider()
    hider.refresh(DOCUMENT, NumberingConfig(enabled=True))

    hider.clear()

    assert hider.hidden_in(0, len(DOCUMENT)) == []
