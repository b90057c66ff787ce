from __future__ import annotations

from pathlib import Path

import pytest

from outer_indent.config import OutlineConfig
from outer_indent.models import HideRegion
from outer_indent.numbering import NumberingConfig
from outer_indent.parser import ParseFileError
from outer_indent.session import OutlineSession
from outer_indent.tables import DefaultIndentation, OuterIndentation, build_default_tables

DOCUMENT = "* Intro\nBody.\n** Details\nMore.\n"


def test_new_session_uses_stock_indentation():
    session = OutlineSession(DOCUMENT)

    assert session.strategy == DefaultIndentation(2)
    assert session.tables == build_default_tables(2)
    assert session.render() == ["* Intro", "  Body.", " ** Details", "    More."]


def test_render_with_outer_strategy():
    session = OutlineSession(DOCUMENT)
    session.set_indent_strategy(OuterIndentation())
    session.recompute_indentation()

    assert session.render() == [" * Intro", "   Body.", "** Details", "   More."]


def test_numbering_without_hidden_markers_shows_label_after_run():
    session = OutlineSession(DOCUMENT, OutlineConfig(numbering=True))

    assert session.render() == ["* 1 Intro", "  Body.", " ** 1.1 Details", "    More."]


def test_hidden_markers_are_replaced_by_labels():
    session = OutlineSession(DOCUMENT, OutlineConfig(numbering=True))
    session.hider.refresh(session.text, session.numbering)

    assert session.hider.regions == (HideRegion(0, 2), HideRegion(14, 17))
    assert session.render()[0] == "1 Intro"
    assert session.render()[2] == " 1.1 Details"


def test_blank_lines_render_empty():
    session = OutlineSession("* A\n\ntext\n")
    session.set_indent_strategy(OuterIndentation())
    session.recompute_indentation()

    assert session.render() == ["* A", "", "  text"]


def test_redraw_requests_are_coalesced():
    session = OutlineSession(DOCUMENT)
    assert session.redraw_pending is True
    assert session.redraw_count == 1

    session.request_redraw()
    assert session.redraw_count == 1

    lines = session.redraw()
    assert lines == session.render()
    assert session.redraw_pending is False

    session.request_redraw()
    assert session.redraw_count == 2


def test_listeners_fire_on_refresh_and_numbering_changes():
    session = OutlineSession(DOCUMENT)
    calls = []

    def listener():
        calls.append(session.numbering.enabled)

    session.subscribe(listener)
    session.subscribe(listener)
    assert session.listeners == (listener,)

    session.refresh()
    session.toggle_numbering()
    session.set_numbering(NumberingConfig())
    assert calls == [False, True, False]

    session.unsubscribe(listener)
    session.unsubscribe(listener)
    session.refresh()
    assert calls == [False, True, False]


def test_set_text_reparses_document():
    session = OutlineSession(DOCUMENT)

    session.set_text("* A\n** B\n*** C\n")

    assert session.deepest_level == 3
    assert session.text.startswith("* A")


def test_is_outline_document():
    assert OutlineSession(DOCUMENT).is_outline_document
    assert not OutlineSession(DOCUMENT, document_type="md").is_outline_document


def test_from_file(tmp_path: Path):
    target = tmp_path / "notes.org"
    target.write_text(DOCUMENT, encoding="utf-8")

    session = OutlineSession.from_file(target)

    assert session.document_type == "org"
    assert session.name == str(target)
    assert session.deepest_level == 2


def test_from_file_keeps_foreign_document_type(tmp_path: Path):
    target = tmp_path / "notes.txt"
    target.write_text(DOCUMENT, encoding="utf-8")

    assert OutlineSession.from_file(target).document_type == "txt"


def test_from_file_respects_line_length_override(tmp_path: Path):
    target = tmp_path / "notes.org"
    target.write_text("* " + "x" * 30 + "\n", encoding="utf-8")

    with pytest.raises(ParseFileError):
        OutlineSession.from_file(target, max_line_length=10)


def test_from_file_parses_once(tmp_path: Path, monkeypatch):
    target = tmp_path / "notes.org"
    target.write_text(DOCUMENT, encoding="utf-8")

    def fail(*args, **kwargs):
        raise AssertionError("document parsed twice")

    monkeypatch.setattr("outer_indent.session.parse_outline", fail)
    session = OutlineSession.from_file(target)

    assert session.text == DOCUMENT
    assert session.deepest_level == 2
    assert session.render() == ["* Intro", "  Body.", " ** Details", "    More."]
