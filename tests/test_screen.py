import pytest

from cellwidgets.screen import Cell, CellScreen, Style


def test_size_reports_dimensions():
    screen = CellScreen(12, 5)
    assert screen.size() == (12, 5)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        CellScreen(-1, 3)


def test_set_and_get_round_trip():
    screen = CellScreen(4, 2)
    style = Style(foreground="red", background="blue")
    screen.set_content(1, 1, "e", ("\u0301",), style)
    cell = screen.get_content(1, 1)
    assert cell == Cell("e", ("\u0301",), style)


def test_out_of_range_is_ignored():
    screen = CellScreen(3, 3)
    screen.set_content(5, 0, "x", None, Style())
    assert screen.get_content(5, 0) == Cell()
    assert screen.row_text(0) == " " * 3


def test_row_text_includes_written_characters():
    screen = CellScreen(5, 1)
    screen.set_content(0, 0, "a", None, Style())
    screen.set_content(1, 0, "b", None, Style())
    assert screen.row_text(0) == "ab" + " " * 3


def test_row_text_outside_raises():
    screen = CellScreen(2, 2)
    with pytest.raises(IndexError):
        screen.row_text(2)


def test_style_copies_keep_other_fields():
    base = Style(foreground="red", background="blue")
    changed = base.with_foreground("green").with_background("white")
    assert base == Style(foreground="red", background="blue")
    assert changed.foreground == "green"
    assert changed.background == "white"
    assert changed.attributes == base.attributes