from cellwidgets.printing import print_simple, print_text, print_with_style
from cellwidgets.screen import PRIMARY_TEXT_COLOR, Align, CellScreen, Style


def test_left_aligned_print():
    screen = CellScreen(10, 1)
    text = "hello"
    start, end, width = print_with_style(screen, text, 0, 0, 0, 10, Align.LEFT, Style(), False)
    assert (start, end, width) == (0, len(text), len(text))
    assert screen.row_text(0).startswith(text)


def test_truncated_to_max_width():
    screen = CellScreen(10, 1)
    _, end, width = print_with_style(screen, "hello", 0, 0, 0, 3, Align.LEFT, Style(), False)
    assert width == 3
    assert end == 3
    assert screen.row_text(0)[:3] == "hello"[:3]
    assert screen.row_text(0)[3] == " "


def test_right_aligned_print():
    screen = CellScreen(10, 1)
    text = "hello"
    _, _, width = print_with_style(screen, text, 0, 0, 0, 10, Align.RIGHT, Style(), False)
    assert width == len(text)
    assert screen.row_text(0).endswith(text)


def test_center_aligned_is_symmetric():
    screen = CellScreen(7, 1)
    print_with_style(screen, "abc", 0, 0, 0, 7, Align.CENTER, Style(), False)
    row = screen.row_text(0)
    left = row.index("abc")
    right = len(row) - left - len("abc")
    assert left == right


def test_outside_rows_print_nothing():
    screen = CellScreen(5, 2)
    assert print_with_style(screen, "x", 0, 2, 0, 5, Align.LEFT, Style(), False) == (0, 0, 0)
    assert print_with_style(screen, "x", 0, -1, 0, 5, Align.LEFT, Style(), False) == (0, 0, 0)
    assert print_with_style(screen, "", 0, 0, 0, 5, Align.LEFT, Style(), False) == (0, 0, 0)


def test_style_tag_colours_cells():
    screen = CellScreen(5, 1)
    text = "[red]ab"
    _, end, width = print_with_style(screen, text, 0, 0, 0, 5, Align.LEFT, Style(), False)
    assert end == len(text)
    assert width == len("ab")
    assert screen.get_content(0, 0).style.foreground == "red"
    assert screen.get_content(1, 0).char == "b"


def test_maintain_background_keeps_existing():
    screen = CellScreen(5, 1)
    screen.set_content(0, 0, " ", (), Style(background="blue"))
    style = Style(foreground="red", background="green")
    print_with_style(screen, "x", 0, 0, 0, 5, Align.LEFT, style, True)
    cell = screen.get_content(0, 0)
    assert cell.style.background == "blue"
    assert cell.style.foreground == "red"


def test_background_overwritten_without_maintain():
    screen = CellScreen(5, 1)
    screen.set_content(0, 0, " ", (), Style(background="blue"))
    print_with_style(screen, "x", 0, 0, 0, 5, Align.LEFT, Style(background="green"), False)
    assert screen.get_content(0, 0).style.background == "green"


def test_skip_width_skips_leading_cells():
    screen = CellScreen(10, 1)
    start, end, width = print_with_style(screen, "hello", 0, 0, 2, 10, Align.LEFT, Style(), False)
    assert start == 2
    assert end == len("hello")
    assert width == len("hello") - 2
    assert screen.row_text(0).startswith("hello"[2:])


def test_wide_character_fills_two_cells():
    screen = CellScreen(4, 1)
    _, _, width = print_with_style(screen, "\u4e16", 0, 0, 0, 4, Align.LEFT, Style(), False)
    assert width == 2
    assert screen.get_content(0, 0).char == "\u4e16"
    assert screen.get_content(1, 0).char == " "


def test_print_text_counts_characters_and_width():
    screen = CellScreen(10, 1)
    text = "abc"
    assert print_text(screen, text, 0, 0, 10, Align.LEFT, "red") == (len(text), len(text))
    assert screen.get_content(0, 0).style.foreground == "red"


def test_print_simple_uses_primary_colour():
    screen = CellScreen(10, 1)
    print_simple(screen, "hi", 1, 0)
    assert screen.get_content(1, 0).char == "h"
    assert screen.get_content(1, 0).style.foreground == PRIMARY_TEXT_COLOR