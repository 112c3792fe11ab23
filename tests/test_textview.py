import threading

import pytest

from cellwidgets.events import Key, KeyEvent, MouseAction, MouseEvent
from cellwidgets.screen import CellScreen
from cellwidgets.text import StepOptions, strip_tags
from cellwidgets.textview import TextView

LINES = [f"line{number}" for number in range(10)]
MULTILINE = "\n".join(LINES)


def _view(width=20, height=3, text=MULTILINE):
    view = TextView()
    view.set_rect(0, 0, width, height)
    view.set_text(text)
    return view


def test_set_and_get_text_round_trip():
    view = TextView()
    view.set_text("plain text")
    assert view.get_text(False) == "plain text"
    assert view.get_text(True) == "plain text"


def test_get_text_strips_style_tags_when_enabled():
    text = "[red]hello[-] world"
    view = TextView().set_dynamic_colors(True)
    view.set_text(text)
    assert view.get_text(False) == text
    assert view.get_text(True) == strip_tags(text, StepOptions.STYLE)
    assert "[" not in view.get_text(True)


def test_get_text_strips_region_tags_when_enabled():
    text = '["a"]abc[""]'
    view = TextView().set_regions(True)
    view.set_text(text)
    assert view.get_text(True) == "abc"


def test_write_appends_and_returns_length():
    view = TextView()
    assert view.write("ab") == 2
    assert view.write(b"cd") == 2
    assert view.get_text(False) == "ab" + "cd"


def test_clear_removes_text():
    view = _view()
    view.clear()
    assert view.get_text(False) == ""
    assert view.original_line_count() == 0


def test_batch_writer_writes_and_releases_lock():
    view = _view()
    with view.batch_writer() as writer:
        writer.clear()
        writer.write("first\n")
        writer.write("second")
    assert view.get_text(False) == "first\nsecond"
    assert view.write("!") == 1


def test_changed_callback_runs_after_write():
    event = threading.Event()
    view = TextView()
    view.changed = event.set
    view.write("x")
    assert event.wait(2)


def test_original_line_count():
    view = _view()
    assert view.original_line_count() == len(LINES)


def test_wrapped_line_count_without_wrap_matches_original():
    view = _view().set_wrap(False)
    assert view.wrapped_line_count() == view.original_line_count()


def test_wrapped_line_count_grows_with_narrow_field():
    view = TextView().set_size(0, 4)
    view.set_text("abcdefghijklmnop")
    assert view.wrapped_line_count() > view.original_line_count()


def test_highlight_known_and_unknown_regions():
    view = TextView().set_regions(True)
    view.set_text('["a"]one[""] ["b"]two[""]')
    view.highlight("a", "missing")
    assert view.get_highlights() == ["a"]
    view.highlight()
    assert view.get_highlights() == []


def test_highlighted_callback_reports_changes():
    calls = []
    view = TextView().set_regions(True)
    view.set_text('["a"]one[""] ["b"]two[""]')
    view.highlighted = lambda added, removed, remaining: calls.append((added, removed, remaining))
    view.highlight("a")
    view.highlight("b")
    assert calls == [(["a"], [], []), (["b"], ["a"], [])]


def test_toggle_highlights():
    view = TextView().set_regions(True)
    view.set_text('["a"]one[""] ["b"]two[""]')
    view.toggle_highlights = True
    view.highlight("a")
    view.highlight("b")
    assert sorted(view.get_highlights()) == ["a", "b"]
    view.highlight("a")
    assert view.get_highlights() == ["b"]


def test_get_region_text():
    view = TextView().set_regions(True)
    view.set_text('["a"]one[""] ["b"]two[""]')
    assert view.get_region_text("b") == "two"
    assert view.get_region_text("nope") == ""
    view.set_regions(False)
    assert view.get_region_text("b") == ""


def test_scroll_to_ignored_when_not_scrollable():
    view = TextView().set_scrollable(False)
    before = view.scroll_offset
    view.scroll_to(5, 2)
    assert view.scroll_offset == before
    assert view.track_end is True


def test_scroll_to_sets_offsets():
    view = TextView()
    view.scroll_to(5, 2)
    assert view.scroll_offset == (5, 2)


def test_draw_shows_text_and_label():
    screen = CellScreen(20, 3)
    view = _view(text="hello")
    view.label = "Name: "
    view.draw(screen)
    assert screen.row_text(0).startswith("Name: hello")


def test_keys_scroll_the_view():
    screen = CellScreen(20, 3)
    view = _view()
    view.draw(screen)
    assert screen.row_text(0).startswith(LINES[0])
    view.handle_key(KeyEvent(Key.DOWN))
    view.draw(screen)
    assert screen.row_text(0).startswith(LINES[1])
    view.handle_key(KeyEvent.from_rune("G"))
    view.draw(screen)
    assert screen.row_text(2).startswith(LINES[-1])
    view.handle_key(KeyEvent(Key.HOME))
    view.draw(screen)
    assert screen.row_text(0).startswith(LINES[0])


def test_max_lines_purges_oldest_lines():
    view = _view().set_max_lines(3)
    view.draw(CellScreen(20, 3))
    assert view.get_text(False) == "\n".join(LINES[7:])


def test_not_scrollable_discards_lines_above_view():
    view = _view().set_scrollable(False)
    view.draw(CellScreen(20, 3))
    assert view.get_text(False) == "\n".join(LINES[7:])


def test_done_and_finished_called_for_escape():
    keys = []
    view = _view()
    view.done = keys.append
    view.finished = keys.append
    view.handle_key(KeyEvent(Key.ESCAPE))
    assert keys == [Key.ESCAPE, Key.ESCAPE]


def test_mouse_click_highlights_region_and_clears():
    screen = CellScreen(20, 3)
    view = _view(text='["a"]abc[""] def').set_regions(True)
    view.draw(screen)
    assert view.handle_mouse(MouseAction.LEFT_CLICK, MouseEvent(1, 0), lambda _p: None)
    assert view.get_highlights() == ["a"]
    view.handle_mouse(MouseAction.LEFT_CLICK, MouseEvent(5, 0), lambda _p: None)
    assert view.get_highlights() == []


def test_mouse_outside_and_focus():
    view = _view()
    focused = []
    assert view.handle_mouse(MouseAction.LEFT_DOWN, MouseEvent(50, 50), focused.append) is False
    assert view.handle_mouse(MouseAction.LEFT_DOWN, MouseEvent(0, 0), focused.append) is True
    assert focused == [view]


def test_highlighted_region_is_drawn_inverted():
    screen = CellScreen(20, 3)
    view = _view(text='["a"]abc[""]').set_regions(True)
    view.highlight("a")
    view.draw(screen)
    assert screen.get_content(0, 0).style.background == view.text_style.foreground


def test_focus_in_form_when_not_scrollable_finishes():
    finished = []
    view = TextView().set_scrollable(False)
    view.finished = finished.append
    view.focus(lambda _p: None)
    assert finished == [None]
    assert view.has_focus is False


def test_focus_sets_has_focus():
    view = TextView()
    view.focus(lambda _p: None)
    assert view.has_focus is True


@pytest.mark.parametrize("action", [MouseAction.SCROLL_UP, MouseAction.SCROLL_DOWN])
def test_scroll_wheel_ignored_when_not_scrollable(action):
    view = _view().set_scrollable(False)
    assert view.handle_mouse(action, MouseEvent(0, 0), lambda _p: None) is False