import pytest

from cellwidgets.events import Key, KeyEvent, MouseEvent


def test_from_rune_builds_rune_event():
    event = KeyEvent.from_rune("g")
    assert event.key is Key.RUNE
    assert event.char == "g"
    assert event == KeyEvent(Key.RUNE, "g")


def test_rune_needs_one_character():
    with pytest.raises(ValueError):
        KeyEvent.from_rune("gg")
    with pytest.raises(ValueError):
        KeyEvent(Key.RUNE)


def test_special_key_carries_no_character():
    assert KeyEvent(Key.ENTER).char == ""
    with pytest.raises(ValueError):
        KeyEvent(Key.ENTER, "x")


def test_mouse_event_position():
    event = MouseEvent(3, 7)
    assert event.position == (3, 7)