from cellwidgets.screen import Style
from cellwidgets.text import (
    StepOptions,
    StepState,
    escape,
    step,
    strip_tags,
    unescape,
)


def test_plain_text_is_unchanged():
    text = "hello world"
    assert strip_tags(text, StepOptions.STYLE | StepOptions.REGION) == text


def test_style_tags_are_removed():
    assert strip_tags("[red]hi[-]", StepOptions.STYLE) == "hi"


def test_tags_kept_without_options():
    text = '[red]hi["a"]x'
    assert strip_tags(text, StepOptions.NONE) == text


def test_region_tags_are_removed():
    assert strip_tags('["r1"]abc[""]d', StepOptions.REGION) == "abcd"


def test_unknown_colour_is_literal():
    text = "[nonsense]x"
    assert strip_tags(text, StepOptions.STYLE) == text


def test_region_tag_sets_region_and_gross_length():
    text = '["a"]x'
    cluster, rest, state = step(text, None, StepOptions.REGION)
    assert cluster == "x"
    assert rest == ""
    assert state.region == "a"
    assert state.gross_length == len(text)


def test_style_tag_sets_foreground():
    cluster, _, state = step("[red]x", None, StepOptions.STYLE)
    assert cluster == "x"
    assert state.style.foreground == "red"
    assert state.gross_length == len("[red]x")


def test_reset_restores_base_foreground():
    state = StepState(style=Style(foreground="white"))
    _, rest, state = step("[red]a[-]b", state, StepOptions.STYLE)
    assert state.style.foreground == "red"
    cluster, _, state = step(rest, state, StepOptions.STYLE)
    assert cluster == "b"
    assert state.style.foreground == "white"


def test_attribute_tag_adds_and_removes():
    _, rest, state = step("[::b]a[::B]b", None, StepOptions.STYLE)
    assert "bold" in state.style.attributes
    _, _, state = step(rest, state, StepOptions.STYLE)
    assert "bold" not in state.style.attributes


def test_escape_round_trip():
    text = "see [red] and [\"x\"] here"
    assert unescape(escape(text)) == text


def test_escape_form():
    assert escape("[red]") == "[red[]"


def test_escaped_tag_displays_literally():
    assert strip_tags(escape("[red]"), StepOptions.STYLE) == "[red]"


def _break_results(text):
    results = []
    state = None
    while text:
        _, text, state = step(text, state, StepOptions.NONE)
        results.append(state.line_break())
    return results


def test_mandatory_break_after_newline():
    results = _break_results("a\nb")
    assert len(results) == 3
    assert results[1] == (True, False)
    assert results.count((True, False)) == 1


def test_optional_break_after_space():
    _, rest, state = step(" b", None, StepOptions.NONE)
    assert state.line_break() == (True, True)
    assert rest == "b"


def test_no_break_inside_word():
    _, _, state = step("ab", None, StepOptions.NONE)
    assert state.line_break() == (False, False)


def test_wide_character_width():
    _, _, state = step("\u4e16", None, StepOptions.NONE)
    assert state.width == 2


def test_combining_sequence_is_one_cluster():
    text = "e\u0301x"
    cluster, rest, state = step(text, None, StepOptions.NONE)
    assert cluster == "e\u0301"
    assert rest == "x"
    assert state.gross_length == len(cluster)


def test_trailing_tags_yield_empty_cluster():
    cluster, rest, state = step("[red]", None, StepOptions.STYLE)
    assert cluster == ""
    assert rest == ""
    assert state.width == 0