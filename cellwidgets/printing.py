"""Printing tagged text onto a cell screen."""

from __future__ import annotations

from cellwidgets.screen import COLOR_DEFAULT, PRIMARY_TEXT_COLOR, Align, Style
from cellwidgets.text import StepOptions, StepState, step

_MAX_INT32 = 2**31 - 1


def print_with_style(screen, text, x, y, skip_width, max_width, align, style, maintain_background):
    """Print text into the box (x, y, max_width, 1).

    skip_width cells are skipped at the start of the text. Returns the start
    index, the end index (exclusive) and the screen width actually printed. If
    maintain_background is true, the existing screen background is kept.
    """
    total_width, total_height = screen.size()
    if max_width <= 0 or not text or y < 0 or y >= total_height:
        return 0, 0, 0

    if maintain_background:
        style = style.with_background(COLOR_DEFAULT)

    options = StepOptions.STYLE
    start = printed_width = text_width = 0
    state = StepState(style=style)
    skipped_state = state
    remaining = text
    while remaining:
        _, remaining, state = step(remaining, state, options)
        if skip_width > 0:
            skip_width -= state.width
            text = remaining
            skipped_state = state
            start += state.gross_length
        else:
            text_width += state.width
    state = skipped_state

    if align == Align.RIGHT:
        while text and text_width > max_width:
            _, text, state = step(text, state, options)
            text_width -= state.width
            start += state.gross_length
        x, max_width = x + max_width - text_width, text_width
    elif align == Align.CENTER:
        subtracted = (text_width - max_width) // 2
        while text and subtracted > 0:
            _, text, state = step(text, state, options)
            subtracted -= state.width
            text_width -= state.width
            start += state.gross_length
        if text_width < max_width:
            x, max_width = x + max_width // 2 - text_width // 2, text_width

    end = start
    right_border = x + max_width
    while text and x < right_border and x < total_width:
        cluster, text, state = step(text, state, options)
        if not cluster:
            break
        width = state.width
        if width > 0:
            final_style = state.style
            if maintain_background and final_style.background == COLOR_DEFAULT:
                existing = screen.get_content(x, y).style
                final_style = final_style.with_background(existing.background)
            for offset in range(width - 1, -1, -1):
                if offset == 0:
                    screen.set_content(x, y, cluster[0], tuple(cluster[1:]), final_style)
                else:
                    screen.set_content(x + offset, y, " ", (), final_style)
        x += width
        end += state.gross_length
        printed_width += width

    return start, end, printed_width


def print_text(screen, text, x, y, max_width, align, color):
    """Print text in one colour, keeping the background.

    Returns the number of characters printed (tags included) and the width used.
    """
    start, end, width = print_with_style(
        screen, text, x, y, 0, max_width, align, Style(foreground=color), True
    )
    return end - start, width


def print_simple(screen, text, x, y):
    """Print text in the primary text colour at the given position."""
    print_text(screen, text, x, y, _MAX_INT32, Align.LEFT, PRIMARY_TEXT_COLOR)