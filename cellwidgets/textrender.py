"""Drawing a text view's label and visible lines onto a cell screen."""

from __future__ import annotations

from cellwidgets.lineindex import TAB_SIZE
from cellwidgets.printing import print_with_style
from cellwidgets.screen import COLOR_DEFAULT, COLOR_NAMES, Align, Style
from cellwidgets.text import StepOptions, step


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding towards zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def _rgb(color: str) -> tuple[int, int, int] | None:
    if color.startswith("#") and len(color) == 7:
        try:
            value = int(color[1:], 16)
        except ValueError:
            return None
        return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
    return COLOR_NAMES.get(color.lower())


def _lightness(color: str) -> float:
    """Return the CIE L* lightness of a colour, scaled to 0..1."""
    rgb = _rgb(color)
    if rgb is None:
        return 0.0

    def linear(channel: int) -> float:
        c = channel / 255
        return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4

    red, green, blue = (linear(channel) for channel in rgb)
    luminance = 0.2126729 * red + 0.7151522 * green + 0.0721750 * blue
    if luminance > (6 / 29) ** 3:
        f = luminance ** (1 / 3)
    else:
        f = luminance / 3 * (29 / 6) ** 2 + 4 / 29
    return 1.16 * f - 0.16


def _fill(screen, x: int, y: int, width: int, height: int, style: Style) -> None:
    for row in range(y, y + height):
        for column in range(x, x + width):
            screen.set_content(column, row, " ", (), style)


def _options(view) -> StepOptions:
    options = StepOptions.NONE
    if view.style_tags:
        options |= StepOptions.STYLE
    if view.region_tags:
        options |= StepOptions.REGION
    return options


def _highlight_style(style: Style, background_color: str) -> Style:
    foreground, background = style.foreground, style.background
    if background == background_color:
        background = "white" if _lightness(foreground) < 0.5 else "black"
    return style.with_background(foreground).with_foreground(background)


def _scroll_to_highlights(view, width: int, height: int, options: StepOptions) -> None:
    index = view.index
    index.parse_ahead(
        view.buffer, width, options, view.text_style, view.align, view.wrap, view.word_wrap,
        lambda _number, _line: all(region in index.regions for region in view.highlights),
    )

    first_region = ""
    from_highlight = to_highlight = 0
    for region_id in view.highlights:
        line = index.regions.get(region_id, 0)
        if not first_region or line > to_highlight:
            to_highlight = line
        if not first_region or line < from_highlight:
            from_highlight = line
            first_region = region_id
    if not first_region:
        return

    if to_highlight - from_highlight + 1 < height:
        view.line_offset = _trunc_div(from_highlight + to_highlight - height, 2)
    else:
        view.line_offset = from_highlight

    if view.wrap and from_highlight < len(index):
        line = index[from_highlight]
        state = line.state
        rest = view.buffer[line.offset:]
        position = 0
        while rest and position < line.width and state.region != first_region:
            _, rest, state = step(rest, state, options)
            position += state.width
        if position - view.column_offset > 3 * width // 4:
            view.column_offset = position - width // 2
        if position - view.column_offset < 0:
            view.column_offset = position - width // 4


def _clamp_offsets(view, width: int, height: int) -> None:
    index = view.index
    if view.line_offset > len(index) - height:
        view.line_offset = len(index) - height
    if view.line_offset < 0:
        view.line_offset = 0

    if view.align in (Align.LEFT, Align.RIGHT):
        if view.column_offset + width > index.longest_line:
            view.column_offset = index.longest_line - width
        if view.column_offset < 0:
            view.column_offset = 0
    else:
        half = _trunc_div(index.longest_line - width, 2)
        if half > 0:
            view.column_offset = max(-half, min(view.column_offset, half))
        else:
            view.column_offset = 0


def _draw_line(view, screen, info, x: int, row: int, width: int, options: StepOptions) -> None:
    info.regions = None
    skip_width = x_pos = 0
    if view.align == Align.LEFT:
        skip_width = view.column_offset
    elif view.align == Align.CENTER:
        skip_width = view.column_offset + _trunc_div(info.width - width, 2)
        if skip_width < 0:
            skip_width = 0
            x_pos = _trunc_div(width - info.width, 2) - view.column_offset
    elif view.align == Align.RIGHT:
        max_width = max(width, view.index.longest_line)
        skip_width = view.column_offset - (max_width - info.width)
        if skip_width < 0:
            skip_width = 0
            x_pos = max_width - info.width - view.column_offset

    rest = view.buffer[info.offset:]
    state = info.state
    processed = 0
    while rest and x_pos < width and processed < info.length:
        cluster, rest, state = step(rest, state, options)
        char_width = state.width
        if cluster == "\t":
            char_width = TAB_SIZE - x_pos % TAB_SIZE if view.align == Align.LEFT else TAB_SIZE
        processed += state.gross_length

        if skip_width > 0:
            skip_width -= char_width
            continue

        if char_width > 0:
            style = state.style
            if state.region and state.region in view.highlights:
                style = _highlight_style(style, view.background_color)

            for offset in range(char_width - 1, -1, -1):
                if offset == 0:
                    screen.set_content(x + x_pos, row, cluster[0], tuple(cluster[1:]), style)
                else:
                    screen.set_content(x + x_pos + offset, row, " ", (), style)

            if state.region:
                if info.regions is None:
                    info.regions = {}
                start, end = info.regions.get(state.region, (x_pos, x_pos + char_width))
                info.regions[state.region] = (min(start, x_pos), max(end, x_pos + char_width))

        x_pos += char_width


def render_text_view(view, screen) -> None:
    """Draw a text view onto the screen and update its scroll state.

    The view provides: rect (x, y, width, height), label, label_width,
    label_style, field_width, field_height, text_style, background_color,
    buffer (the text), index (a LineIndex), wrap, word_wrap, align,
    style_tags, region_tags, highlights (a set of region IDs),
    scroll_to_highlights, line_offset, column_offset, track_end, last_width,
    page_size, max_lines and scrollable. Scroll offsets, page_size,
    last_width, the index and, when lines are purged, buffer are updated.
    """
    x, y, width, height = view.rect
    _fill(screen, x, y, width, height, Style(background=view.background_color))
    view.page_size = height

    label_style = view.label_style
    keep_background = label_style.background == COLOR_DEFAULT
    if view.label_width > 0:
        label_width = min(view.label_width, width)
        print_with_style(screen, view.label, x, y, 0, label_width, Align.LEFT, label_style, keep_background)
        x += label_width
        width -= label_width
    else:
        _, _, drawn = print_with_style(
            screen, view.label, x, y, 0, width, Align.LEFT, label_style, keep_background
        )
        x += drawn
        width -= drawn

    if 0 < view.field_width < width:
        width = view.field_width
    if 0 < view.field_height < height:
        height = view.field_height
    if width <= 0:
        return

    if view.text_style.background != view.background_color:
        _fill(screen, x, y, width, height, view.text_style)

    index = view.index
    if width != view.last_width and view.wrap:
        index.reset()
    view.last_width = width

    options = _options(view)

    def parse(stop) -> None:
        index.parse_ahead(
            view.buffer, width, options, view.text_style, view.align,
            view.wrap, view.word_wrap, stop,
        )

    if view.region_tags and view.scroll_to_highlights:
        _scroll_to_highlights(view, width, height, options)
    view.scroll_to_highlights = False

    parse(lambda number, _line: number >= view.line_offset + height)
    if view.track_end:
        parse(None)
        view.line_offset = len(index) - height
    _clamp_offsets(view, width, height)

    last_visible = min(len(index), view.line_offset + height)
    for line_number in range(view.line_offset, last_visible):
        _draw_line(view, screen, index[line_number], x, y + line_number - view.line_offset, width, options)

    purge_start = 0
    if not view.scrollable and view.line_offset > 0:
        purge_start = view.line_offset
    if view.max_lines > 0 and len(index) > view.max_lines:
        purge_start = len(index) - view.max_lines
    if 0 < purge_start < len(index):
        view.buffer = view.buffer[index[purge_start].offset:]
        index.reset()
        view.line_offset = 0