"""A read-only text widget with style tags, regions, highlights and scrolling."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from cellwidgets.events import Key, KeyEvent, MouseAction, MouseEvent
from cellwidgets.lineindex import LineIndex
from cellwidgets.screen import (
    PRIMARY_TEXT_COLOR,
    PRIMITIVE_BACKGROUND_COLOR,
    SECONDARY_TEXT_COLOR,
    Align,
    CellScreen,
    Style,
)
from cellwidgets.text import StepOptions, step, strip_tags
from cellwidgets.textrender import render_text_view


class TextViewWriter:
    """Writes to a text view while holding its lock until closed.

    Obtain one from TextView.batch_writer(); it also works as a context manager.
    """

    def __init__(self, view: TextView) -> None:
        self._view = view
        self._closed = False

    def write(self, data) -> int:
        """Append text (str or UTF-8 bytes) without taking the lock again."""
        return self._view._write(data)

    def clear(self) -> None:
        """Remove all text from the view."""
        self._view._clear()

    def close(self) -> None:
        """Release the view's lock."""
        if not self._closed:
            self._closed = True
            self._view._lock.release()

    @property
    def has_focus(self) -> bool:
        return self._view._has_focus

    def __enter__(self) -> TextViewWriter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class TextView:
    """Displays text that can be replaced or appended to but not edited.

    Scrollable views keep all text and can be navigated with h/j/k/l, the
    arrow keys, g/home, G/end, Ctrl-F/page down and Ctrl-B/page up. Views that
    are not scrollable discard lines that move out of view at the top.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.index = LineIndex()
        self.buffer = ""
        self.rect = (0, 0, 15, 10)
        self.label = ""
        self.label_width = 0
        self.label_style = Style(foreground=SECONDARY_TEXT_COLOR)
        self.field_width = 0
        self.field_height = 0
        self.background_color = PRIMITIVE_BACKGROUND_COLOR
        self._text_style = Style(foreground=PRIMARY_TEXT_COLOR, background=PRIMITIVE_BACKGROUND_COLOR)
        self.align = Align.LEFT
        self.highlights: dict[str, None] = {}
        self.last_width = 0
        self.page_size = 0
        self.line_offset = -1
        self.track_end = False
        self.column_offset = 0
        self.max_lines = 0
        self.scroll_to_highlights = False
        self.toggle_highlights = False
        self.changed: Optional[Callable[[], None]] = None
        self.done: Optional[Callable[[Key], None]] = None
        self.highlighted: Optional[Callable[[list, list, list], None]] = None
        self.finished: Optional[Callable[[Optional[Key]], None]] = None
        self._scrollable = True
        self._wrap = True
        self._word_wrap = True
        self._style_tags = False
        self._region_tags = False
        self._has_focus = False

    # Configuration -------------------------------------------------------

    def set_rect(self, x, y, width, height) -> None:
        """Place the widget on the screen."""
        self.rect = (x, y, max(width, 0), max(height, 0))

    def set_size(self, rows: int, columns: int) -> TextView:
        """Limit the text area to rows x columns (0 means all available space)."""
        self.field_height = rows
        self.field_width = columns
        return self

    @property
    def text_style(self) -> Style:
        return self._text_style

    @text_style.setter
    def text_style(self, style: Style) -> None:
        self._text_style = style
        self.index.reset()

    def set_text_color(self, color: str) -> TextView:
        self.text_style = self._text_style.with_foreground(color)
        return self

    def set_background_color(self, color: str) -> TextView:
        """Set the widget background, which is also the text background."""
        self.background_color = color
        self.text_style = self._text_style.with_background(color)
        return self

    def set_text_align(self, align: Align) -> TextView:
        self.align = align
        return self

    def set_max_lines(self, max_lines: int) -> TextView:
        """Keep at most this many (wrapped) lines when drawing; 0 keeps all."""
        self.max_lines = max_lines
        return self

    @property
    def scrollable(self) -> bool:
        return self._scrollable

    def set_scrollable(self, scrollable: bool) -> TextView:
        """Set whether text above the top row is kept for scrolling."""
        self._scrollable = scrollable
        if not scrollable:
            self.track_end = True
        return self

    @property
    def wrap(self) -> bool:
        return self._wrap

    def set_wrap(self, wrap: bool) -> TextView:
        """Set whether long lines wrap onto the next line."""
        if self._wrap != wrap:
            self.index.reset()
        self._wrap = wrap
        return self

    @property
    def word_wrap(self) -> bool:
        return self._word_wrap

    def set_word_wrap(self, word_wrap: bool) -> TextView:
        """Set whether wrapping happens at word boundaries (needs wrap)."""
        if self._wrap and self._word_wrap != word_wrap:
            self.index.reset()
        self._word_wrap = word_wrap
        return self

    @property
    def style_tags(self) -> bool:
        return self._style_tags

    def set_dynamic_colors(self, dynamic: bool) -> TextView:
        """Set whether style tags in the text are interpreted."""
        if self._style_tags != dynamic:
            self.index.reset()
        self._style_tags = dynamic
        return self

    @property
    def region_tags(self) -> bool:
        return self._region_tags

    def set_regions(self, regions: bool) -> TextView:
        """Set whether region tags in the text are interpreted."""
        if self._region_tags != regions:
            self.index.reset()
        self._region_tags = regions
        return self

    def _options(self) -> StepOptions:
        options = StepOptions.NONE
        if self._style_tags:
            options |= StepOptions.STYLE
        if self._region_tags:
            options |= StepOptions.REGION
        return options

    def _parse(self, width: int, stop) -> None:
        self.index.parse_ahead(
            self.buffer, width, self._options(), self._text_style, self.align,
            self._wrap, self._word_wrap, stop,
        )

    # Text ----------------------------------------------------------------

    def _notify(self) -> None:
        handler = self.changed
        if handler is not None:
            threading.Thread(target=handler, daemon=True).start()

    def set_text(self, text: str) -> TextView:
        """Replace the text; triggers the "changed" callback."""
        with self._lock:
            self.buffer = text
            self.index.reset()
            self._notify()
        return self

    def get_text(self, strip_all_tags: bool) -> str:
        """Return the text, optionally without the tags that are interpreted."""
        options = self._options()
        if not strip_all_tags or not options:
            return self.buffer
        return strip_tags(self.buffer, options)

    def write(self, data) -> int:
        """Append text (str or UTF-8 bytes); returns the length of data."""
        with self._lock:
            return self._write(data)

    def _write(self, data) -> int:
        text = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else data
        self.buffer += text
        self._notify()
        return len(data)

    def clear(self) -> TextView:
        """Remove all text; triggers the "changed" callback."""
        with self._lock:
            self._clear()
            self._notify()
        return self

    def _clear(self) -> None:
        self.buffer = ""
        self.index.reset()

    def batch_writer(self) -> TextViewWriter:
        """Acquire the lock and return a writer that releases it when closed."""
        self._lock.acquire()
        return TextViewWriter(self)

    def original_line_count(self) -> int:
        """Number of lines in the text, not counting wrapping."""
        if not self.buffer:
            return 0
        lines = 1
        rest, state = self.buffer, None
        while rest:
            _, rest, state = step(rest, state, StepOptions.NONE)
            breaks, optional = state.line_break()
            if breaks and not optional:
                lines += 1
        return lines

    def wrapped_line_count(self) -> int:
        """Number of displayed lines, taking wrapping into account."""
        self._parse(self.field_width, None)
        return len(self.index)

    # Highlights ----------------------------------------------------------

    def highlight(self, *args) -> TextView:
        """Highlight the given regions (or toggle them if toggling is on).

        Empty IDs and regions not in the text are ignored.
        """
        regions = self.index.regions
        self._parse(self.last_width, lambda _n, _l: all(r in regions for r in args))
        regions = self.index.regions
        region_ids = [region for region in args if region in regions]

        if self.toggle_highlights:
            toggled = [region for region in self.highlights if region not in region_ids]
            toggled += [region for region in region_ids if region not in self.highlights]
            region_ids = toggled

        added: list[str] = []
        removed: list[str] = []
        remaining: list[str] = []
        if self.highlighted is not None:
            old = dict(self.highlights)
            for region in region_ids:
                if region in old:
                    remaining.append(region)
                    del old[region]
                else:
                    added.append(region)
            removed = list(old)

        self.highlights = {region: None for region in region_ids if region}

        if self.highlighted is not None and (added or removed):
            self.highlighted(added, removed, remaining)
        return self

    def get_highlights(self) -> list[str]:
        """Return the IDs of all highlighted regions."""
        return list(self.highlights)

    def get_region_text(self, region_id: str) -> str:
        """Return the text of the first region with this ID, without tags."""
        if not self._region_tags or not region_id:
            return ""
        if region_id not in self.index.regions:
            self._parse(self.last_width, lambda _n, _l: region_id in self.index.regions)
        line_number = self.index.regions.get(region_id)
        if line_number is None:
            return ""

        line = self.index[line_number]
        rest, state = self.buffer[line.offset:], line.state
        options = StepOptions.REGION
        if self._style_tags:
            options |= StepOptions.STYLE
        parts: list[str] = []
        while rest:
            cluster, rest, state = step(rest, state, options)
            if state.region == region_id:
                parts.append(cluster)
            elif parts:
                break
        return "".join(parts)

    # Scrolling -----------------------------------------------------------

    @property
    def scroll_offset(self) -> tuple[int, int]:
        """Rows and columns skipped at the top left."""
        return self.line_offset, self.column_offset

    def scroll_to(self, row, column) -> TextView:
        if self._scrollable:
            self.line_offset = row
            self.column_offset = column
            self.track_end = False
        return self

    def scroll_to_beginning(self) -> TextView:
        if self._scrollable:
            self.track_end = False
            self.line_offset = 0
            self.column_offset = 0
        return self

    def scroll_to_end(self) -> TextView:
        """Scroll to the bottom and follow text appended later."""
        if self._scrollable:
            self.track_end = True
            self.column_offset = 0
        return self

    def scroll_to_highlight(self) -> TextView:
        """Bring the highlighted regions into view on the next draw."""
        if self.highlights and self._scrollable and self._region_tags:
            self.scroll_to_highlights = True
            self.track_end = False
        return self

    # Focus, drawing and input --------------------------------------------

    @property
    def has_focus(self) -> bool:
        with self._lock:
            return self._has_focus

    def focus(self, delegate) -> None:
        """Take the focus, or finish at once if in a form and not scrollable."""
        with self._lock:
            if self.finished is not None and not self._scrollable:
                self.finished(None)
                return
            self._has_focus = True

    def blur(self) -> None:
        with self._lock:
            self._has_focus = False

    def draw(self, screen: CellScreen) -> None:
        """Draw the view onto the screen."""
        with self._lock:
            render_text_view(self, screen)

    def handle_key(self, event: KeyEvent) -> None:
        """React to a key press."""
        key = event.key
        if key in (Key.ESCAPE, Key.ENTER, Key.TAB, Key.BACKTAB):
            if self.done is not None:
                self.done(key)
            if self.finished is not None:
                self.finished(key)
            return
        if not self._scrollable:
            return

        char = event.char if key is Key.RUNE else ""
        if key is Key.HOME or char == "g":
            self.track_end = False
            self.line_offset = 0
            self.column_offset = 0
        elif key is Key.END or char == "G":
            self.track_end = True
            self.column_offset = 0
        elif key is Key.DOWN or char == "j":
            self.line_offset += 1
        elif key is Key.UP or char == "k":
            self.track_end = False
            self.line_offset -= 1
        elif key is Key.LEFT or char == "h":
            self.column_offset -= 1
        elif key is Key.RIGHT or char == "l":
            self.column_offset += 1
        elif key in (Key.PG_DN, Key.CTRL_F):
            self.line_offset += self.page_size
        elif key in (Key.PG_UP, Key.CTRL_B):
            self.track_end = False
            self.line_offset -= self.page_size

    def handle_mouse(self, action: MouseAction, event: MouseEvent, set_focus) -> bool:
        """React to a mouse event; returns whether it was consumed."""
        x, y = event.position
        rect_x, rect_y, width, height = self.rect
        if not (rect_x <= x < rect_x + width and rect_y <= y < rect_y + height):
            return False

        if action is MouseAction.LEFT_DOWN:
            set_focus(self)
            return True
        if action is MouseAction.LEFT_CLICK:
            if self._region_tags:
                column, row = x - rect_x, y - rect_y + self.line_offset
                found = ""
                if 0 <= row < len(self.index):
                    for region, (start, end) in (self.index[row].regions or {}).items():
                        if start <= column < end:
                            found = region
                            break
                if found:
                    self.highlight(found)
                elif not self.toggle_highlights:
                    self.highlight()
            return True
        if action is MouseAction.SCROLL_UP:
            if not self._scrollable:
                return False
            self.track_end = False
            self.line_offset -= 1
            return True
        if action is MouseAction.SCROLL_DOWN:
            if not self._scrollable:
                return False
            self.line_offset += 1
            if len(self.index) - self.line_offset < height:
                self._parse(width, lambda _n, _l: len(self.index) - self.line_offset < height)
                if len(self.index) - self.line_offset < height:
                    self.track_end = True
            return True
        return False