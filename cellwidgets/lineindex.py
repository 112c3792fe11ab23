"""The index of displayed lines of a text view, built lazily from its text."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from cellwidgets.screen import Align, Style
from cellwidgets.text import StepOptions, StepState, step

TAB_SIZE = 4
"""Tab stops are placed every TAB_SIZE screen columns."""

StopFunc = Callable[[int, "TextViewLine"], bool]


@dataclass(eq=False)
class TextViewLine:
    """One displayed line: where it starts in the text and how large it is.

    state is the stepping state before the line's first character. regions
    maps region IDs to the [start, end) screen columns they occupy on this
    line; it is only filled in for lines that have been drawn.
    """

    offset: int = 0
    width: int = 0
    length: int = 0
    state: StepState = field(default_factory=StepState)
    regions: Optional[dict[str, tuple[int, int]]] = None

    def text_of(self, text: str) -> str:
        """Return the slice of text that makes up this line."""
        return text[self.offset:self.offset + self.length]


def _never(_line_number: int, _line: TextViewLine) -> bool:
    return False


class LineIndex:
    """Displayed lines of a text, the longest line's width and region starts.

    The index may stop short of the end of the text; parse_ahead() extends it
    from its last line.
    """

    def __init__(self) -> None:
        self.lines: list[TextViewLine] = []
        self.longest_line = 0
        self.regions: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[TextViewLine]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> TextViewLine:
        return self.lines[index]

    def reset(self) -> None:
        """Forget all indexed lines and regions."""
        self.lines = []
        self.regions = {}
        self.longest_line = 0

    def parse_ahead(self, text, width, options, style, align, wrap, word_wrap, stop) -> None:
        """Extend the index starting at its last line.

        Parsing continues until the end of text or until stop(line_number,
        line) returns True for the last complete line. A width of 0 means
        unlimited width. style is the starting style of the text. stop may be
        None, in which case the whole text is parsed. There is no guarantee
        that stop is ever called.
        """
        if not text:
            return
        if width == 0:
            width = sys.maxsize
        if stop is None:
            stop = _never
        options = StepOptions(options)

        lines = self.lines
        if not lines:
            last = TextViewLine(offset=0, state=StepState(style=style))
            lines.append(last)
            rest = text
        else:
            last = lines[-1]
            last.width = 0
            last.length = 0
            rest = text[last.offset:]

        last_option = 0  # Offset within the line of the last optional split point.
        last_option_width = 0  # Line width at the last optional split point.
        last_option_state: Optional[StepState] = None
        left_pos = 0  # Current column, used for tab stops.
        offset = last.offset
        state = last.state

        while rest:
            region = state.region
            cluster, rest, state = step(rest, state, options)
            char_width = state.width
            if cluster == "\t":
                if align == Align.LEFT:
                    char_width = TAB_SIZE - left_pos % TAB_SIZE
                else:
                    char_width = TAB_SIZE
            length = state.gross_length

            if wrap and last.width + char_width > width:
                if last_option_width == 0:
                    # No split point so far: split at the current position.
                    if stop(len(lines) - 1, last):
                        return
                    last = TextViewLine(offset=offset, state=state)
                    last_option = last_option_width = left_pos = 0
                else:
                    new_line = TextViewLine(
                        offset=last.offset + last_option,
                        width=last.width - last_option_width,
                        length=last.length - last_option,
                        state=last_option_state,
                    )
                    last.width = last_option_width
                    last.length = last_option
                    if stop(len(lines) - 1, last):
                        return
                    last = new_line
                    last_option = last_option_width = 0
                lines.append(last)

            last.width += char_width
            last.length += length
            offset += length
            left_pos += char_width

            if last.width > self.longest_line:
                self.longest_line = last.width

            breaks, optional = state.line_break()
            if breaks:
                if optional:
                    if wrap and word_wrap:
                        last_option = offset - last.offset
                        last_option_width = last.width
                        last_option_state = state
                else:
                    if stop(len(lines) - 1, last):
                        return
                    last = TextViewLine(offset=offset, state=state)
                    lines.append(last)
                    last_option = last_option_width = left_pos = 0

            if (
                options & StepOptions.REGION
                and state.region
                and state.region != region
            ):
                self.regions.setdefault(state.region, len(lines) - 1)