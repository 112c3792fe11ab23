"""Stepping through text with style and region tags, one character cluster at a time."""

from __future__ import annotations

import enum
import re
import unicodedata
from dataclasses import dataclass, field, replace

import wcwidth

from cellwidgets.screen import COLOR_DEFAULT, COLOR_NAMES, Style

ESCAPE_PATTERN = re.compile(r'(\[[a-zA-Z0-9_,;: \-\."#]+\[*)\]')
UNESCAPE_PATTERN = re.compile(r'(\[[a-zA-Z0-9_,;: \-\."#]+\[*)\[\]')

_REGION_TAG = re.compile(r'\["([a-zA-Z0-9_,;: \-\.]*)"\]')
_COLOR = r"(?:[a-zA-Z]+|#[0-9a-fA-F]{6}|-)"
_STYLE_TAG = re.compile(
    rf"\[({_COLOR})?(?::({_COLOR})?(?::([bdilrsuBDILRSU]+|-)?)?)?\]"
)
_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")

_ATTRIBUTES = {
    "b": "bold",
    "d": "dim",
    "i": "italic",
    "l": "blink",
    "r": "reverse",
    "s": "strikethrough",
    "u": "underline",
}

_MANDATORY_BREAKS = {"\n", "\r", "\r\n", "\v", "\f", "\x85", "\u2028", "\u2029"}
_SPACES = {" ", "\t"}
_JOINERS = {"\u200d", "\ufe0e", "\ufe0f"}


class StepOptions(enum.IntFlag):
    """Which kinds of tags are interpreted while stepping."""

    NONE = 0
    STYLE = 1
    REGION = 2


@dataclass(frozen=True)
class StepState:
    """The state after one step: style, region and facts about the last cluster."""

    style: Style = field(default_factory=Style)
    region: str = ""
    base_style: Style | None = None
    width: int = 0
    gross_length: int = 0
    breaks: bool = False
    optional_break: bool = False
    escaping: bool = False

    def __post_init__(self) -> None:
        if self.base_style is None:
            object.__setattr__(self, "base_style", self.style)

    def line_break(self) -> tuple[bool, bool]:
        """Return (break after the last cluster, whether that break is optional)."""
        return self.breaks, self.optional_break


def _valid_color(value: str) -> bool:
    lowered = value.lower()
    return (
        lowered == COLOR_DEFAULT
        or lowered in COLOR_NAMES
        or _HEX_COLOR.fullmatch(value) is not None
    )


def _apply_style_tag(state_style: Style, base: Style, match: re.Match) -> Style | None:
    foreground, background, attributes = match.groups()
    style = state_style
    for value, name in ((foreground, "foreground"), (background, "background")):
        if not value:
            continue
        if value == "-":
            style = replace(style, **{name: getattr(base, name)})
        elif _valid_color(value):
            style = replace(style, **{name: value.lower()})
        else:
            return None
    if attributes:
        if attributes == "-":
            style = replace(style, attributes=base.attributes)
        else:
            current = set(style.attributes)
            for letter in attributes:
                name = _ATTRIBUTES[letter.lower()]
                if letter.islower():
                    current.add(name)
                else:
                    current.discard(name)
            style = replace(style, attributes=frozenset(current))
    return style


def _cluster_end(text: str, pos: int) -> int:
    if pos >= len(text):
        return pos
    if text.startswith("\r\n", pos):
        return pos + 2
    end = pos + 1
    while end < len(text):
        char = text[end]
        if char == "\u200d" and end + 1 < len(text):
            end += 2
        elif char in _JOINERS or unicodedata.combining(char) or unicodedata.category(char) in ("Mn", "Me"):
            end += 1
        else:
            break
    return end


def _cluster_width(cluster: str) -> int:
    if not cluster:
        return 0
    width = wcwidth.wcwidth(cluster[0])
    return max(width, 0)


def _optional_break(cluster: str, following: str) -> bool:
    if following in _MANDATORY_BREAKS:
        return False
    if cluster in _SPACES:
        return following not in _SPACES
    if cluster == "-":
        return following.isalpha()
    return _cluster_width(cluster) == 2 and _cluster_width(following) == 2


def step(text: str, state: StepState | None = None, options: StepOptions = StepOptions.NONE):
    """Consume tags and one character cluster from the start of text.

    Returns the cluster (empty if only tags remained), the rest of the text and
    the new state.
    """
    if state is None:
        state = StepState()
    style, region, escaping = state.style, state.region, state.escaping
    pos = 0

    if escaping and text.startswith("[]"):
        cluster, pos, escaping = "]", 2, False
    else:
        while not escaping and pos < len(text) and text[pos] == "[":
            if options and UNESCAPE_PATTERN.match(text, pos):
                escaping = True
                break
            if options & StepOptions.REGION:
                match = _REGION_TAG.match(text, pos)
                if match:
                    region = match.group(1)
                    pos = match.end()
                    continue
            if options & StepOptions.STYLE:
                match = _STYLE_TAG.match(text, pos)
                if match and match.group(0) != "[]":
                    new_style = _apply_style_tag(style, state.base_style, match)
                    if new_style is not None:
                        style = new_style
                        pos = match.end()
                        continue
            break
        end = _cluster_end(text, pos)
        cluster = text[pos:end]
        pos = end

    rest = text[pos:]
    breaks = optional = False
    if cluster in _MANDATORY_BREAKS:
        breaks = True
    elif cluster and rest and _optional_break(cluster, rest[0]):
        breaks = optional = True

    new_state = replace(
        state,
        style=style,
        region=region,
        width=_cluster_width(cluster),
        gross_length=pos,
        breaks=breaks,
        optional_break=optional,
        escaping=escaping,
    )
    return cluster, rest, new_state


def strip_tags(text: str, options: StepOptions = StepOptions.STYLE | StepOptions.REGION) -> str:
    """Return text with the tags selected by options removed."""
    parts = []
    state = None
    while text:
        cluster, text, state = step(text, state, options)
        parts.append(cluster)
    return "".join(parts)


def escape(text: str) -> str:
    """Escape anything that looks like a style or region tag."""
    return ESCAPE_PATTERN.sub(r"\1[]", text)


def unescape(text: str) -> str:
    """Reverse escape()."""
    return UNESCAPE_PATTERN.sub(r"\1]", text)