"""Nodes of a tree view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from cellwidgets.screen import PRIMARY_TEXT_COLOR, PRIMITIVE_BACKGROUND_COLOR, Style


def _default_text_style() -> Style:
    return Style(foreground=PRIMARY_TEXT_COLOR, background=PRIMITIVE_BACKGROUND_COLOR)


def _default_selected_style() -> Style:
    return Style(foreground=PRIMITIVE_BACKGROUND_COLOR, background=PRIMARY_TEXT_COLOR)


@dataclass(eq=False)
class TreeNode:
    """One node of a tree, with its children and display attributes.

    level, parent, graphics_x and text_x are layout data that the tree view
    fills in when it processes the tree.
    """

    text: str = ""
    reference: Any = None
    children: list[TreeNode] = field(default_factory=list)
    text_style: Style = field(default_factory=_default_text_style)
    selected_text_style: Style = field(default_factory=_default_selected_style)
    selectable: bool = True
    expanded: bool = True
    indent: int = 2
    selected: Optional[Callable[[], None]] = None
    level: int = field(default=0, repr=False)
    parent: Optional[TreeNode] = field(default=None, repr=False)
    graphics_x: int = field(default=0, repr=False)
    text_x: int = field(default=0, repr=False)

    def walk(self, callback: Callable[[TreeNode, Optional[TreeNode]], bool]) -> TreeNode:
        """Visit this subtree depth-first in pre-order.

        callback(node, parent) is called for each node (parent is None for this
        node); returning False stops descent into that node's children.
        """
        self.parent = None
        stack = [self]
        while stack:
            node = stack.pop()
            if not callback(node, node.parent):
                continue
            for child in reversed(node.children):
                child.parent = node
                stack.append(child)
        return self

    def add_child(self, node: TreeNode) -> None:
        """Append a child node."""
        self.children.append(node)

    def remove_child(self, node: TreeNode) -> None:
        """Remove a child node; nothing happens if it is not a child."""
        for index, child in enumerate(self.children):
            if child is node:
                del self.children[index]
                return

    def clear_children(self) -> None:
        """Remove all child nodes."""
        self.children = []

    def expand(self) -> None:
        self.expanded = True

    def collapse(self) -> None:
        self.expanded = False

    def expand_all(self) -> None:
        """Expand this node and all its descendants."""
        self.walk(lambda node, _parent: _set_expanded(node, True))

    def collapse_all(self) -> None:
        """Collapse this node and all its descendants."""
        self.walk(lambda node, _parent: _set_expanded(node, False))

    def set_color(self, color: str) -> None:
        """Set the text colour, which is also the selected background."""
        self.text_style = self.text_style.with_foreground(color)
        self.selected_text_style = self.selected_text_style.with_background(color)


def _set_expanded(node: TreeNode, expanded: bool) -> bool:
    node.expanded = expanded
    return True