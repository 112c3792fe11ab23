"""A widget that displays a tree of nodes and lets the user navigate it."""

from __future__ import annotations

import enum
from typing import Callable, Optional

from cellwidgets.events import Key, KeyEvent, MouseAction, MouseEvent
from cellwidgets.printing import print_with_style
from cellwidgets.screen import (
    BORDER_BOTTOM_LEFT,
    BORDER_HORIZONTAL,
    BORDER_TOP_LEFT,
    BORDER_VERTICAL,
    GRAPHICS_COLOR,
    PRIMITIVE_BACKGROUND_COLOR,
    Align,
    CellScreen,
    Style,
)
from cellwidgets.treenode import TreeNode

_BORDER_LEFT_T = "\u251c"

# How two line-graphics characters combine when drawn onto the same cell.
_JOINS = {
    (BORDER_BOTTOM_LEFT, BORDER_TOP_LEFT): _BORDER_LEFT_T,
    (BORDER_BOTTOM_LEFT, BORDER_VERTICAL): _BORDER_LEFT_T,
    (BORDER_VERTICAL, BORDER_TOP_LEFT): _BORDER_LEFT_T,
    (BORDER_VERTICAL, BORDER_VERTICAL): BORDER_VERTICAL,
    (_BORDER_LEFT_T, BORDER_TOP_LEFT): _BORDER_LEFT_T,
    (_BORDER_LEFT_T, BORDER_VERTICAL): _BORDER_LEFT_T,
}


class _Movement(enum.Enum):
    NONE = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    MOVE = enum.auto()
    PARENT = enum.auto()
    CHILD = enum.auto()
    SCROLL = enum.auto()  # Move without changing the selection.


def _join_semigraphics(screen: CellScreen, x: int, y: int, char: str, style: Style) -> None:
    existing = screen.get_content(x, y).char
    screen.set_content(x, y, _JOINS.get((existing, char), char), (), style)


class TreeView:
    """Displays a tree of TreeNode objects with an optional selection.

    Navigation keys: j/down/right and k/up/left move the selection by one node,
    g/home and G/end jump to the top and bottom, J moves to the last child,
    K moves to the parent, page down/Ctrl-F and page up/Ctrl-B move by a page.
    Enter or space triggers the "selected" callbacks.
    """

    def __init__(self, root: Optional[TreeNode] = None) -> None:
        self.root = root
        self.current_node: Optional[TreeNode] = None
        self.top_level = 0
        self.prefixes: list[str] = []
        self.align = False
        self.graphics = True
        self.graphics_color = GRAPHICS_COLOR
        self.background_color = PRIMITIVE_BACKGROUND_COLOR
        self.changed: Optional[Callable[[TreeNode], None]] = None
        self.selected: Optional[Callable[[TreeNode], None]] = None
        self.done: Optional[Callable[[Key], None]] = None
        self._last_node: Optional[TreeNode] = None
        self._movement = _Movement.NONE
        self._step = 0
        self._offset_y = 0
        self._nodes: list[TreeNode] = []
        self._stable_nodes = False
        self._rect = (0, 0, 15, 10)

    def set_rect(self, x, y, width, height) -> None:
        """Place the widget on the screen."""
        self._rect = (x, y, max(width, 0), max(height, 0))

    @property
    def scroll_offset(self) -> int:
        """Number of node rows skipped at the top (updated when drawn)."""
        return self._offset_y

    @property
    def row_count(self) -> int:
        """Number of visible nodes, including those outside the box."""
        return len(self._nodes)

    @property
    def visible_nodes(self) -> list[TreeNode]:
        """The visible nodes, top-down, as of the last processing."""
        return list(self._nodes)

    def path_to(self, node: TreeNode) -> Optional[list[TreeNode]]:
        """Return the nodes from the root down to node, or None if not found."""
        if self.root is None:
            return None

        def search(current: TreeNode, path: list[TreeNode]) -> Optional[list[TreeNode]]:
            if current is node:
                return path
            for child in current.children:
                found = search(child, path + [child])
                if found is not None:
                    return found
            return None

        return search(self.root, [self.root])

    def move(self, offset: int) -> None:
        """Move the selection (or scroll if there is none) by offset nodes."""
        if offset == 0:
            return
        self._movement = _Movement.MOVE
        self._step = offset
        self.process(False)

    def _in_rect(self, x: int, y: int) -> bool:
        rx, ry, width, height = self._rect
        return rx <= x < rx + width and ry <= y < ry + height

    def process(self, drawing_after: bool) -> None:
        """Lay out the visible nodes and apply any pending movement."""
        self._stable_nodes = drawing_after
        height = self._rect[3]

        self._nodes = []
        if self.root is None:
            return
        parent_selected_index = selected_index = top_level_graphics_x = -1
        graphics_offset = 1 if self.graphics else 0
        max_text_x = 0
        nodes = self._nodes

        def visit(node: TreeNode, parent: Optional[TreeNode]) -> bool:
            nonlocal max_text_x, selected_index, parent_selected_index, top_level_graphics_x
            node.parent = parent
            if parent is None:
                node.level = 0
                node.graphics_x = 0
                node.text_x = 0
            else:
                node.level = parent.level + 1
                node.graphics_x = parent.text_x
                node.text_x = node.graphics_x + graphics_offset + node.indent
            if not self.graphics and self.align:
                node.text_x = 0
            if node.level == self.top_level:
                node.graphics_x = 0
                node.text_x = 0

            if node.level >= self.top_level:
                max_text_x = max(max_text_x, node.text_x)
                if node is self.current_node and node.selectable:
                    selected_index = len(nodes)
                    for index in range(len(nodes) - 1, -1, -1):
                        if nodes[index] is parent and nodes[index].selectable:
                            parent_selected_index = index
                            break
                if self.top_level == node.level and (
                    top_level_graphics_x < 0 or node.graphics_x < top_level_graphics_x
                ):
                    top_level_graphics_x = node.graphics_x
                nodes.append(node)
            return node.expanded

        self.root.walk(visit)

        for node in nodes:
            if self.align and node.level > self.top_level:
                node.text_x = max_text_x
            if top_level_graphics_x > 0:
                node.graphics_x -= top_level_graphics_x
                node.text_x -= top_level_graphics_x

        if selected_index >= 0:
            if self._movement is _Movement.MOVE:
                while self._step < 0:
                    for index in range(selected_index - 1, -1, -1):
                        if nodes[index].selectable:
                            selected_index = index
                            break
                    self._step += 1
                while self._step > 0:
                    for index in range(selected_index + 1, len(nodes)):
                        if nodes[index].selectable:
                            selected_index = index
                            break
                    self._step -= 1
            elif self._movement is _Movement.PARENT:
                if parent_selected_index >= 0:
                    selected_index = parent_selected_index
            elif self._movement is _Movement.CHILD:
                origin = nodes[selected_index]
                for index in range(selected_index + 1, len(nodes)):
                    if nodes[index].selectable and nodes[index].parent is origin:
                        selected_index = index
            self.current_node = nodes[selected_index]

            if self._movement is not _Movement.SCROLL:
                if selected_index - self._offset_y >= height:
                    self._offset_y = selected_index - height + 1
                if selected_index < self._offset_y:
                    self._offset_y = selected_index
                if self._movement not in (_Movement.HOME, _Movement.END):
                    # Scrolling, home and end are finished when drawing.
                    self._movement = _Movement.NONE
                    self._step = 0
        else:
            if self.current_node is not None:
                for index, node in enumerate(nodes):
                    if node.selectable:
                        selected_index = index
                        self.current_node = node
                        break
            if selected_index < 0:
                self.current_node = None

        if (
            self.changed is not None
            and self.current_node is not None
            and self.current_node is not self._last_node
        ):
            self.changed(self.current_node)
        self._last_node = self.current_node

    def draw(self, screen: CellScreen) -> None:
        """Draw the tree onto the screen."""
        x, y, width, height = self._rect
        background = Style(background=self.background_color)
        for row in range(y, y + height):
            for column in range(x, x + width):
                screen.set_content(column, row, " ", (), background)
        if self.root is None:
            return
        _, total_height = screen.size()

        if not self._stable_nodes:
            self.process(False)
        else:
            self._stable_nodes = False

        if self._movement in (_Movement.MOVE, _Movement.SCROLL):
            self._offset_y += self._step
        elif self._movement is _Movement.HOME:
            self._offset_y = 0
        elif self._movement is _Movement.END:
            self._offset_y = len(self._nodes)
        self._movement = _Movement.NONE
        self._step = 0

        if self._offset_y >= len(self._nodes) - height:
            self._offset_y = len(self._nodes) - height
        if self._offset_y < 0:
            self._offset_y = 0

        pos_y = y
        line_style = Style(foreground=self.graphics_color, background=self.background_color)
        for index, node in enumerate(self._nodes):
            if pos_y >= y + height + 1 or pos_y >= total_height:
                break
            if index < self._offset_y:
                continue

            if self.graphics:
                ancestor = node.parent
                while (
                    ancestor is not None
                    and ancestor.parent is not None
                    and ancestor.parent.level >= self.top_level
                ):
                    if ancestor.graphics_x < width and ancestor.parent.children[-1] is not ancestor:
                        if pos_y - 1 >= y and ancestor.text_x > ancestor.graphics_x:
                            _join_semigraphics(
                                screen, x + ancestor.graphics_x, pos_y - 1, BORDER_VERTICAL, line_style
                            )
                        if pos_y < y + height:
                            screen.set_content(
                                x + ancestor.graphics_x, pos_y, BORDER_VERTICAL, (), line_style
                            )
                    ancestor = ancestor.parent

                if node.text_x > node.graphics_x and node.graphics_x < width:
                    above = self._nodes[index - 1] if index > 0 else None
                    if (
                        pos_y - 1 >= y
                        and above is not None
                        and above.graphics_x <= node.graphics_x
                        and above.text_x > node.graphics_x
                    ):
                        _join_semigraphics(
                            screen, x + node.graphics_x, pos_y - 1, BORDER_TOP_LEFT, line_style
                        )
                    if pos_y < y + height:
                        screen.set_content(x + node.graphics_x, pos_y, BORDER_BOTTOM_LEFT, (), line_style)
                        for pos in range(node.graphics_x + 1, min(node.text_x, width)):
                            screen.set_content(x + pos, pos_y, BORDER_HORIZONTAL, (), line_style)

            if node.text_x < width and pos_y < y + height:
                prefix_width = 0
                if self.prefixes:
                    prefix = self.prefixes[(node.level - self.top_level) % len(self.prefixes)]
                    _, _, prefix_width = print_with_style(
                        screen, prefix, x + node.text_x, pos_y, 0,
                        width - node.text_x, Align.LEFT, node.text_style, True,
                    )
                if node.text_x + prefix_width < width:
                    style = node.selected_text_style if node is self.current_node else node.text_style
                    print_with_style(
                        screen, node.text, x + node.text_x + prefix_width, pos_y, 0,
                        width - node.text_x - prefix_width, Align.LEFT, style, False,
                    )

            pos_y += 1

    def _select_current(self) -> None:
        node = self.current_node
        if node is None:
            return
        if self.selected is not None:
            self.selected(node)
        if node.selected is not None:
            node.selected()

    def handle_key(self, event: KeyEvent) -> None:
        """React to a key press; movement is applied on the next processing."""
        key = event.key
        height = self._rect[3]
        if key in (Key.TAB, Key.BACKTAB, Key.ESCAPE):
            if self.done is not None:
                self.done(key)
        elif key in (Key.DOWN, Key.RIGHT):
            self._movement, self._step = _Movement.MOVE, 1
        elif key in (Key.UP, Key.LEFT):
            self._movement, self._step = _Movement.MOVE, -1
        elif key is Key.HOME:
            self._movement = _Movement.HOME
        elif key is Key.END:
            self._movement = _Movement.END
        elif key in (Key.PG_DN, Key.CTRL_F):
            self._movement, self._step = _Movement.MOVE, height
        elif key in (Key.PG_UP, Key.CTRL_B):
            self._movement, self._step = _Movement.MOVE, -height
        elif key is Key.RUNE:
            char = event.char
            if char == "g":
                self._movement = _Movement.HOME
            elif char == "G":
                self._movement = _Movement.END
            elif char == "j":
                self._movement, self._step = _Movement.MOVE, 1
            elif char == "J":
                self._movement = _Movement.CHILD
            elif char == "k":
                self._movement, self._step = _Movement.MOVE, -1
            elif char == "K":
                self._movement = _Movement.PARENT
            elif char == " ":
                self._select_current()
        elif key is Key.ENTER:
            self._select_current()

        self.process(True)

    def handle_mouse(self, action: MouseAction, event: MouseEvent, set_focus) -> bool:
        """React to a mouse event; returns whether it was consumed."""
        x, y = event.position
        if not self._in_rect(x, y):
            return False

        consumed = False
        if action is MouseAction.LEFT_DOWN:
            set_focus(self)
            consumed = True
        elif action is MouseAction.LEFT_CLICK:
            row = y + self._offset_y - self._rect[1]
            if 0 <= row < len(self._nodes):
                node = self._nodes[row]
                if node.selectable:
                    previous = self.current_node
                    self.current_node = node
                    if previous is not node and self.changed is not None:
                        self.changed(node)
                    if self.selected is not None:
                        self.selected(node)
                    if node.selected is not None:
                        node.selected()
            consumed = True
        elif action is MouseAction.SCROLL_UP:
            self._movement, self._step = _Movement.SCROLL, -1
            consumed = True
        elif action is MouseAction.SCROLL_DOWN:
            self._movement, self._step = _Movement.SCROLL, 1
            consumed = True
        return consumed