# cellwidgets

Widgets for character-cell displays: a scrollable, wrapping text view with
style and region tags, and a collapsible tree view. Widgets draw onto an
in-memory `CellScreen`, so they can be rendered, inspected and tested without
a terminal.

## Installation

```
pip install cellwidgets
```

For running the tests:

```
pip install "cellwidgets[test]"
pytest
```

## Modules

- `cellwidgets.screen`: `CellScreen` (a grid of `Cell`s with `size`,
  `set_content`, `get_content` and `row_text`), the immutable `Style`
  (`with_foreground`, `with_background`) and `Align` (`LEFT`, `CENTER`,
  `RIGHT`).
- `cellwidgets.text`: the tag parser. `step` consumes tags and one character
  cluster at a time and returns a `StepState`; `strip_tags` removes tags;
  `escape` and `unescape` protect literal brackets. `StepOptions` selects
  whether style tags, region tags or both are interpreted.
- `cellwidgets.printing`: `print_with_style`, `print_text` and `print_simple`
  write tagged text into a one-row box, left, centre or right aligned.
- `cellwidgets.events`: `Key`, `KeyEvent` (`KeyEvent.from_rune`),
  `MouseAction` and `MouseEvent`.
- `cellwidgets.treenode` and `cellwidgets.treeview`: `TreeNode` and `TreeView`.
- `cellwidgets.lineindex` and `cellwidgets.textrender`: the line index and
  drawing routine behind the text view.
- `cellwidgets.textview`: `TextView` and `TextViewWriter`.

## Text view

```python
from cellwidgets.screen import CellScreen
from cellwidgets.textview import TextView

screen = CellScreen(20, 5)
view = TextView()
view.set_rect(0, 0, 20, 5)
view.set_dynamic_colors(True)
view.set_regions(True)
view.set_text('Hello, ["greeting"][red]world[-][""]!\nSecond line')

view.draw(screen)
print(screen.row_text(0))

view.highlight("greeting")
print(view.get_region_text("greeting"))  # world
print(view.get_text(True))               # the text without tags
```

Style tags look like `[fg:bg:attrs]`, e.g. `[red]`, `[yellow:blue:b]`,
`[#ff8000]` or `[-]` to go back to the starting style. Region tags are
`["id"]`, and `[""]` ends a region.

Text can be appended with `write` (str or UTF-8 bytes), or written in one
batch while the view's lock is held:

```python
with view.batch_writer() as writer:
    writer.clear()
    writer.write(b"To sit in solemn silence\n")
```

Lines wrap on word boundaries by default (`set_wrap`, `set_word_wrap`).
`set_size` limits the text area, `set_max_lines` caps the number of kept
lines, and `set_scrollable(False)` discards lines that scroll off the top.
Scrolling is done with `scroll_to`, `scroll_to_beginning`, `scroll_to_end`
and `scroll_to_highlight`; `scroll_offset` reports the current offsets.
`original_line_count` and `wrapped_line_count` count lines without and with
wrapping. Highlights are set with `highlight` and read with
`get_highlights`; with `toggle_highlights = True`, `highlight` toggles.

Callbacks are plain attributes: `changed` (run on a background thread after
the text changes), `done` and `finished` (Escape, Enter, Tab, Backtab) and
`highlighted(added, removed, remaining)`.

Input is passed in with `handle_key` (`h`/`j`/`k`/`l`, arrows, `g`/Home,
`G`/End, PgUp/Ctrl-B, PgDn/Ctrl-F) and `handle_mouse` (clicks highlight
regions, the wheel scrolls).

## Tree view

```python
from cellwidgets.events import KeyEvent
from cellwidgets.screen import CellScreen
from cellwidgets.treenode import TreeNode
from cellwidgets.treeview import TreeView

root = TreeNode("root")
child = TreeNode("child")
root.add_child(child)
child.add_child(TreeNode("grandchild"))

tree = TreeView()
tree.root = root
tree.current_node = root
tree.set_rect(0, 0, 30, 10)

screen = CellScreen(30, 10)
tree.draw(screen)
tree.handle_key(KeyEvent.from_rune("j"))   # move the selection down
tree.draw(screen)
print([node.text for node in tree.path_to(child)])  # ['root', 'child']
```

Nodes are changed with `add_child`, `remove_child`, `clear_children`,
`expand`, `collapse`, `expand_all`, `collapse_all` and `set_color`, and
traversed with `walk`. The view's `top_level`, `prefixes`, `align` and
`graphics` attributes control what is shown; `move` moves the selection;
`row_count`, `scroll_offset` and `visible_nodes` describe the last layout.
Keys: `j`/`k`/arrows, `g`/`G`/Home/End, `J` (last child), `K` (parent),
PgUp/PgDn, Enter or space to select.

## What this package does not do

There is no application, event loop or terminal output. Widgets draw only
onto a `CellScreen`; reading keys and the mouse, turning them into
`KeyEvent`/`MouseEvent` objects and showing the screen are left to the
caller. Focus is a flag on the text view, not managed across widgets.