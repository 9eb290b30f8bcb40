# tileforge

The core of a node-based editor for small, seamless tile textures. A tile
is built from a graph of effect nodes whose outputs feed into one another,
coloured from a shared palette. This package holds the parts of such an
editor that need no window or GPU:

- `tileforge.textutil` – `split`, the line and field splitter used by the
  project file format.
- `tileforge.graph` – the node graph: `Node`, `Socket`, `Parameter`,
  `ControlPoint` (colour-ramp stops) and `TileTexture`, whose `generate`
  works out which nodes are ready to be generated.
- `tileforge.history` – `History`, undo and redo stacks of snapshots.
- `tileforge.project` – `Project`, the document: palette, tile size,
  camera position, nodes and their connections. It writes and reads the
  plain-text project format, parses the header with `parse_version` and
  `compare_versions`, and raises `ProjectLoadError` (after resetting itself)
  for files it cannot read.
- `tileforge.layout` – `Layout`, the sizes of the side bars and the scroll
  limits of the panels, plus a `clamp` helper.
- `tileforge.motion` – `ease_towards`, `rotate_about`, `socket_anchor`,
  `connection_curve` (the Bézier control points of a link) and
  `CameraShake`, a damped spring for the view.
- `tileforge.editor` – `Editor` and `Key`: the editor state that reacts to
  key presses, typed text, the mouse wheel and frame ticks, and manages the
  palette selection.

## Project files

A project is saved as text. The first line names the format and the
version that wrote it; then come the palette colours, the last-used
folders and file names, the indexed-mode flag, the tile size, the camera,
and one block per node of the current texture:

```
Tilemancer 0.2.1

Color 0 0 0
Color 255 200 120
PaletteSave1 
PaletteSave2 
FileSave1 
FileSave2 
Indexed 0
Size 32
Camera 0 0
Node {
Name Noise.lua
Position 120 40
Parameter 4 0 0 0
}
```

Ramp parameters are written as a `Ramp { ... }` block of
`Point <position*100> <r> <g> <b>` lines, and each connected input as
`Connection <input> <node> <output>`.

## Using it

Nodes are made by the caller: `Project` takes a mapping from effect name to
a function that builds a fresh `Node`. A node named in a file but missing
from the mapping cannot be loaded.

```python
from tileforge.graph import Node, Parameter
from tileforge.project import Project, ProjectLoadError

def noise() -> Node:
    node = Node(name="Noise.lua", w=80, h=60)
    node.params.append(Parameter(kind=1, name="Scale"))
    node.add_output()
    return node

project = Project(effects={"Noise.lua": noise})
project.current.nodes.append(noise())

text = project.dumps()          # the project file as a string
project.loads(text, True)       # read it back as a new file

project.save("tile.tm")
project.load("tile.tm")

try:
    project.loads("not a project", True)
except ProjectLoadError as err:
    print(err.messages)         # ['Invalid file']
```

`project.history` is a `History` of project snapshots:
`checkpoint()` records the state before a change, `undo()` and `redo()`
step through recorded states (returning `False` when there is nothing to
do), and `clear()` forgets them all.

The editor state wraps a project and a layout:

```python
from tileforge.editor import Editor, Key
from tileforge.layout import Layout

editor = Editor(Layout(screen_w=800, screen_h=450, coll_h=17, palette_height=100))
editor.add_color()              # append black and select it
editor.key_down(Key.Z, ctrl=True)   # undo
editor.tick()                   # advance one frame
```

`Editor` takes an optional `start` callback, called with every node that
becomes ready to generate; a file dialog the user asks for is named in
`editor.dialog` (`"save"` or `"open"`) for the host to open.

## What it does not do

This package has no window, no drawing and no command to run. It does not
evaluate effects: generating a node's texture is left to the `start`
callback. It does not work out what lies under the mouse pointer, and it
has no file browser; the host application provides those.

## Tests

The test suite uses pytest; install the package with its `test` extra to
get it.