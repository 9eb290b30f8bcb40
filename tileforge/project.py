"""Reading and writing tile projects in the plain-text project format."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Optional, TypeVar, Union

from .graph import ControlPoint, Node, TileTexture
from .history import History
from .textutil import split

T = TypeVar("T")

MAGIC = "Tilemancer"
DEFAULT_VERSION = (0, 2, 1)
DEFAULT_TILE_SIZE = 32

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_PATH_KEYS = {
    "PaletteSave1": "palette_dir",
    "PaletteSave2": "palette_name",
    "FileSave1": "save_dir",
    "FileSave2": "save_name",
}


class ProjectLoadError(ValueError):
    """Raised when a project cannot be read; the project has been reset."""

    def __init__(self, messages: Sequence[str]):
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))


class _Malformed(Exception):
    pass


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _num(value: Union[int, float]) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return f"{float(value):.6g}"


def _at(seq: Sequence[T], index: int) -> T:
    if not 0 <= index < len(seq):
        raise _Malformed(f"index {index} out of range")
    return seq[index]


def _field(fields: Sequence[str], index: int) -> str:
    if index >= len(fields):
        raise _Malformed(f"missing field {index} in {' '.join(fields)!r}")
    return fields[index]


def _next_line(lines: Iterator[str]) -> str:
    line = next(lines, None)
    if line is None:
        raise _Malformed("unexpected end of file")
    return line


def parse_version(text: str) -> tuple[int, int, int]:
    """Parse a ``major.minor.revision`` string as the project header writes it."""
    parts = split(text, ".")
    if len(parts) < 3:
        raise ProjectLoadError([f"Invalid version {text!r}"])
    return (_atoi(parts[0]), _atoi(parts[1]), _atoi(parts[2]))


def compare_versions(a: Sequence[int], b: Sequence[int]) -> int:
    """Return 1 if ``a`` is newer than ``b``, -1 if older, 0 if equal."""
    for left, right in zip(a, b):
        if left > right:
            return 1
        if left < right:
            return -1
    return 0


class Project:
    """The editable state of one project: palette, tile settings and graph.

    ``effects`` maps an effect name to a callable building a fresh node of
    that effect; nodes whose name is not known cannot be loaded.
    """

    def __init__(
        self,
        effects: Optional[Mapping[str, Callable[[], Node]]] = None,
        version: tuple[int, int, int] = DEFAULT_VERSION,
    ):
        self.effects: Mapping[str, Callable[[], Node]] = dict(effects or {})
        self.version = tuple(version)
        self.file_version: Optional[tuple[int, int, int]] = None
        self.history: History[str] = History(
            self.dumps, lambda snapshot: self.loads(snapshot, False)
        )
        self.reset()

    @property
    def current(self) -> TileTexture:
        """The texture being edited."""
        return self.textures[self.current_texture]

    def reset(self) -> None:
        """Start a new, empty project."""
        self.history.clear()
        self.camera_x: float = 0
        self.camera_y: float = 0
        self.camera_vx: float = 0
        self.camera_vy: float = 0
        self.tile_size = DEFAULT_TILE_SIZE
        self.textures: list[TileTexture] = [TileTexture()]
        self.current_texture = 0
        self.palette: list[tuple[int, int, int]] = [(0, 0, 0)]
        self.selected_color = 0
        self.zoom = 1
        self.indexed = 0
        self.palette_dir = ""
        self.palette_name = ""
        self.tex_dir = ""
        self.tex_name = ""
        self.save_dir = ""
        self.save_name = ""

    def dumps(self) -> str:
        """Serialise the project, with the graph of the current texture."""
        major, minor, revision = self.version
        out = [f"{MAGIC} {major}.{minor}.{revision}", ""]
        out.extend(f"Color {r} {g} {b}" for r, g, b in self.palette)
        out.append(f"PaletteSave1 {self.palette_dir}")
        out.append(f"PaletteSave2 {self.palette_name}")
        out.append(f"FileSave1 {self.save_dir}")
        out.append(f"FileSave2 {self.save_name}")
        out.append(f"Indexed {_num(self.indexed)}")
        out.append(f"Size {_num(self.tile_size)}")
        out.append(f"Camera {_num(self.camera_x)} {_num(self.camera_y)}")
        nodes = self.current.nodes
        for node in nodes:
            out.append("Node {")
            out.append(f"Name {node.name}")
            out.append(f"Position {_num(node.x)} {_num(node.y)}")
            for param in node.params:
                if param.is_ramp:
                    out.append("Ramp {")
                    out.extend(
                        f"Point {_num(p.a * 100)} {_num(p.r)} {_num(p.g)} {_num(p.b)}"
                        for p in param.points
                    )
                    out.append("}")
                else:
                    values = (param.value, param.value2, param.value3, param.value4)
                    out.append("Parameter " + " ".join(_num(v) for v in values))
            for number, sock in enumerate(node.inputs):
                source = sock.source
                if source is None:
                    continue
                owner = source.parent
                node_index = next(
                    (i for i, n in enumerate(nodes) if n is owner), len(nodes)
                )
                outputs = owner.outputs if owner is not None else []
                socket_index = next(
                    (i for i, s in enumerate(outputs) if s is source), len(outputs)
                )
                out.append(f"Connection {number} {node_index} {socket_index}")
            out.append("}")
        return "\n".join(out) + "\n"

    def loads(self, text: str, new_file: bool) -> None:
        """Replace the project with the one serialised in ``text``.

        ``new_file`` resets the current texture and colour selection. On any
        problem the project is reset and ProjectLoadError is raised.
        """
        lines = iter(split(text, "\n"))
        header = split(next(lines, ""), " ")
        if not header or header[0] != MAGIC or len(header) < 2:
            self.reset()
            raise ProjectLoadError(["Invalid file"])
        try:
            self.file_version = parse_version(header[1])
        except ProjectLoadError:
            self.reset()
            raise
        messages: list[str] = []
        try:
            self._read_body(lines, new_file, messages)
        except _Malformed as exc:
            messages.append(f"Invalid file: {exc}")
        if messages:
            self.reset()
            raise ProjectLoadError(messages)

    def _read_body(
        self, lines: Iterator[str], new_file: bool, messages: list[str]
    ) -> None:
        self.textures = [TileTexture()]
        self.current_texture = 0
        self.palette = []
        if new_file:
            self.selected_color = 0
        next(lines, None)
        for line in lines:
            fields = split(line, " ")
            if not fields:
                continue
            key = fields[0]
            if key == "Color":
                self.palette.append(
                    (
                        _atoi(_field(fields, 1)),
                        _atoi(_field(fields, 2)),
                        _atoi(_field(fields, 3)),
                    )
                )
            elif key in _PATH_KEYS:
                setattr(self, _PATH_KEYS[key], fields[1] if len(fields) > 1 else "")
            elif key == "Indexed":
                self.indexed = _atoi(_field(fields, 1))
            elif key == "Size":
                self.tile_size = _atoi(_field(fields, 1))
            elif key == "Camera":
                self.camera_x = _atoi(_field(fields, 1))
                self.camera_y = _atoi(_field(fields, 2))
                self.camera_vx = 0
                self.camera_vy = 0
            elif key == "Node":
                self._read_node(lines, messages)

        nodes = self.current.nodes
        for node in nodes:
            for sock in node.inputs:
                if sock.future_node is not None and sock.future_node != -1:
                    owner = _at(nodes, sock.future_node)
                    sock.source = _at(owner.outputs, sock.future_socket or 0)

        if self.selected_color >= len(self.palette):
            self.selected_color = len(self.palette) - 1
        if self.selected_color < 0:
            raise _Malformed("palette is empty")
        for texture in self.textures:
            texture.generate()

    def _read_node(self, lines: Iterator[str], messages: list[str]) -> None:
        name = _field(split(_next_line(lines), " "), 1)
        builder = self.effects.get(name)
        if builder is None:
            messages.append(f'Unable to load "{name}"')
            return
        node = builder()
        param = 0
        while True:
            fields = split(_next_line(lines), " ")
            key = _field(fields, 0)
            if key == "}":
                self.current.nodes.append(node)
                return
            if key == "Position":
                node.x = _atof(_field(fields, 1))
                node.y = _atof(_field(fields, 2))
            elif key == "Ramp":
                ramp = _at(node.params, param)
                ramp.points.clear()
                while True:
                    point = split(_next_line(lines), " ")
                    point_key = _field(point, 0)
                    if point_key == "}":
                        param += 1
                        break
                    if point_key == "Point":
                        ramp.points.append(
                            ControlPoint(
                                a=_atoi(_field(point, 1)) / 100.0,
                                r=_atof(_field(point, 2)),
                                g=_atof(_field(point, 3)),
                                b=_atof(_field(point, 4)),
                            )
                        )
            elif key == "Parameter":
                target = _at(node.params, param)
                target.value = _atoi(_field(fields, 1))
                target.value2 = _atoi(_field(fields, 2))
                target.value3 = _atoi(_field(fields, 3))
                target.value4 = _atoi(_field(fields, 4))
                param += 1
            elif key == "Connection":
                sock = _at(node.inputs, _atoi(_field(fields, 1)))
                sock.future_node = _atoi(_field(fields, 2))
                sock.future_socket = _atoi(_field(fields, 3))

    def save(self, path: Union[str, Path]) -> None:
        """Write the project to ``path``."""
        Path(path).write_text(self.dumps(), encoding="utf-8")

    def load(self, path: Union[str, Path]) -> None:
        """Read the project stored at ``path`` as a new file."""
        self.loads(Path(path).read_text(encoding="utf-8"), True)