"""Editor state driven by keyboard, wheel and frame ticks."""

from __future__ import annotations

import colorsys
import re
from collections.abc import Callable
from enum import Enum
from typing import Optional

from .graph import Node, Parameter, Socket
from .layout import Layout
from .motion import CameraShake, connection_curve, socket_anchor
from .project import Project

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

MAX_ZOOM = 2
MIN_ZOOM = 1
TYPING_DELAY = 20
TYPING_LIMIT = 10
ERROR_TIME = 160
_TEXT_KINDS = (1, 2)
_CAMERA_DAMPING = 1.5
_NODE_DAMPING = 1.5
_BLINK_PERIOD = 64
_ROT_STEP = 15
_TIMER_CAP = 100

Curve = tuple[tuple[float, float], ...]


class Key(Enum):
    """Keys the editor reacts to."""

    LSHIFT = "lshift"
    BACKSPACE = "backspace"
    RETURN = "return"
    ESCAPE = "escape"
    LEFT = "left"
    RIGHT = "right"
    Z = "z"
    Y = "y"
    N = "n"
    S = "s"
    O = "o"


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _rgb_to_hsv(rgb: tuple[int, int, int]) -> tuple[int, int, int]:
    r, g, b = (channel / 255.0 for channel in rgb)
    h, s, v = colorsys.rgb_to_hsv(r, g, b)
    return round(h * 360), round(s * 100), round(v * 100)


class Editor:
    """The interactive state of the editor around a project.

    ``start`` is called with each node that becomes ready to generate.
    ``dialog`` names the file dialog the user asked for ("save" or "open"),
    or is None; the host opens it and clears it.
    """

    def __init__(
        self,
        layout: Layout,
        project: Optional[Project] = None,
        start: Optional[Callable[[Node], None]] = None,
    ):
        self.layout = layout
        self.project = project if project is not None else Project()
        self.start = start
        self.shift_down = False
        self.dialog: Optional[str] = None
        self.typing_param: Optional[Parameter] = None
        self.pending_param: Optional[Parameter] = None
        self.typing = ""
        self.type_timer = _TIMER_CAP
        self.preview_timer = 0
        self.blink_timer = 0
        self.error_timer = 0
        self.error_message = ""
        self.logo_timer = 0
        self.rot_timer = 0
        self.double_click_timer = _TIMER_CAP
        self.shake = CameraShake()
        self.camera_offset: tuple[float, float] = (0.0, 0.0)
        self.links: dict[Socket, Curve] = {}
        self.rgb: tuple[int, int, int] = (0, 0, 0)
        self.hsv: tuple[int, int, int] = (0, 0, 0)
        self._sync_color()

    def _sync_color(self) -> None:
        self.rgb = tuple(self.project.palette[self.project.selected_color])
        self.hsv = _rgb_to_hsv(self.rgb)

    def _commit_typing(self) -> None:
        param = self.typing_param
        if param is not None:
            value = _atoi(self.typing)
            if param.value3 != -1 and value > param.value3:
                value = param.value3
            if param.value2 != -1 and value < param.value2:
                value = param.value2
            param.value = value
        self.typing_param = None

    def key_down(self, key: Key, ctrl: bool = False) -> None:
        """React to a key being pressed; ``ctrl`` is the command modifier."""
        if key is Key.LSHIFT:
            self.shift_down = True
        elif key is Key.BACKSPACE:
            if self.typing_param is not None and self.typing_param.kind in _TEXT_KINDS:
                self.typing = self.typing[:-1]
        elif key is Key.Z and ctrl:
            self.project.history.undo()
            self._sync_color()
        elif key is Key.Y and ctrl:
            self.project.history.redo()
            self._sync_color()
        elif key is Key.N and ctrl:
            self.project.reset()
            self._sync_color()
        elif key is Key.S and ctrl:
            if self.dialog is None:
                self.dialog = "save"
        elif key is Key.O and ctrl:
            if self.dialog is None:
                self.dialog = "open"
        elif key is Key.RETURN:
            self._commit_typing()
        elif key is Key.LEFT:
            self.project.current_texture = max(0, self.project.current_texture - 1)
        elif key is Key.RIGHT:
            self.project.current_texture = min(
                len(self.project.textures) - 1, self.project.current_texture + 1
            )
        elif key is Key.ESCAPE:
            self.dialog = None

    def key_up(self, key: Key) -> None:
        """React to a key being released."""
        if key is Key.LSHIFT:
            self.shift_down = False

    def text_input(self, text: str) -> None:
        """Append typed text to the field being edited, up to its limit."""
        if self.typing_param is not None and self.typing_param.kind in _TEXT_KINDS:
            if len(self.typing) < TYPING_LIMIT:
                self.typing += text

    def wheel(self, dy: float, x: float, y: float) -> None:
        """Zoom the node view when the wheel turns over it."""
        if self.dialog is not None:
            return
        lay = self.layout
        inside = lay.bar_x < x < lay.screen_w - lay.bar_x_right and 0 < y < lay.bar_y
        if not inside:
            return
        if dy < 0 and self.project.zoom < MAX_ZOOM:
            self.project.zoom += 1
        elif dy > 0 and self.project.zoom > MIN_ZOOM:
            self.project.zoom -= 1

    def tick(self) -> None:
        """Advance the editor by one frame."""
        project = self.project
        self.preview_timer += 1
        self.blink_timer += 1
        if self.blink_timer > _BLINK_PERIOD:
            self.blink_timer = 0
        if self.error_timer > 0:
            self.error_timer -= 1
        project.camera_x += project.camera_vx
        project.camera_y += project.camera_vy
        project.camera_vx /= _CAMERA_DAMPING
        project.camera_vy /= _CAMERA_DAMPING
        if self.logo_timer > 0:
            self.logo_timer -= 1
        self.rot_timer += _ROT_STEP
        if self.rot_timer >= 360:
            self.rot_timer -= 360
        if self.double_click_timer < _TIMER_CAP:
            self.double_click_timer += 1
        if self.type_timer < _TIMER_CAP:
            self.type_timer += 1
            if self.type_timer == TYPING_DELAY:
                self.typing_param = self.pending_param
                self.typing = ""

        texture = project.current
        texture.done_timer = 0 if texture.done else texture.done_timer + 1

        for node in list(texture.nodes):
            node.x += node.sx
            node.y += node.sy
            node.sx /= _NODE_DAMPING
            node.sy /= _NODE_DAMPING
            node.r /= _NODE_DAMPING
            node.done_timer = 0 if node.done else node.done_timer + 1
            if node.loaded:
                self._finish(node)

        self._update_links()

        if texture.abort and not any(node.loading for node in texture.nodes):
            texture.generate(False, self.start)
            texture.abort = False

        self.camera_offset = self.shake.step()

    def _finish(self, node: Node) -> None:
        texture = self.project.current
        if node.abort and node.deleted:
            texture.nodes = [n for n in texture.nodes if n is not node]
            return
        node.loading = False
        node.loaded = False
        if node.abort:
            node.abort = False
            return
        node.done = True
        if not all(n.done for n in texture.nodes):
            texture.generate(False, self.start)

    def _update_links(self) -> None:
        cx = int(self.project.camera_x)
        cy = int(self.project.camera_y)
        links: dict[Socket, Curve] = {}
        for node in self.project.current.nodes:
            for sock in node.inputs:
                source = sock.source
                if source is None or source.parent is None:
                    continue
                owner = source.parent
                sx, sy = socket_anchor(
                    owner.x, owner.y, owner.w, owner.h, owner.r, source.y, True
                )
                ex, ey = socket_anchor(
                    node.x, node.y, node.w, node.h, node.r, sock.y, False
                )
                links[sock] = connection_curve((sx + cx, sy + cy), (ex + cx, ey + cy))
        self.links = links

    def select_color(self, index: int) -> None:
        """Make the palette colour at ``index`` the selected one."""
        if not 0 <= index < len(self.project.palette):
            raise IndexError(f"no palette colour {index}")
        self.project.selected_color = index
        self._sync_color()

    def add_color(self) -> None:
        """Append a black colour to the palette and select it."""
        self.project.history.checkpoint()
        self.project.palette.append((0, 0, 0))
        self.project.selected_color = len(self.project.palette) - 1
        self._sync_color()

    def duplicate_color(self) -> None:
        """Insert a copy of the selected colour and select the copy."""
        project = self.project
        project.history.checkpoint()
        colour = project.palette[project.selected_color]
        project.palette.insert(project.selected_color, colour)
        project.selected_color += 1
        self._sync_color()

    def delete_color(self) -> None:
        """Remove the selected colour; the last one left is turned black."""
        project = self.project
        project.history.checkpoint()
        if len(project.palette) > 1:
            del project.palette[project.selected_color]
            if project.selected_color >= len(project.palette):
                project.selected_color = len(project.palette) - 1
        else:
            project.palette[project.selected_color] = (0, 0, 0)
        self._sync_color()