"""Node graph model: parameters, sockets, nodes and the tile they build."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional

RAMP_KIND = 7


@dataclass
class ControlPoint:
    """A colour stop on a gradient ramp; ``a`` is its position in 0..1."""

    a: float = 0.0
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0


@dataclass
class Parameter:
    """A node or tool parameter holding up to four values or a colour ramp."""

    kind: int = 0
    name: str = ""
    value: float = 0
    value2: float = 0
    value3: float = 0
    value4: float = 0
    reset_value: float = 0
    tooltip: str = ""
    x: float = 0
    y: float = 0
    w: float = 0
    h: float = 0
    points: list[ControlPoint] = field(default_factory=list)

    @property
    def is_ramp(self) -> bool:
        return self.kind == RAMP_KIND


@dataclass(eq=False)
class Socket:
    """An input or output connector of a node.

    For an input, ``source`` is the output socket it is fed from. While a
    project is being read, ``future_node`` and ``future_socket`` hold the
    indices of that output until the whole graph exists.
    """

    parent: Optional["Node"] = None
    index: int = 0
    y: float = 0.0
    snapped: bool = False
    infloop: bool = False
    source: Optional["Socket"] = None
    px: float = 0.0
    py: float = 0.0
    texture: Any = None
    data: Any = None
    future_node: Optional[int] = None
    future_socket: Optional[int] = None
    last_tex_dir: str = ""
    last_tex_name: str = ""


@dataclass(eq=False)
class Node:
    """One effect in the graph, with its parameters and sockets."""

    name: str = ""
    script: str = ""
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0
    sx: float = 0.0
    sy: float = 0.0
    r: float = 0.0
    params: list[Parameter] = field(default_factory=list)
    inputs: list[Socket] = field(default_factory=list)
    outputs: list[Socket] = field(default_factory=list)
    done: bool = False
    loading: bool = False
    loaded: bool = False
    abort: bool = False
    deleted: bool = False
    undone: bool = False
    done_timer: int = 0

    def _new_socket(self, sockets: list[Socket]) -> Socket:
        socket = Socket(parent=self, index=len(sockets))
        sockets.append(socket)
        return socket

    def add_input(self) -> Socket:
        """Append a new input socket and return it."""
        return self._new_socket(self.inputs)

    def add_output(self) -> Socket:
        """Append a new output socket and return it."""
        return self._new_socket(self.outputs)

    def is_ready(self) -> bool:
        """True when every connected input comes from a finished node."""
        return all(
            sock.source.parent.done
            for sock in self.inputs
            if sock.source is not None and sock.source.parent is not None
        )


@dataclass(eq=False)
class TileTexture:
    """A tile made of a graph of nodes."""

    nodes: list[Node] = field(default_factory=list)
    done: bool = False
    done_timer: int = 0
    abort: bool = False
    last_tex_dir: str = ""
    last_tex_name: str = ""

    def generate(
        self,
        first: bool = True,
        start: Optional[Callable[[Node], None]] = None,
    ) -> list[Node]:
        """Drive regeneration of the tile.

        With ``first`` set, every running node is asked to abort and the tile
        is flagged so generation restarts once they have stopped. Otherwise
        each unfinished, idle node whose inputs are all finished is marked as
        loading and handed to ``start``. Returns the nodes that were started.
        """
        if first:
            self.abort = True
            for node in self.nodes:
                if node.loading:
                    node.abort = True
            return []
        started = [
            node
            for node in self.nodes
            if not node.done and not node.loading and node.is_ready()
        ]
        for node in started:
            node.loading = True
            if start is not None:
                start(node)
        return started