"""Geometry of the editor window: side bars, panels and scroll limits."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

Number = Union[int, float]

MIN_BAR_WIDTH = 128 + 7
SWATCH_SIZE = 12
SWATCH_SPACE = 1
PREVIEW_HEIGHT = 96

_SPACE = 4
_COLOR_BOX = 36
_TEXTURE_FOOTER = 5 + 8 + 5 + 8 + (14 - 8) // 2 + 5
_PALETTE_FOOTER = 2 + 5 + 8 + 5


def clamp(value: Number, low: Number, high: Number) -> Number:
    """Limit ``value`` to ``high`` and then to ``low``.

    When the bounds cross, ``low`` wins, so a scroll offset never goes
    negative even when there is nothing to scroll.
    """
    if value > high:
        value = high
    if value < low:
        value = low
    return value


def _clamp_bar(value: Number, low: Number, high: Number) -> Number:
    if value < low:
        return low
    if value > high:
        return high
    return value


@dataclass
class Layout:
    """Positions of the bars and panels of the editor window.

    ``coll_h`` is the height of one row in the effect list and
    ``palette_height`` the height of the palette panel. Screen sizes are in
    logical pixels, that is window pixels divided by ``scale``.
    """

    screen_w: int
    screen_h: int
    coll_h: int
    palette_height: int
    scale: float = 1.0
    bar_x: Number = field(init=False)
    bar_y: Number = field(init=False)
    bar_x_right: Number = field(init=False)
    bar_y2: int = field(init=False)
    bar_y4: int = field(init=False)
    bar_y5: int = field(init=False)

    def __post_init__(self) -> None:
        self.bar_y = self.screen_h - 150
        self.bar_x = MIN_BAR_WIDTH
        self.bar_x_right = self.bar_x
        title = self.coll_h - 4
        self.bar_y2 = (
            self.palette_height + 2 + _SPACE * 3 + _COLOR_BOX + title + 12
        )
        self.bar_y4 = (
            self.palette_height
            + 2
            + 12
            + _SPACE * 2
            + _COLOR_BOX
            + 3
            + 9
            + 2
            + 14
            + 4
            + title
            + _SPACE
        )
        self.bar_y5 = self.bar_y4 + 3 + 3 + 8 + 4 + PREVIEW_HEIGHT

    @property
    def bar_y3(self) -> int:
        """Top of the colour tools, just below the palette panel."""
        return self.palette_height

    def clamp_bars(self) -> None:
        """Keep both side bars between their minimum and a third of the screen."""
        widest = self.screen_w // 3
        self.bar_x = _clamp_bar(self.bar_x, MIN_BAR_WIDTH, widest)
        self.bar_x_right = _clamp_bar(self.bar_x_right, MIN_BAR_WIDTH, widest)

    def resize(self, width: int, height: int, scale: float) -> None:
        """Adapt to a window of ``width`` by ``height`` pixels at ``scale``."""
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.scale = scale
        self.screen_w = int(width / float(scale))
        self.screen_h = int(height / float(scale))
        self.clamp_bars()
        self.bar_y = self.screen_h

    def palette_columns(self) -> int:
        """Number of colour swatches that fit in one palette row."""
        usable = int(self.bar_x_right - 10 + SWATCH_SPACE - 7 - 7)
        return int(usable / float(SWATCH_SIZE))

    def max_palette_scroll(self, count: int) -> int:
        """Largest palette scroll offset for ``count`` colours."""
        columns = self.palette_columns()
        if columns < 1:
            raise ValueError("right bar too narrow for the palette")
        content = max(
            (
                int((p // columns) * float(SWATCH_SIZE) + SWATCH_SIZE)
                for p in range(count)
            ),
            default=0,
        )
        return content - (self.palette_height - _PALETTE_FOOTER)

    def max_tools_scroll(self) -> int:
        """Largest scroll offset of the right tool bar."""
        return int(self.bar_y5 - self.bar_y) + 1

    def max_texture_scroll(self, count: int, tile_size: int) -> int:
        """Largest scroll offset of the texture list for ``count`` tiles."""
        width = int(self.bar_x_right - 2 - 7)
        cell = float(tile_size + 1)
        columns = int(width / cell)
        if columns < 1:
            raise ValueError("tile too wide for the right bar")
        content = max(
            (int((p // columns) * cell + cell + 1) for p in range(count)),
            default=0,
        )
        return content - int(self.screen_h - self.bar_y - _TEXTURE_FOOTER)

    def max_effects_scroll(self, count: int) -> int:
        """Largest scroll offset of the effect list for ``count`` effects."""
        return int(-self.bar_y + self.coll_h * count) + 1