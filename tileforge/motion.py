"""Motion helpers: eased dragging, rotated node anchors, link curves, camera shake."""

from __future__ import annotations

import math
from dataclasses import dataclass

Point = tuple[float, float]

SOCKET_HALF = 4
SHAKE_MAX_OFFSET = 16 * 6.0
_SHAKE_SPRING = 1.5
_SHAKE_THRESHOLD = 0.005


def ease_towards(current: float, target: float, divisor: float) -> tuple[float, float]:
    """Move ``current`` a ``1/divisor`` share of the way to ``target``.

    Returns the new position and the step taken.
    """
    if divisor == 0:
        raise ValueError("divisor must not be zero")
    step = (target - current) / divisor
    return current + step, step


def rotate_about(px: float, py: float, cx: float, cy: float, degrees: float) -> Point:
    """Rotate the point ``(px, py)`` about ``(cx, cy)`` by ``degrees`` in screen space."""
    xa = px - cx
    ya = py - cy
    a = math.radians(-degrees)
    xb = ya * math.sin(a) + xa * math.cos(a)
    yb = ya * math.cos(a) - xa * math.sin(a)
    return xb + cx, yb + cy


def socket_anchor(
    x: float,
    y: float,
    w: float,
    h: float,
    rotation: float,
    socket_y: float,
    output: bool,
) -> Point:
    """Where a link attaches to a socket of a node that may be tilted.

    Outputs sit on the right edge and inputs on the left, at the middle of
    the socket; the point turns with the node about its centre.
    """
    px = x + w if output else x
    py = y + socket_y + SOCKET_HALF
    return rotate_about(px, py, x + w / 2.0, y + h / 2.0, rotation)


def connection_curve(start: Point, end: Point) -> tuple[Point, Point, Point, Point]:
    """Control points of the cubic Bezier drawn between two sockets.

    The inner points stretch horizontally by half the horizontal distance,
    so the curve leaves and enters its sockets level.
    """
    x0, y0 = start
    x3, y3 = end
    offset = abs(x3 - x0) / 2.0
    return (x0, y0), (x0 + offset, y0), (x3 - offset, y3), (x3, y3)


@dataclass
class CameraShake:
    """A damped spring that wobbles the view after a jolt.

    ``offset`` rests at 1.0; setting it elsewhere starts a wobble that
    ``step`` plays out and finally snaps back to rest.
    """

    offset: float = 1.0
    speed: float = 0.0
    magnitude: float = 1.2
    positive: bool = False
    rotation: float = 0.0
    max_offset: float = SHAKE_MAX_OFFSET

    def step(self) -> Point:
        """Advance one frame and return the camera displacement."""
        self.rotation += 1
        if self.offset > 1.0:
            self.speed -= (self.offset - 1.0) / _SHAKE_SPRING
            if self.speed < _SHAKE_THRESHOLD and not self.positive:
                self.speed = 0.0
                self.offset = 1.0
            self.positive = True
        elif self.offset < 1.0:
            self.speed += (1.0 - self.offset) / _SHAKE_SPRING
            if self.speed > -_SHAKE_THRESHOLD and self.positive:
                self.speed = 0.0
                self.offset = 1.0
            self.positive = False
        self.offset += self.speed
        self.speed /= self.magnitude
        angle = self.rotation * math.pi / 180.0
        amount = (self.offset - 1.0) * self.max_offset
        return math.sin(angle) * amount, math.cos(angle) * amount