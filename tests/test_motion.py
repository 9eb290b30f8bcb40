import math

import pytest

from tileforge.motion import (
    CameraShake,
    connection_curve,
    ease_towards,
    rotate_about,
    socket_anchor,
)


def test_ease_towards_quarter_step():
    position, step = ease_towards(0.0, 8.0, 4.0)
    assert step == pytest.approx(2.0)
    assert position == pytest.approx(2.0)


def test_ease_towards_converges_without_overshoot():
    position = 10.0
    for _ in range(200):
        new, step = ease_towards(position, 50.0, 4.0)
        assert new == pytest.approx(position + step)
        assert position <= new <= 50.0
        position = new
    assert position == pytest.approx(50.0, abs=1e-6)


def test_ease_towards_zero_divisor():
    with pytest.raises(ValueError):
        ease_towards(1.0, 2.0, 0)


def test_rotate_zero_degrees_is_identity():
    assert rotate_about(3.0, 7.0, 1.0, 2.0, 0) == pytest.approx((3.0, 7.0))


def test_rotate_preserves_distance_and_round_trips():
    cx, cy = 5.0, -2.0
    px, py = 12.0, 4.0
    for degrees in (15, 90, 133, 270):
        rx, ry = rotate_about(px, py, cx, cy, degrees)
        assert math.hypot(rx - cx, ry - cy) == pytest.approx(math.hypot(px - cx, py - cy))
        back = rotate_about(rx, ry, cx, cy, -degrees)
        assert back == pytest.approx((px, py))


def test_rotate_full_turn():
    assert rotate_about(4.0, 1.0, 0.0, 0.0, 360) == pytest.approx((4.0, 1.0))


def test_socket_anchor_unrotated():
    assert socket_anchor(10, 20, 100, 60, 0, 30, True) == pytest.approx((110, 54))
    assert socket_anchor(10, 20, 100, 60, 0, 30, False) == pytest.approx((10, 54))


def test_socket_anchor_rotation_keeps_distance_to_centre():
    centre = (10 + 50.0, 20 + 30.0)
    flat = socket_anchor(10, 20, 100, 60, 0, 30, True)
    tilted = socket_anchor(10, 20, 100, 60, 25, 30, True)
    assert math.dist(flat, centre) == pytest.approx(math.dist(tilted, centre))
    assert tilted != pytest.approx(flat)


def test_socket_anchor_half_turn_mirrors_through_centre():
    centre = (60.0, 50.0)
    flat = socket_anchor(10, 20, 100, 60, 0, 30, True)
    turned = socket_anchor(10, 20, 100, 60, 180, 30, True)
    assert turned == pytest.approx((2 * centre[0] - flat[0], 2 * centre[1] - flat[1]))


@pytest.mark.parametrize(
    "start,end",
    [((0.0, 0.0), (40.0, 10.0)), ((50.0, 5.0), (-10.0, 30.0)), ((3.0, 3.0), (3.0, 9.0))],
)
def test_connection_curve_shape(start, end):
    p0, p1, p2, p3 = connection_curve(start, end)
    assert p0 == start
    assert p3 == end
    assert p1[1] == start[1]
    assert p2[1] == end[1]
    half = abs(end[0] - start[0]) / 2.0
    assert p1[0] - p0[0] == pytest.approx(half)
    assert p3[0] - p2[0] == pytest.approx(half)


def test_shake_at_rest_stays_still():
    shake = CameraShake()
    for _ in range(5):
        assert shake.step() == pytest.approx((0.0, 0.0))
    assert shake.offset == 1.0
    assert shake.rotation == 5


def test_shake_snaps_immediately_when_not_positive():
    shake = CameraShake(offset=1.2)
    assert shake.step() == pytest.approx((0.0, 0.0))
    assert shake.offset == 1.0
    assert shake.speed == 0.0
    assert shake.positive is True


def test_shake_wobble_dies_out():
    shake = CameraShake(offset=1.2, positive=True)
    first = shake.step()
    assert math.hypot(*first) > 0
    for _ in range(500):
        shake.step()
    assert shake.offset == pytest.approx(1.0, abs=1e-3)
    assert math.hypot(*shake.step()) < 1.0


def test_shake_displacement_bounded_by_offset():
    shake = CameraShake(offset=1.3, positive=True)
    for _ in range(50):
        x, y = shake.step()
        assert math.hypot(x, y) == pytest.approx(abs(shake.offset - 1.0) * shake.max_offset)