import math

import pytest

from cubcaster.mapfile import parse_cub
from cubcaster.player import Camera

HEADER = "NO ./n.xpm\nSO ./s.xpm\nWE ./w.xpm\nEA ./e.xpm\nF 10,20,30\nC 40,50,60\n\n"


def make_map(facing):
    rows = ["11111", "10001", f"10{facing}01", "10001", "11111"]
    return parse_cub(HEADER + "\n".join(rows) + "\n")


TIGHT = parse_cub(HEADER + "111\n1N1\n111\n")


@pytest.mark.parametrize(
    "facing, expected",
    [
        ("W", (-1.0, 0.0, 0.0, 0.66)),
        ("E", (1.0, 0.0, 0.0, -0.66)),
        ("N", (0.0, -1.0, -0.66, 0.0)),
        ("S", (0.0, 1.0, 0.66, 0.0)),
    ],
)
def test_from_map_direction(facing, expected):
    camera = Camera.from_map(make_map(facing))
    assert (camera.dir_x, camera.dir_y, camera.plane_x, camera.plane_y) == pytest.approx(expected)


def test_from_map_position_offset():
    camera = Camera.from_map(make_map("N"))
    assert camera.pos_x == pytest.approx(2.02)
    assert camera.pos_y == pytest.approx(2.02)


def test_forward_then_backward_returns():
    cub = make_map("E")
    camera = Camera.from_map(cub)
    start = (camera.pos_x, camera.pos_y)
    camera.move_forward(cub.grid, 0.3)
    assert camera.pos_x > start[0]
    camera.move_backward(cub.grid, 0.3)
    assert (camera.pos_x, camera.pos_y) == pytest.approx(start)


def test_left_then_right_returns():
    cub = make_map("S")
    camera = Camera.from_map(cub)
    start = (camera.pos_x, camera.pos_y)
    camera.move_left(cub.grid, 0.2)
    assert (camera.pos_x, camera.pos_y) != pytest.approx(start)
    camera.move_right(cub.grid, 0.2)
    assert (camera.pos_x, camera.pos_y) == pytest.approx(start)


def test_forward_moves_by_speed_along_direction():
    cub = make_map("N")
    camera = Camera.from_map(cub)
    y0 = camera.pos_y
    camera.move_forward(cub.grid, 0.25)
    assert camera.pos_y == pytest.approx(y0 - 0.25)


@pytest.mark.parametrize("move", ["move_forward", "move_backward", "move_left", "move_right"])
def test_walls_block_movement(move):
    camera = Camera.from_map(TIGHT)
    start = (camera.pos_x, camera.pos_y)
    getattr(camera, move)(TIGHT.grid, 0.5)
    assert (camera.pos_x, camera.pos_y) == pytest.approx(start)


def test_rotate_left_then_right_restores():
    camera = Camera.from_map(make_map("W"))
    before = (camera.dir_x, camera.dir_y, camera.plane_x, camera.plane_y)
    camera.rotate_left(0.4)
    camera.rotate_right(0.4)
    assert (camera.dir_x, camera.dir_y, camera.plane_x, camera.plane_y) == pytest.approx(before)


def test_rotation_keeps_lengths_and_orthogonality():
    camera = Camera.from_map(make_map("E"))
    for _ in range(17):
        camera.rotate_left()
    assert math.hypot(camera.dir_x, camera.dir_y) == pytest.approx(1.0)
    assert math.hypot(camera.plane_x, camera.plane_y) == pytest.approx(0.66)
    assert camera.dir_x * camera.plane_x + camera.dir_y * camera.plane_y == pytest.approx(0.0, abs=1e-12)


def test_quarter_turns_come_full_circle():
    camera = Camera.from_map(make_map("S"))
    before = (camera.dir_x, camera.dir_y)
    for _ in range(4):
        camera.rotate_right(math.pi / 2)
    assert (camera.dir_x, camera.dir_y) == pytest.approx(before, abs=1e-12)


def test_rotate_left_half_turn_reverses_direction():
    camera = Camera.from_map(make_map("E"))
    camera.rotate_left(math.pi)
    assert (camera.dir_x, camera.dir_y) == pytest.approx((-1.0, 0.0), abs=1e-12)