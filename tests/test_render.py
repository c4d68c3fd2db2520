import numpy as np
import pytest

from cubcaster.mapfile import parse_cub
from cubcaster.player import Camera
from cubcaster.raycast import Texture, WallFace, cast_ray
from cubcaster.render import (
    MINIMAP_PLAYER,
    MINIMAP_WALL,
    MINIMAP_FLOOR,
    SQUARE_SIZE,
    FrameBuffer,
    draw_minimap,
    draw_walls,
    render_frame,
)

ROOM = (
    (1, 1, 1, 1, 1),
    (1, 0, 0, 0, 1),
    (1, 0, 0, 0, 1),
    (1, 0, 0, 0, 1),
    (1, 1, 1, 1, 1),
)

CUB_TEXT = (
    "NO n.xpm\nSO s.xpm\nWE w.xpm\nEA e.xpm\n"
    "F 10,20,30\nC 40,50,60\n\n"
    "11111\n1N001\n11111\n"
)


def _flat(color):
    return Texture(4, 4, (color,) * 16)


def _face_textures():
    colors = {
        WallFace.NORTH: 0x808080,
        WallFace.SOUTH: 0x00FF00,
        WallFace.WEST: 0x0000FF,
        WallFace.EAST: 0xFF00FF,
    }
    return [_flat(colors[face]) for face in WallFace], colors


def test_frame_starts_black():
    frame = FrameBuffer(16, 8)
    assert frame.pixels.shape == (8, 16)
    assert not frame.pixels.any()


def test_invalid_frame_size():
    with pytest.raises(ValueError):
        FrameBuffer(0, 10)


def test_put_pixel_inside_and_outside():
    frame = FrameBuffer(10, 10)
    frame.put_pixel(3, 4, 0x123456)
    assert frame.pixels[4, 3] == 0x123456
    frame.put_pixel(-1, 0, 0xFFFFFF)
    frame.put_pixel(10, 0, 0xFFFFFF)
    frame.put_pixel(0, 10, 0xFFFFFF)
    assert int(frame.pixels.sum()) == 0x123456


def test_fill_background_split_at_horizon():
    frame = FrameBuffer(6, 10)
    frame.fill_background(5, 0x111111, 0x222222)
    assert (frame.pixels[:5] == 0x111111).all()
    assert (frame.pixels[5:] == 0x222222).all()


def test_fill_background_horizon_beyond_frame():
    frame = FrameBuffer(4, 4)
    frame.fill_background(100, 0xABCDEF, 0x010101)
    assert (frame.pixels == 0xABCDEF).all()


def test_draw_square_size():
    frame = FrameBuffer(40, 40)
    frame.draw_square(5, 7, 0xFF0000)
    block = frame.pixels[7:7 + SQUARE_SIZE, 5:5 + SQUARE_SIZE]
    assert (block == 0xFF0000).all()
    assert np.count_nonzero(frame.pixels) == SQUARE_SIZE * SQUARE_SIZE


def test_draw_square_clipped_at_edge():
    frame = FrameBuffer(12, 12)
    frame.draw_square(8, -3, 0x00FF00)
    assert np.count_nonzero(frame.pixels) == 4 * (SQUARE_SIZE - 3)
    assert frame.pixels[0, 11] == 0x00FF00


def test_draw_walls_west_column_matches_ray():
    textures, colors = _face_textures()
    frame = FrameBuffer(8, 60)
    camera = Camera(2.5, 2.5, -1.0, 0.0, 0.0, 0.66)
    draw_walls(frame, camera, ROOM, textures)
    hit = cast_ray(camera, ROOM, 4, 8, 60)
    column = frame.pixels[:, 4]
    assert (column[hit.draw_start:hit.draw_end] == colors[WallFace.WEST]).all()
    assert (column[:hit.draw_start] == 0).all()
    assert (column[hit.draw_end:] == 0).all()


def test_draw_walls_shades_north_wall():
    textures, _ = _face_textures()
    frame = FrameBuffer(8, 60)
    camera = Camera(2.5, 2.5, 0.0, -1.0, -0.66, 0.0)
    draw_walls(frame, camera, ROOM, textures)
    hit = cast_ray(camera, ROOM, 4, 8, 60)
    assert hit.side == 1
    assert (frame.pixels[hit.draw_start:hit.draw_end, 4] == 0x404040).all()


def test_draw_minimap_cells():
    cub_map = parse_cub(CUB_TEXT)
    camera = Camera.from_map(cub_map)
    frame = FrameBuffer(220, 220)
    draw_minimap(frame, camera, cub_map)
    centre = 10 * SQUARE_SIZE
    assert frame.pixels[centre + 5, centre + 5] == MINIMAP_PLAYER
    assert frame.pixels[centre, centre + SQUARE_SIZE] == MINIMAP_FLOOR
    assert frame.pixels[centre, centre - SQUARE_SIZE] == MINIMAP_WALL
    assert frame.pixels[0, 0] == MINIMAP_WALL


def test_render_frame_draws_minimap_over_scene():
    cub_map = parse_cub(CUB_TEXT)
    camera = Camera.from_map(cub_map)
    textures, _ = _face_textures()
    frame = FrameBuffer(240, 220)
    render_frame(frame, camera, cub_map, textures)
    centre = 10 * SQUARE_SIZE
    assert (frame.pixels[centre:centre + SQUARE_SIZE, centre:centre + SQUARE_SIZE]
            == MINIMAP_PLAYER).all()
    assert frame.pixels[centre, centre + SQUARE_SIZE] == MINIMAP_FLOOR