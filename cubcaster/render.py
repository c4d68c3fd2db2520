"""Software frame buffer and the drawing of walls, background and minimap."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from cubcaster.mapfile import EMPTY, CubMap
from cubcaster.player import Camera
from cubcaster.raycast import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    Texture,
    cast_ray,
    texture_column,
    wall_direction,
)

SQUARE_SIZE = 10
MINIMAP_RADIUS = 10
MINIMAP_WALL = 0x000000
MINIMAP_FLOOR = 0xFFFFFF
MINIMAP_PLAYER = 0xFF0000

_SHADE_MASK = 0x7F7F7F
_PIXEL_MASK = 0xFFFFFFFF

Grid = Sequence[Sequence[int]]


@dataclass(eq=False)
class FrameBuffer:
    """An image of 32-bit 0xAARRGGBB pixels, indexed as ``pixels[y, x]``."""

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    pixels: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid frame size {self.width}x{self.height}")
        self.pixels = np.zeros((self.height, self.width), dtype=np.uint32)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = color & _PIXEL_MASK

    def fill_background(self, horizon: int, ceiling: int, floor: int) -> None:
        """Paint rows above ``horizon`` with the ceiling colour, the rest with the floor."""
        split = min(max(horizon, 0), self.height)
        self.pixels[:split, :] = ceiling & _PIXEL_MASK
        self.pixels[split:, :] = floor & _PIXEL_MASK

    def draw_square(self, x: int, y: int, color: int) -> None:
        """Fill a square of SQUARE_SIZE pixels whose top-left corner is (x, y)."""
        left, right = max(x, 0), min(x + SQUARE_SIZE, self.width)
        top, bottom = max(y, 0), min(y + SQUARE_SIZE, self.height)
        if left < right and top < bottom:
            self.pixels[top:bottom, left:right] = color & _PIXEL_MASK


def draw_walls(
    frame: FrameBuffer, camera: Camera, grid: Grid, textures: Sequence[Texture]
) -> None:
    """Cast one ray per column and draw the textured wall slice it hits."""
    arrays = [np.asarray(texture.pixels, dtype=np.int64) for texture in textures]
    reference = textures[0]
    half_height = frame.height // 2
    for x in range(frame.width):
        hit = cast_ray(camera, grid, x, frame.width, frame.height)
        count = hit.draw_end - hit.draw_start
        if count <= 0:
            continue
        tex_x = texture_column(hit, camera, reference.width)
        face = wall_direction(hit)
        step = reference.height / hit.line_height
        start = (hit.draw_start - half_height + hit.line_height // 2) * step
        tex_y = (start + step * np.arange(count)).astype(np.int64) & (reference.height - 1)
        colors = arrays[face][textures[face].width * tex_y + tex_x]
        if hit.side == 1:
            colors = (colors >> 1) & _SHADE_MASK
        frame.pixels[hit.draw_start:hit.draw_end, x] = colors & _PIXEL_MASK


def draw_minimap(frame: FrameBuffer, camera: Camera, cub_map: CubMap) -> None:
    """Draw the cells around the player in the top-left corner of the frame."""
    for i in range(-MINIMAP_RADIUS, MINIMAP_RADIUS + 1):
        for j in range(-MINIMAP_RADIUS, MINIMAP_RADIUS + 1):
            cell_x = int(camera.pos_x + i)
            cell_y = int(camera.pos_y + j)
            is_open = (
                cub_map.is_inside(cell_x, cell_y)
                and cub_map.grid[cell_y][cell_x] == EMPTY
            )
            frame.draw_square(
                (i + MINIMAP_RADIUS) * SQUARE_SIZE,
                (j + MINIMAP_RADIUS) * SQUARE_SIZE,
                MINIMAP_FLOOR if is_open else MINIMAP_WALL,
            )
    centre = MINIMAP_RADIUS * SQUARE_SIZE
    frame.draw_square(centre, centre, MINIMAP_PLAYER)


def render_frame(
    frame: FrameBuffer, camera: Camera, cub_map: CubMap, textures: Sequence[Texture]
) -> None:
    """Draw background, walls and minimap for one frame."""
    frame.fill_background(frame.height // 2, cub_map.ceiling, cub_map.floor)
    draw_walls(frame, camera, cub_map.grid, textures)
    draw_minimap(frame, camera, cub_map)