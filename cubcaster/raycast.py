"""Ray casting through the map grid and wall texture lookup."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from cubcaster.mapfile import WALL
from cubcaster.player import Camera
from cubcaster.xpm import XpmImage

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
TEXTURE_WIDTH = 128
TEXTURE_HEIGHT = 128

Grid = Sequence[Sequence[int]]


class WallFace(IntEnum):
    """Which texture a wall hit uses."""

    NORTH = 0
    SOUTH = 1
    WEST = 2
    EAST = 3


@dataclass(frozen=True)
class Texture:
    """A wall texture stored row by row: pixel (x, y) is ``pixels[width * y + x]``."""

    width: int
    height: int
    pixels: tuple[int, ...]


@dataclass(frozen=True)
class RayHit:
    """Where one screen column's ray meets a wall, and the slice to draw."""

    ray_dir_x: float
    ray_dir_y: float
    map_x: int
    map_y: int
    step_x: int
    step_y: int
    side: int
    perp_wall_dist: float
    line_height: int
    draw_start: int
    draw_end: int


def resample_texture(
    image: XpmImage, width: int = TEXTURE_WIDTH, height: int = TEXTURE_HEIGHT
) -> Texture:
    """Scale an image to ``width`` x ``height`` by nearest sampling."""
    pixels = tuple(
        image.pixels[max(0, image.height * row // height)][max(0, image.width * col // width)]
        for row in range(height)
        for col in range(width)
    )
    return Texture(width, height, pixels)


def _delta(component: float) -> float:
    return math.inf if component == 0 else abs(1 / component)


def cast_ray(
    camera: Camera,
    grid: Grid,
    x: int,
    screen_width: int = SCREEN_WIDTH,
    screen_height: int = SCREEN_HEIGHT,
) -> RayHit:
    """Cast the ray for screen column ``x`` and find the wall it hits."""
    camera_x = 2 * x / screen_width - 1
    ray_dir_x = camera.dir_x + camera.plane_x * camera_x
    ray_dir_y = camera.dir_y + camera.plane_y * camera_x
    map_x, map_y = int(camera.pos_x), int(camera.pos_y)
    delta_x, delta_y = _delta(ray_dir_x), _delta(ray_dir_y)

    if ray_dir_x < 0:
        step_x, side_x = -1, (camera.pos_x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - camera.pos_x) * delta_x
    if ray_dir_y < 0:
        step_y, side_y = -1, (camera.pos_y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - camera.pos_y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if not (0 <= map_y < len(grid) and 0 <= map_x < len(grid[map_y])):
            raise ValueError("ray left the map without hitting a wall")
        if grid[map_y][map_x] == WALL:
            break

    if side == 0:
        perp = (map_x - camera.pos_x + (1 - step_x) // 2) / ray_dir_x
    else:
        perp = (map_y - camera.pos_y + (1 - step_y) // 2) / ray_dir_y

    line_height = int(screen_height / perp)
    draw_start = max(0, -(line_height // 2) + screen_height // 2)
    draw_end = min(screen_height - 1, line_height // 2 + screen_height // 2)
    return RayHit(
        ray_dir_x=ray_dir_x,
        ray_dir_y=ray_dir_y,
        map_x=map_x,
        map_y=map_y,
        step_x=step_x,
        step_y=step_y,
        side=side,
        perp_wall_dist=perp,
        line_height=line_height,
        draw_start=draw_start,
        draw_end=draw_end,
    )


def texture_column(hit: RayHit, camera: Camera, tex_width: int = TEXTURE_WIDTH) -> int:
    """Return the texture column that the hit point falls on."""
    if hit.side == 0:
        wall_x = camera.pos_y + hit.perp_wall_dist * hit.ray_dir_y
    else:
        wall_x = camera.pos_x + hit.perp_wall_dist * hit.ray_dir_x
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * tex_width)
    if (hit.side == 0 and hit.ray_dir_x > 0) or (hit.side == 1 and hit.ray_dir_y < 0):
        tex_x = tex_width - tex_x - 1
    return tex_x


def wall_direction(hit: RayHit) -> WallFace:
    """Pick the wall face, and so the texture, for a hit."""
    if hit.side == 0:
        return WallFace.WEST if hit.ray_dir_x < 0 else WallFace.EAST
    return WallFace.NORTH if hit.ray_dir_y < 0 else WallFace.SOUTH