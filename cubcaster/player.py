"""Player camera: position, viewing direction, camera plane and movement."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from cubcaster.mapfile import EMPTY, CubMap

MOVE_SPEED = 0.1
ROT_SPEED = 0.07
START_OFFSET = 0.02
PLANE_LENGTH = 0.66

_FORWARD_REACH = 0.9
_SIDE_REACH = 0.5

Grid = Sequence[Sequence[int]]


def _is_open(grid: Grid, x: int, y: int) -> bool:
    return 0 <= y < len(grid) and 0 <= x < len(grid[y]) and grid[y][x] == EMPTY


@dataclass
class Camera:
    """Player position with direction vector and camera plane."""

    pos_x: float
    pos_y: float
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    @classmethod
    def from_map(cls, cub_map: CubMap) -> "Camera":
        """Place the camera on the map's start cell, facing its start direction."""
        camera = cls(cub_map.player_x + START_OFFSET, cub_map.player_y + START_OFFSET)
        facing = cub_map.player_dir
        if facing == "W":
            camera.dir_x, camera.plane_y = -1.0, PLANE_LENGTH
        elif facing == "E":
            camera.dir_x, camera.plane_y = 1.0, -PLANE_LENGTH
        elif facing == "N":
            camera.dir_y, camera.plane_x = -1.0, -PLANE_LENGTH
        elif facing == "S":
            camera.dir_y, camera.plane_x = 1.0, PLANE_LENGTH
        else:
            raise ValueError(f"unknown start direction: {facing!r}")
        return camera

    def _shift(self, grid: Grid, vx: float, vy: float, reach: float, speed: float) -> None:
        if _is_open(grid, int(self.pos_x + vx * reach), int(self.pos_y)):
            self.pos_x += vx * speed
        if _is_open(grid, int(self.pos_x), int(self.pos_y + vy * reach)):
            self.pos_y += vy * speed

    def move_forward(self, grid: Grid, speed: float = MOVE_SPEED) -> None:
        """Step along the viewing direction unless a wall is in the way."""
        self._shift(grid, self.dir_x, self.dir_y, _FORWARD_REACH, speed)

    def move_backward(self, grid: Grid, speed: float = MOVE_SPEED) -> None:
        """Step against the viewing direction unless a wall is in the way."""
        self._shift(grid, -self.dir_x, -self.dir_y, _FORWARD_REACH, speed)

    def move_left(self, grid: Grid, speed: float = MOVE_SPEED) -> None:
        """Strafe against the camera plane unless a wall is in the way."""
        self._shift(grid, -self.plane_x, -self.plane_y, _SIDE_REACH, speed)

    def move_right(self, grid: Grid, speed: float = MOVE_SPEED) -> None:
        """Strafe along the camera plane unless a wall is in the way."""
        self._shift(grid, self.plane_x, self.plane_y, _SIDE_REACH, speed)

    def _rotate(self, angle: float) -> None:
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def rotate_left(self, angle: float = ROT_SPEED) -> None:
        """Turn the view by ``angle`` radians in the positive sense."""
        self._rotate(angle)

    def rotate_right(self, angle: float = ROT_SPEED) -> None:
        """Turn the view by ``angle`` radians in the negative sense."""
        self._rotate(-angle)