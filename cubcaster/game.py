"""Game state, input handling and the interactive window."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

import numpy as np

from cubcaster.mapfile import CubMap, MapError, load_cub
from cubcaster.player import Camera
from cubcaster.raycast import SCREEN_HEIGHT, SCREEN_WIDTH, Texture, resample_texture
from cubcaster.render import FrameBuffer, render_frame
from cubcaster.xpm import XpmError, load_xpm

MOUSE_TURN_MARGIN = 1000
WINDOW_TITLE = "Hell!"


class Key(IntEnum):
    """Keys the game reacts to."""

    A = 0
    S = 1
    D = 2
    Q = 12
    W = 13
    ESCAPE = 53
    LEFT = 123
    RIGHT = 124
    DOWN = 125


_HELD_KEYS = {
    Key.LEFT: "left_rotate",
    Key.RIGHT: "right_rotate",
    Key.A: "left",
    Key.S: "backward",
    Key.W: "forward",
    Key.D: "right",
    Key.DOWN: "down",
}


@dataclass
class KeyState:
    """Which controls are held, and where the mouse is."""

    left_rotate: bool = False
    right_rotate: bool = False
    left: bool = False
    right: bool = False
    forward: bool = False
    backward: bool = False
    down: bool = False
    mouse_x: int = 0
    mouse_y: int = 0
    mouse_press: bool = False


class Game:
    """A running scene: map, camera, textures, input state and frame."""

    def __init__(
        self,
        cub_map: CubMap,
        textures: Sequence[Texture],
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
    ) -> None:
        self.cub_map = cub_map
        self.textures = list(textures)
        self.camera = Camera.from_map(cub_map)
        self.frame = FrameBuffer(width, height)
        self.keys = KeyState(mouse_x=width // 2, mouse_y=height // 2)
        self.running = True

    def key_press(self, key: int) -> None:
        """Handle a key going down."""
        try:
            key = Key(key)
        except ValueError:
            return
        if key is Key.ESCAPE:
            self.running = False
        elif key is Key.Q:
            self.toggle_mouse()
        elif key in _HELD_KEYS:
            setattr(self.keys, _HELD_KEYS[key], True)

    def key_release(self, key: int) -> None:
        """Handle a key coming up."""
        try:
            key = Key(key)
        except ValueError:
            return
        if key in _HELD_KEYS:
            setattr(self.keys, _HELD_KEYS[key], False)

    def mouse_move(self, x: int, y: int) -> None:
        """Record the pointer position."""
        self.keys.mouse_x = x
        self.keys.mouse_y = y

    def toggle_mouse(self) -> None:
        """Switch mouse steering on or off."""
        self.keys.mouse_press = not self.keys.mouse_press

    def update(self) -> None:
        """Apply held controls to the camera and render the next frame."""
        grid = self.cub_map.grid
        keys = self.keys
        if keys.left_rotate:
            self.camera.rotate_left()
        if keys.right_rotate:
            self.camera.rotate_right()
        if keys.left:
            self.camera.move_left(grid)
        if keys.right:
            self.camera.move_right(grid)
        if keys.forward:
            self.camera.move_forward(grid)
        if keys.backward:
            self.camera.move_backward(grid)
        if keys.mouse_press:
            offset = keys.mouse_x - self.frame.width // 2
            if offset > MOUSE_TURN_MARGIN:
                self.camera.rotate_right()
            elif offset < -MOUSE_TURN_MARGIN:
                self.camera.rotate_left()
        render_frame(self.frame, self.camera, self.cub_map, self.textures)


def load_textures(cub_map: CubMap) -> list[Texture]:
    """Load and resample the north, south, west and east wall textures."""
    return [
        resample_texture(load_xpm(path))
        for path in (cub_map.north, cub_map.south, cub_map.west, cub_map.east)
    ]


def _frame_rgb(frame: FrameBuffer) -> np.ndarray:
    pixels = frame.pixels.T
    return np.stack(((pixels >> 16) & 0xFF, (pixels >> 8) & 0xFF, pixels & 0xFF), axis=-1)


def _run(game: Game) -> None:
    import pygame

    key_map = {
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_DOWN: Key.DOWN,
        pygame.K_a: Key.A,
        pygame.K_s: Key.S,
        pygame.K_d: Key.D,
        pygame.K_w: Key.W,
        pygame.K_q: Key.Q,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.frame.width, game.frame.height))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN and event.key in key_map:
                    game.key_press(key_map[event.key])
                elif event.type == pygame.KEYUP and event.key in key_map:
                    game.key_release(key_map[event.key])
                elif event.type == pygame.MOUSEMOTION:
                    game.mouse_move(*event.pos)
            if not game.running:
                break
            pygame.mouse.set_visible(not game.keys.mouse_press)
            game.update()
            pygame.surfarray.blit_array(screen, _frame_rgb(game.frame))
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and run it in a window."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if len(args) != 1:
            raise MapError("Invalid number of arguments")
        cub_map = load_cub(args[0])
        textures = load_textures(cub_map)
    except MapError as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    except XpmError:
        print("Error\nFailed to open xpm", file=sys.stderr)
        return 1
    _run(Game(cub_map, textures))
    return 0