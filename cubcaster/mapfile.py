"""Reader and validator for ``.cub`` scene descriptions."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

EMPTY = 0
WALL = 1
VOID = 2

PLAYER_DIRECTIONS = frozenset("NSWE")
_MAP_CHARS = frozenset("10NSWE ")
_TEXTURE_KEYS = {"NO": "north", "SO": "south", "WE": "west", "EA": "east"}
_COLOR_KEYS = {"F": "floor", "C": "ceiling"}
_PARAM_NAMES = (*_TEXTURE_KEYS.values(), *_COLOR_KEYS.values())


class MapError(ValueError):
    """Raised when a scene description is invalid."""


@dataclass(frozen=True)
class CubMap:
    """A parsed scene: wall textures, colours, grid and player start.

    ``grid[y][x]`` holds EMPTY, WALL or VOID (no cell at all).
    """

    north: str
    south: str
    west: str
    east: str
    floor: int
    ceiling: int
    grid: tuple[tuple[int, ...], ...]
    width: int
    height: int
    player_x: int
    player_y: int
    player_dir: str

    def is_inside(self, x: int, y: int) -> bool:
        """Tell whether column ``x`` and row ``y`` lie within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height


def _color_component(text: str) -> int:
    value = 0
    for char in text:
        if not "0" <= char <= "9":
            raise MapError("Invalid color")
        value = value * 10 + int(char)
        if value > 255:
            raise MapError("Invalid color")
    return value


def parse_color(text: str) -> int:
    """Turn ``R,G,B`` (each 0..255) into a 0xRRGGBB integer."""
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise MapError("Invalid color")
    red, green, blue = (_color_component(part) for part in parts)
    return red << 16 | green << 8 | blue


def is_map_line(line: str) -> bool:
    """Tell whether a line holds only map characters."""
    return all(char in _MAP_CHARS for char in line)


def validate_enclosed(grid, width: int, height: int) -> frozenset[tuple[int, int]]:
    """Check that every open cell is closed off by walls.

    Returns the set of open cells as ``(x, y)`` pairs; raises MapError
    when an open cell reaches the edge of the grid or a void cell.
    """
    visited: set[tuple[int, int]] = set()
    for start_y, row in enumerate(grid[:height]):
        for start_x, cell in enumerate(row[:width]):
            if cell != EMPTY or (start_x, start_y) in visited:
                continue
            stack = [(start_x, start_y)]
            while stack:
                x, y = stack.pop()
                if not (0 <= x < width and 0 <= y < height):
                    raise MapError("Invalid map")
                cell = grid[y][x]
                if cell == WALL or (x, y) in visited:
                    continue
                if cell == VOID:
                    raise MapError("Invalid map")
                visited.add((x, y))
                stack.extend(((x, y + 1), (x, y - 1), (x + 1, y), (x - 1, y)))
    return frozenset(visited)


def _is_full(params: dict[str, str | int]) -> bool:
    return all(params.get(name) for name in _PARAM_NAMES)


def _set_param(params: dict[str, str | int], words: list[str]) -> None:
    if len(words) != 2:
        raise MapError("Invalid parameter")
    key, value = words
    if key in _TEXTURE_KEYS:
        name = _TEXTURE_KEYS[key]
        if params.get(name):
            raise MapError("Invalid parameter")
        params[name] = value
    else:
        name = _COLOR_KEYS[key]
        if params.get(name):
            raise MapError("Invalid parameter")
        params[name] = parse_color(value)


def _build_grid(rows: list[str], width: int):
    grid = []
    player = None
    for y, line in enumerate(rows):
        cells = [VOID] * width
        for x, char in enumerate(line):
            if char == "1":
                cells[x] = WALL
            elif char == "0":
                cells[x] = EMPTY
            elif char in PLAYER_DIRECTIONS:
                cells[x] = EMPTY
                if player is not None:
                    raise MapError("Invalid map")
                player = (x, y, char)
        grid.append(tuple(cells))
    if player is None:
        raise MapError("Invalid map")
    return tuple(grid), player


def parse_cub(text: str) -> CubMap:
    """Parse the contents of a ``.cub`` file."""
    lines = text.split("\n") if text else []
    params: dict[str, str | int] = {}
    map_start = 0
    height = 0
    width = 0
    closed = False

    for index, raw in enumerate(lines):
        full = _is_full(params)
        line = raw.rstrip(" ") if full else raw.strip(" ")
        if not line:
            if full and height:
                closed = True
            continue
        words = [word for word in line.split(" ") if word]
        if words[0] in _TEXTURE_KEYS or words[0] in _COLOR_KEYS:
            _set_param(params, words)
        elif full and is_map_line(line):
            if closed:
                raise MapError("Invalid map")
            if not height:
                map_start = index
            height += 1
            width = max(width, len(line))
        else:
            raise MapError("Invalid parameter")

    if not _is_full(params) or not height or not width:
        raise MapError("Invalid map")

    rows = [line.rstrip(" ") for line in lines[map_start:map_start + height]]
    grid, (player_x, player_y, player_dir) = _build_grid(rows, width)
    validate_enclosed(grid, width, height)
    return CubMap(
        north=str(params["north"]),
        south=str(params["south"]),
        west=str(params["west"]),
        east=str(params["east"]),
        floor=int(params["floor"]),
        ceiling=int(params["ceiling"]),
        grid=grid,
        width=width,
        height=height,
        player_x=player_x,
        player_y=player_y,
        player_dir=player_dir,
    )


def load_cub(path: str | Path) -> CubMap:
    """Read and parse a ``.cub`` file."""
    if not str(path).endswith(".cub"):
        raise MapError("Invalid file extension")
    try:
        text = Path(path).read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise MapError("Failed to open file") from exc
    return parse_cub(text)