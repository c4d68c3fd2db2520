# cubcaster

A small first-person maze explorer. It reads a `.cub` map description,
loads four XPM wall textures and draws the maze with a textured ray
caster in a pygame window, with a minimap in the top-left corner.

## Installing

    pip install .

## Running

    cubcaster path/to/level.cub

The command takes exactly one argument, and its name must end in `.cub`.
Any problem with the map file is reported on standard error as `Error`
followed by a short reason (for example `Invalid map`,
`Invalid parameter`, `Invalid color`, `Failed to open file`). A texture
that cannot be read or decoded is reported as `Failed to open xpm`. In
every such case the command exits with status 1.

The window is 1920 x 1080 pixels and is titled `Hell!`.

## Controls

| Key            | Action                                    |
|----------------|-------------------------------------------|
| W / S          | move forward / backward                   |
| A / D          | strafe left / right                       |
| Left / Right   | turn left / right                         |
| Q              | toggle mouse steering (hides the pointer) |
| Escape         | quit                                      |

Closing the window also quits. Movement stops at walls.

With mouse steering on, the view turns while the pointer is more than
`MOUSE_TURN_MARGIN` (1000) pixels to the left or right of the window's
centre. In the default 1920-pixel-wide window the pointer cannot get
that far, so in practice the setting only hides the pointer.

## The `.cub` format

A file starts with six settings, in any order, one per line:

    NO ./textures/north.xpm
    SO ./textures/south.xpm
    WE ./textures/west.xpm
    EA ./textures/east.xpm
    F 220,100,0
    C 225,30,0

`NO`, `SO`, `WE` and `EA` name the XPM textures for the walls facing
each way; `F` and `C` give floor and ceiling colours as three
comma-separated values from 0 to 255. Each setting may appear only once
and takes exactly one value. A colour of `0,0,0` counts as not set, so a
file using it is rejected. Blank lines are allowed between settings.

After the settings comes the map, built from `1` (wall), `0` (floor),
spaces (outside the map) and exactly one of `N`, `S`, `E`, `W` marking
where the player starts and which way they face:

    111111
    100101
    101001
    1100N1
    111111

Every floor cell must be closed in by walls; a map that lets the player
reach its edge or a blank cell is rejected. The map must be the last
thing in the file and may not contain blank lines.

## Textures

Textures are read as XPM text: comments are ignored, colours may be
given as `#RRGGBB` or as X11 colour names (case is ignored, `None` means
transparent), and unknown names read as black. Each texture is scaled
to 128 x 128 pixels by nearest sampling. Walls hit on their north or
south faces are drawn at half brightness.

## Using it as a library

The pieces work on their own as well:

- `cubcaster.mapfile.load_cub(path)` / `parse_cub(text)` return a
  `CubMap` with the grid, texture paths, colours and start position, and
  raise `MapError` on a bad file. `validate_enclosed`, `parse_color` and
  `is_map_line` are available separately.
- `cubcaster.xpm.load_xpm(path)` / `parse_xpm_text(text)` /
  `parse_xpm_lines(lines)` return an `XpmImage` and raise `XpmError` if
  the data cannot be read or is malformed.
- `cubcaster.colors.lookup_color(name)` gives the value of a named
  colour.
- `cubcaster.player.Camera.from_map(cub_map)` places the camera; its
  `move_*` and `rotate_*` methods move it.
- `cubcaster.raycast.cast_ray` traces one screen column and returns a
  `RayHit`; `resample_texture`, `texture_column` and `wall_direction`
  handle texturing.
- `cubcaster.render.render_frame` draws a complete frame into a
  `FrameBuffer`, a numpy array of 0xAARRGGBB pixels.
- `cubcaster.game.Game` holds a running scene: feed it keys with
  `key_press` / `key_release`, pointer positions with `mouse_move`, and
  call `update()` to move the camera and render the next frame.

## What it does not do

There are no sprites, doors, enemies, sound or saved state; the
program only walks a static textured maze. Only XPM textures are
supported.

## Running the tests

    pip install .[test]
    pytest