# cub3d

A small raycasting engine that draws a textured first-person view of a
grid maze. A `.cub` scene file gives the maze, its four wall textures and
its floor and ceiling colours. The wall textures are XPM images.

## Installing

```
pip install .
```

The window is drawn with pygame. To run the tests, install the `test`
extra (`pip install .[test]`) and run `pytest`.

## Running

```
cub3d path/to/level.cub
```

The view opens in a 1280 x 896 window titled `Cub3D`.

The program prints `Error` and stops if:

- it gets no argument or more than one,
- the file name does not end in `.cub`,
- the scene file cannot be read or is not a valid scene,
- a texture file cannot be opened, does not end in `.xpm`, or is not a
  readable XPM image.

If the window cannot be created, it prints `Error creating window` on
standard error.

### Controls

| Key         | Action                  |
|-------------|-------------------------|
| W / S       | move forward / backward |
| A / D       | strafe left / right     |
| Left arrow  | turn left (5°)          |
| Right arrow | turn right (5°)         |
| Esc         | quit                    |

Closing the window also quits. The player moves 10 pixels per key press
inside 64-pixel grid cells, and cannot leave the map's grid.

## Scene files

A scene file starts with six identifier lines, in any order and with blank
lines allowed between them. Each identifier must appear exactly once:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE` and `EA` name the wall textures.
- `F` and `C` give the floor and ceiling colours as `R,G,B`, each from 0
  to 255.

Any other identifier, a missing value or extra words on a line make the
scene invalid.

The map follows, after any blank lines:

```
111111
100001
10N001
111111
```

| Character             | Meaning                             |
|-----------------------|-------------------------------------|
| `1`                   | wall                                |
| `0`                   | floor                               |
| space                 | outside the map                     |
| `N`, `S`, `E` or `W`  | the player's start, facing that way |

Rules checked when the scene is read:

- only the characters above may appear in the map;
- there may be at most one player start, and it may not be on the first
  map row;
- a `0` may not lie on the border of the map;
- a space may only touch spaces, walls or the border.

Shorter map lines are padded with spaces to the width of the longest one.

## Using it as a library

The pieces can be used on their own:

- `cub3d.scene.parse_scene(path)` reads and checks a scene file and returns
  a `Scene` (with its `textures`, `floor`, `ceiling`, `grid` and `player`),
  or raises `SceneError`. `parse_color(text)` reads an `R,G,B` colour and
  `validate_grid(grid, rows, cols)` checks that a map is closed.
- `cub3d.xpm.load_xpm(path)` and `cub3d.xpm.parse_xpm(text)` decode XPM
  images into an `Image`, raising `XpmError` on bad data. Colours may be
  `#` hexadecimal values or colour names (see
  `cub3d.colornames.lookup_color`); `None` becomes a transparent pixel
  stored as `0xFF000000`.
- `cub3d.image.Image` is a 32-bit pixel buffer with `put_pixel`,
  `get_pixel` and `to_bytes`.
- `cub3d.raycast.cast_ray(scene, angle, tex_widths)` finds the wall a ray
  hits and returns a `Hit` (distance, wall face and texture column), or
  `None` when the ray leaves the map. `ray_angle`, `turn` and `step` give
  the ray angle for a screen column, turn the view and move the player.
- `cub3d.render.render_frame(scene, textures)` draws a whole frame into a
  new `Image`.
- `cub3d.window.Window` opens a pygame window, shows images with `show`,
  and passes events to callbacks set with `hook`; `loop` runs until
  `close` is called.
- `cub3d.app.Game` holds a scene and its textures; `Game.on_key` reacts to
  key codes and `Game.frame` renders (and, with a window, shows) the view.
  `check_texture_files` and `load_textures` check and load a scene's
  textures.

## What it does not do

The view is walls only: there are no sprites, doors, minimap or mouse
look, and walls do not stop the player from walking through them. The XPM
reader handles plain XPM text with one-word or two-word colour names and
`#` hexadecimal colours; it does not read other image formats.