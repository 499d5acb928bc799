"""Drawing one frame of the 3D view."""

from __future__ import annotations

import math
import sys
from array import array
from collections.abc import Mapping

from .image import Image
from .raycast import CELL_SIZE, HEIGHT, WIDTH, cast_ray, ray_angle
from .scene import Ident, Scene

_DEG = math.pi / 180
_INT_MAX = 2**31 - 1


def _native(data: bytes) -> array:
    values = array("I")
    values.frombytes(data)
    if sys.byteorder == "big":
        values.byteswap()
    return values


def _fill(pixels: array, x: int, start: int, stop: int, value: int) -> None:
    """Paint rows ``start`` to ``stop - 1`` of column ``x`` with one colour."""
    if stop > start:
        pixels[start * WIDTH + x:stop * WIDTH + x:WIDTH] = array("I", [value]) * (
            stop - start
        )


def _draw_horizon(pixels: array, x: int, ceiling: int, floor: int) -> None:
    half = HEIGHT // 2
    _fill(pixels, x, 1, half + 1, ceiling)
    _fill(pixels, x, half + 1, HEIGHT, floor)


def _draw_wall(
    pixels: array,
    x: int,
    perp: float,
    texture: Image,
    texels: array,
    tex_x: int,
    ceiling: int,
    floor: int,
) -> None:
    line_height = int(min(HEIGHT / perp, _INT_MAX))
    top = max((HEIGHT - line_height) // 2, 0)
    _fill(pixels, x, 1, top, ceiling)
    bottom = min((HEIGHT + line_height) // 2, HEIGHT)
    if bottom > top:
        tex_step = texture.height / line_height
        column = tex_x % texture.width
        tex_pos = 0.0
        values = array("I")
        for _ in range(top, bottom):
            tex_y = int(tex_pos) % texture.height
            values.append(texels[tex_y * texture.width + column])
            tex_pos += tex_step
        pixels[top * WIDTH + x:bottom * WIDTH + x:WIDTH] = values
    y = max(top, bottom)
    if y > HEIGHT // 2:
        _fill(pixels, x, y, HEIGHT, floor)


def render_frame(scene: Scene, textures: Mapping[Ident, Image]) -> Image:
    """Render the player's view of ``scene`` into a new WIDTH x HEIGHT image.

    ``textures`` maps each wall identifier to its texture image. Column 0
    and row 0 are left black, as the painting starts at 1.
    """
    widths = {ident: image.width for ident, image in textures.items()}
    texels = {ident: _native(image.to_bytes()) for ident, image in textures.items()}
    pixels = array("I", [0]) * (WIDTH * HEIGHT)
    ceiling = scene.ceiling.rgb()
    floor = scene.floor.rgb()
    player = scene.player

    # The ray for column WIDTH would land outside the frame, so it is not cast.
    for x in range(1, WIDTH):
        angle = ray_angle(player, x)
        hit = cast_ray(scene, angle, widths)
        if hit is None:
            _draw_horizon(pixels, x, ceiling, floor)
            continue
        perp = hit.distance / CELL_SIZE * math.cos((player.angle - angle) * _DEG)
        if not perp > 0:
            _draw_horizon(pixels, x, ceiling, floor)
            continue
        _draw_wall(
            pixels,
            x,
            perp,
            textures[hit.texture],
            texels[hit.texture],
            hit.tex_x,
            ceiling,
            floor,
        )

    if sys.byteorder == "big":
        pixels.byteswap()
    frame = Image(WIDTH, HEIGHT)
    frame._data[:] = pixels.tobytes()
    return frame