"""Ray casting against the map grid, view turning and player movement."""

from __future__ import annotations

import enum
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from .scene import Ident, Player, Scene

WIDTH = 1280
HEIGHT = 896
CELL_SIZE = 64
STEP_LENGTH = 10
FIELD_OF_VIEW = 90
FAR = 100_000_000.0

KEY_ESCAPE = 65307
KEY_LEFT = 65361
KEY_RIGHT = 65363
KEY_W = 119
KEY_S = 115
KEY_A = 97
KEY_D = 100

_DEG = math.pi / 180
_INT_MIN = -(2**31)


class Cell(enum.IntEnum):
    """What a grid position holds, as seen by a ray."""

    OUTSIDE = -2
    OPEN = -1
    WALL = 1


@dataclass(frozen=True)
class Hit:
    """A wall hit: distance in pixels, the wall texture and the texture column."""

    distance: float
    texture: Ident
    tex_x: int


def probe(scene: Scene, x: int, y: int) -> Cell:
    """Classify grid position ``(x, y)``."""
    if x < 0 or y < 0 or y >= scene.rows or x >= scene.play_cols:
        return Cell.OUTSIDE
    if scene.grid[y][x] == "1":
        return Cell.WALL
    return Cell.OPEN


def ray_angle(player: Player, x: int) -> float:
    """Angle in degrees of the ray through screen column ``x``."""
    result = player.angle + FIELD_OF_VIEW / 2 - x * (FIELD_OF_VIEW / WIDTH)
    if result >= 360:
        return result - 360
    if result < 0:
        return result + 360
    return result


def _trunc(value: float) -> int:
    """Truncate toward zero; values an int cannot hold become the minimum int."""
    if math.isfinite(value) and _INT_MIN <= value < -_INT_MIN:
        return int(value)
    return _INT_MIN


def _div(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _march(
    scene: Scene,
    distance_at: Callable[[int], float],
    cell_at: Callable[[int, float], tuple[int, int]],
) -> float:
    """Step from the player's cell until a wall or the map edge is reached."""
    x, y = scene.player.pos_x, scene.player.pos_y
    distance = 0.0
    n = 0
    while probe(scene, x, y) is Cell.OPEN:
        distance = distance_at(n)
        x, y = cell_at(n, distance)
        if probe(scene, x, y) is Cell.OUTSIDE:
            distance = FAR
        n += 1
    return distance


def _texture_column(coord: float, width: int) -> int:
    wrapped = math.fmod(coord, CELL_SIZE) if math.isfinite(coord) else math.nan
    return _trunc(wrapped * width / CELL_SIZE)


def cast_ray(
    scene: Scene, angle: float, tex_widths: Mapping[Ident, int]
) -> Hit | None:
    """Cast a ray at ``angle`` degrees from the player.

    Returns the nearest wall hit, or None when the ray leaves the map
    without meeting a wall. ``tex_widths`` gives each wall texture's width.
    """
    if not 0 <= angle < 360:
        raise ValueError(f"ray angle out of range: {angle!r}")
    p = scene.player
    quadrant = int(angle // 90)
    base = (angle - 90 * quadrant) * _DEG
    s, c = math.sin(base), math.cos(base)

    if quadrant == 0:
        x_dist = _march(
            scene,
            lambda n: _div(p.pixel_y + 64 * n, s),
            lambda n, d: (_trunc(p.pos_x + (d * c + p.pixel_x) / 64), p.pos_y - n - 1),
        )
        y_dist = _march(
            scene,
            lambda n: _div(64 - p.pixel_x + 64 * n, c),
            lambda n, d: (p.pos_x + n + 1, _trunc(p.pos_y - (d * s - p.pixel_y) / 64)),
        )
        side, front = Ident.EA, Ident.NO
    elif quadrant == 1:
        x_dist = _march(
            scene,
            lambda n: _div(p.pixel_y + 64 * n, c),
            lambda n, d: (_trunc(p.pos_x - (d * s - p.pixel_x) / 64), p.pos_y - n - 1),
        )
        y_dist = _march(
            scene,
            lambda n: _div(p.pixel_x + 64 * n, s),
            lambda n, d: (p.pos_x - n - 1, _trunc(p.pos_y - (d * c - p.pixel_y) / 64)),
        )
        side, front = Ident.WE, Ident.NO
    elif quadrant == 2:
        x_dist = _march(
            scene,
            lambda n: _div(64 - p.pixel_y + 64 * n, s),
            lambda n, d: (_trunc(p.pos_x - (d * c - p.pixel_x) / 64), p.pos_y + n + 1),
        )
        y_dist = _march(
            scene,
            lambda n: _div(p.pixel_x + 64 * n, c),
            lambda n, d: (p.pos_x - n - 1, _trunc(p.pos_y + (d * s + p.pixel_y) / 64)),
        )
        side, front = Ident.WE, Ident.SO
    else:
        x_dist = _march(
            scene,
            lambda n: _div(64 - p.pixel_y + 64 * n, c),
            lambda n, d: (_trunc(p.pos_x + (d * s + p.pixel_x) / 64), p.pos_y + n + 1),
        )
        y_dist = _march(
            scene,
            lambda n: _div(64 - p.pixel_x + 64 * n, s),
            lambda n, d: (p.pos_x + n + 1, _trunc(p.pos_y + (d * c + p.pixel_y) / 64)),
        )
        side, front = Ident.EA, Ident.SO

    if x_dist > y_dist:
        coord = -math.sin(angle * _DEG) * y_dist + p.pixel_y + p.pos_y * CELL_SIZE
        return Hit(y_dist, side, _texture_column(coord, tex_widths[side]))
    if x_dist == FAR:
        return None
    if front is Ident.NO:
        offset = math.sin((90 - angle) * _DEG) * x_dist
    else:
        offset = math.sin((angle - 270) * _DEG) * x_dist
    coord = offset + p.pixel_x + p.pos_x * CELL_SIZE
    return Hit(x_dist, front, _texture_column(coord, tex_widths[front]))


def turn(player: Player, keycode: int) -> None:
    """Turn the view 5 degrees left or right for the arrow keys."""
    if keycode == KEY_LEFT:
        player.angle += 5
    elif keycode == KEY_RIGHT:
        player.angle -= 5
    else:
        raise ValueError(f"not a turning key: {keycode}")
    if player.angle > 360:
        player.angle -= 360
    if player.angle < 0:
        player.angle += 360


def _step_vector(angle: float, keycode: int) -> tuple[float, float]:
    rad = angle * _DEG
    if keycode == KEY_W:
        return math.cos(rad) * STEP_LENGTH, math.sin(rad) * STEP_LENGTH
    if keycode == KEY_S:
        return -math.cos(rad) * STEP_LENGTH, -math.sin(rad) * STEP_LENGTH
    if keycode == KEY_A:
        return -math.sin(rad) * STEP_LENGTH, math.cos(rad) * STEP_LENGTH
    if keycode == KEY_D:
        return math.sin(rad) * STEP_LENGTH, -math.cos(rad) * STEP_LENGTH
    raise ValueError(f"not a movement key: {keycode}")


def step(scene: Scene, keycode: int) -> None:
    """Move the player one step for W, S, A or D, crossing cells at the edges."""
    p = scene.player
    dx, dy = _step_vector(p.angle, keycode)
    p.pixel_x = _trunc(p.pixel_x + dx)
    p.pixel_y = _trunc(p.pixel_y - dy)

    if p.pixel_x > CELL_SIZE:
        if p.pos_x + 1 < scene.play_cols:
            p.pixel_x = _trunc(p.pixel_x + dx - CELL_SIZE)
            p.pos_x += 1
        else:
            p.pixel_x = CELL_SIZE - 1
    elif p.pixel_x < 0:
        if p.pos_x - 1 >= 0:
            p.pixel_x = _trunc(p.pixel_x + dx + CELL_SIZE)
            p.pos_x -= 1
        else:
            p.pixel_x = 1

    if p.pixel_y < 0:
        if p.pos_y - 1 >= 0:
            p.pixel_y = _trunc(p.pixel_y - dy + CELL_SIZE)
            p.pos_y -= 1
        else:
            p.pixel_y = 1
    elif p.pixel_y > CELL_SIZE:
        if p.pos_y + 1 < scene.rows:
            p.pixel_y = _trunc(p.pixel_y - dy - CELL_SIZE)
            p.pos_y += 1
        else:
            p.pixel_y = CELL_SIZE - 1