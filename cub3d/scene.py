"""Scene description files: header identifiers, colours and the map grid."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field

from .textutil import atoi, read_lines, split


class SceneError(Exception):
    """Raised when a scene file cannot be read or does not describe a valid scene."""


class Ident(enum.IntEnum):
    """Header identifiers: four wall textures, then floor and ceiling colours."""

    NO = 0
    SO = 1
    WE = 2
    EA = 3
    F = 4
    C = 5


_TEXTURE_KEYS = {"NO": Ident.NO, "SO": Ident.SO, "WE": Ident.WE, "EA": Ident.EA}
_COLOR_KEYS = {"F": Ident.F, "C": Ident.C}
_START_ANGLES = {"N": 90.0, "S": 270.0, "E": 0.0, "W": 180.0}
_MAP_CHARS = frozenset("10 NSEW\n")
_OPEN = " 1"


@dataclass(frozen=True)
class Color:
    """An RGB colour with components in 0..255."""

    r: int = 0
    g: int = 0
    b: int = 0

    def rgb(self) -> int:
        """Return the colour packed as 0xRRGGBB."""
        return self.r * 65536 + self.g * 256 + self.b


@dataclass
class Player:
    """Player position: grid cell, offset inside the 64-pixel cell, view angle in degrees."""

    pos_x: int = 0
    pos_y: int = 0
    pixel_x: int = 32
    pixel_y: int = 32
    angle: float = 0.0


@dataclass
class Scene:
    """A parsed scene.

    ``grid`` holds ``rows`` strings, each padded with spaces to ``cols``
    characters; ``cols`` counts the line terminator of the longest map line.
    """

    path: str
    textures: dict[Ident, str]
    floor: Color
    ceiling: Color
    grid: list[str]
    rows: int
    cols: int
    player: Player = field(default_factory=Player)

    @property
    def play_cols(self) -> int:
        """Column limit used when moving and casting rays."""
        return self.cols - 1


def parse_color(text: str) -> Color:
    """Parse an ``R,G,B`` colour specification."""
    parts = split(text, ",")
    if len(parts) != 3:
        raise SceneError(f"colour needs three components: {text.strip()!r}")
    r, g, b = (atoi(part) for part in parts)
    if not all(0 <= value <= 255 for value in (r, g, b)):
        raise SceneError(f"colour component out of range: {text.strip()!r}")
    return Color(r, g, b)


def _header_entry(
    line: str, textures: dict[Ident, str], colors: dict[Ident, Color]
) -> None:
    words = split(line, " ")
    if not words:
        raise SceneError("malformed header line")
    if words[0].startswith("\n"):
        return
    if len(words) < 2 or (len(words) > 2 and not words[2].startswith("\n")):
        raise SceneError(f"malformed header line: {line.strip()!r}")
    key, value = words[0], words[1]
    if key in _TEXTURE_KEYS:
        ident = _TEXTURE_KEYS[key]
        if ident in textures:
            raise SceneError(f"duplicate identifier {key}")
        textures[ident] = value.removesuffix("\n")
    elif key in _COLOR_KEYS:
        color = parse_color(value)
        ident = _COLOR_KEYS[key]
        if ident in colors:
            raise SceneError(f"duplicate identifier {key}")
        colors[ident] = color
    else:
        raise SceneError(f"unknown identifier {key!r}")


def _read_header(
    lines: list[str],
) -> tuple[dict[Ident, str], dict[Ident, Color], int]:
    textures: dict[Ident, str] = {}
    colors: dict[Ident, Color] = {}
    for index, line in enumerate(lines):
        _header_entry(line, textures, colors)
        if len(textures) == len(_TEXTURE_KEYS) and len(colors) == len(_COLOR_KEYS):
            return textures, colors, index + 1
    raise SceneError("scene is missing identifiers")


def _pad(line: str, cols: int) -> str:
    return line.removesuffix("\n")[:cols].ljust(cols)


def validate_grid(grid: list[str], rows: int, cols: int) -> None:
    """Check that the map is closed; raise SceneError if it is not."""
    if len(grid) != rows or any(len(row) != cols for row in grid):
        raise SceneError("map grid does not have the declared shape")
    for i, row in enumerate(grid):
        for j, char in enumerate(row):
            on_border = i == 0 or j == 0 or i == rows - 1 or j == cols - 1
            if on_border and char == "0":
                raise SceneError(f"open floor on map border at row {i}, column {j}")
            if char != " ":
                continue
            closed = (
                (i == 0 or grid[i - 1][j] in _OPEN)
                and (i == rows - 1 or grid[i + 1][j] in _OPEN)
                and (j == 0 or row[j - 1] in _OPEN)
                and (j == cols - 1 or row[j + 1] in _OPEN)
            )
            if not closed:
                raise SceneError(f"map is open around row {i}, column {j}")


def parse_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and validate a scene file."""
    try:
        lines = list(read_lines(path))
    except OSError as exc:
        raise SceneError(f"cannot read {os.fspath(path)}") from exc

    textures, colors, first = _read_header(lines)
    if first >= len(lines):
        raise SceneError("scene has no map")

    player: Player | None = None
    start: int | None = None
    cols = 0
    for number, line in enumerate(lines[first:], start=first + 1):
        if line.startswith("\n"):
            continue
        if start is None:
            start = number
            if any(char in _START_ANGLES for char in line):
                raise SceneError("player start on the first map row")
        row = number - start
        for x, char in enumerate(line):
            if char not in _MAP_CHARS:
                raise SceneError(f"invalid map character {char!r}")
            if char in _START_ANGLES:
                if player is not None:
                    raise SceneError("more than one player start")
                player = Player(pos_x=x, pos_y=row, angle=_START_ANGLES[char])
        cols = max(cols, len(line))

    if start is None:
        raise SceneError("scene has no map")

    rows = len(lines) + 1 - start
    grid = [_pad(line, cols) for line in lines[start - 1:]]
    validate_grid(grid, rows, cols)
    return Scene(
        path=os.fspath(path),
        textures=textures,
        floor=colors[Ident.F],
        ceiling=colors[Ident.C],
        grid=grid,
        rows=rows,
        cols=cols,
        player=player if player is not None else Player(),
    )