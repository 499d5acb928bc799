"""Reading XPM pixmaps into images."""

from __future__ import annotations

import os
import re

from .colornames import lookup_color
from .image import Image
from .textutil import atoi

_TRANSPARENT = 0xFF000000
_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


def split_words(text: str) -> list[str]:
    """Split ``text`` on spaces and tabs, dropping empty words."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _find_unquoted(text: str, needle: str) -> int:
    quoted = False
    for index, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, index):
            return index
    return -1


def _blank(text: str, start: int, end: int) -> str:
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace ``/* */`` and ``//`` comments outside quotes with spaces.

    The length of the text is kept, so positions stay valid.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        close = text.find("*/", begin + 2)
        end = len(text) if close == -1 else close + 2
        text = _blank(text, begin, end)
    while (begin := _find_unquoted(text, "//")) != -1:
        newline = text.find("\n", begin + 2)
        end = len(text) if newline == -1 else newline
        text = _blank(text, begin, end)
    return text


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def parse_color_spec(name: str, end: str | None) -> int:
    """Return the 0xRRGGBB value of an XPM colour.

    ``#`` introduces a hexadecimal value; otherwise ``name`` (joined with
    ``end`` when given) is looked up by colour name. ``None`` gives -1 and
    unknown names give 0.
    """
    if name.startswith("#"):
        match = _HEX.match(name, 1)
        if match is None:
            return 0
        value = int(match.group(2), 16)
        return _to_int32(-value if match.group(1) == "-" else value)
    if end is not None:
        name = f"{name} {end}"[:63]
    return lookup_color(name)


def _quoted_strings(text: str) -> list[str]:
    strings = []
    pos = 0
    while (start := text.find('"', pos)) != -1:
        stop = text.find('"', start + 1)
        if stop == -1:
            break
        strings.append(text[start + 1:stop])
        pos = stop + 1
    return strings


def _header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"malformed XPM header: {line!r}")
    values = tuple(atoi(word) for word in words[:4])
    if any(value <= 0 for value in values):
        raise XpmError(f"invalid XPM header: {line!r}")
    width, height, ncolors, cpp = values
    return width, height, ncolors, cpp


def parse_xpm(text: str) -> Image:
    """Parse XPM source text into an image.

    Transparent pixels (colour ``None``) are stored as 0xFF000000.
    """
    lines = iter(_quoted_strings(strip_comments(text)))

    def next_line() -> str:
        try:
            return next(lines)
        except StopIteration:
            raise XpmError("XPM data ends too early") from None

    width, height, ncolors, cpp = _header(next_line())
    direct = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line()
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour line without a colour: {line!r}")
        end = words[index + 1] if index + 1 < len(words) else None
        color = parse_color_spec(words[index], end)
        key = line[:cpp]
        if direct:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    image = Image(width, height)
    for y in range(height):
        line = next_line()
        for x in range(width):
            color = palette.get(line[cpp * x:cpp * (x + 1)], 0)
            image.put_pixel(x, y, _TRANSPARENT if color == -1 else color)
    return image


def load_xpm(path: str | os.PathLike[str]) -> Image:
    """Read an XPM file into an image."""
    try:
        with open(path, "rb") as handle:
            raw = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)}") from exc
    return parse_xpm(raw.decode("latin-1"))