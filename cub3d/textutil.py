"""Small text helpers used by the scene parser and the command line."""

from __future__ import annotations

import os
from collections.abc import Iterator

_SPACE = " \r\t\n\v\f"


def atoi(text: str) -> int:
    """Read a leading decimal integer, ignoring leading whitespace.

    Parsing stops at the first character that is not a digit. Input that
    does not start with a number gives 0.
    """
    rest = text.lstrip(_SPACE)
    sign = 1
    if rest[:1] == "-":
        sign = -1
        rest = rest[1:]
    elif rest[:1] == "+":
        rest = rest[1:]
    digits = []
    for char in rest:
        if not "0" <= char <= "9":
            break
        digits.append(char)
    if not digits:
        return 0
    return sign * int("".join(digits))


def split(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping the empty pieces."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [piece for piece in text.split(sep) if piece]


def has_suffix(name: str, suffix: str) -> bool:
    """Tell whether ``name`` ends with ``suffix``."""
    return len(name) >= len(suffix) and name.endswith(suffix)


def read_lines(path: str | os.PathLike[str]) -> Iterator[str]:
    """Yield the lines of a file, each keeping its trailing newline.

    Only ``\\n`` ends a line; a final line without one is yielded as is.
    """
    with open(path, "rb") as handle:
        for raw in handle:
            yield raw.decode("utf-8", errors="surrogateescape")