"""Reading XPM pixmaps into plain pixel grids.

Pixels are stored as 32-bit values in 0xAARRGGBB layout. Colours given as
``None`` in the pixmap become 0xFF000000, which marks a transparent pixel.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from typing import Iterable

from solong.colors import NONE_COLOR, lookup_color

TRANSPARENT = 0xFF000000

_QUOTED = re.compile(r'"([^"]*)"')
_WORD_SEPARATORS = re.compile(r"[ \t]+")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_STRTOL16 = re.compile(
    r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)"
)
_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)
_NAME_LIMIT = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded pixmap: row-major pixels in 0xAARRGGBB layout."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def to_rgba_bytes(self) -> bytes:
        """Return the pixels as RGBA bytes; transparent pixels get alpha 0."""
        out = bytearray()
        for pixel in self.pixels:
            alpha = 0 if (pixel >> 24) & 0xFF == 0xFF else 0xFF
            out += bytes(
                ((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF, alpha)
            )
        return bytes(out)


def _find_outside_quotes(text: str, token: str) -> int:
    quoted = False
    for index, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, index):
            return index
    return -1


def _blank_comments(text: str, opener: str, closer: str, keep_closer: bool) -> str:
    while (begin := _find_outside_quotes(text, opener)) != -1:
        end = text.find(closer, begin + len(opener))
        stop = len(text) if end == -1 else end + len(closer)
        if not keep_closer or end == -1:
            text = text[:begin] + " " * (stop - begin) + text[stop:]
        else:
            text = text[:begin] + " " * (stop - begin) + text[stop:]
    return text


def strip_comments(text: str) -> str:
    """Blank out C-style comments outside string literals, keeping the length."""
    text = _blank_comments(text, "/*", "*/", keep_closer=False)
    return _blank_comments(text, "//", "\n", keep_closer=False)


def split_words(line: str) -> list[str]:
    """Split a line into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(line) if word]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def _strtol16(text: str) -> int:
    match = _STRTOL16.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits, 16)
    if sign == "-":
        value = -value
    return max(_LONG_MIN, min(_LONG_MAX, value))


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    return int(match.group(1)) if match else 0


def text_to_rgb(name: str, suffix: str | None = None) -> int:
    """Turn a colour specification into an int.

    ``#rrggbb`` forms are read as hexadecimal; other names are looked up,
    joined with ``suffix`` by a space when one is given. Unknown names give 0
    and "none" gives -1.
    """
    if name.startswith("#"):
        return _to_int32(_strtol16(name[1:]))
    if suffix is not None:
        name = f"{name} {suffix}"[:_NAME_LIMIT]
    value = lookup_color(name)
    return 0 if value is None else value


def _parse_header(line: str | None) -> tuple[int, int, int, int]:
    if line is None:
        raise XpmError("missing XPM header")
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"malformed XPM header: {line!r}")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header values: {line!r}")
    return width, height, ncolors, cpp


def _parse_colors(lines, ncolors: int, cpp: int) -> dict[str, int]:
    table: dict[str, int] = {}
    for _ in range(ncolors):
        line = next(lines, None)
        if line is None:
            raise XpmError("missing XPM colour definition")
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"no colour key in definition: {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"no colour after key in definition: {line!r}")
        suffix = words[index + 2] if index + 2 < len(words) else None
        rgb = text_to_rgb(words[index + 1], suffix)
        key = line[:cpp]
        # Short keys overwrite earlier definitions; long keys keep the first.
        if cpp <= 2:
            table[key] = rgb
        else:
            table.setdefault(key, rgb)
    return table


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Build an image from XPM string values: header, colours, then rows."""
    source = iter(lines)
    width, height, ncolors, cpp = _parse_header(next(source, None))
    table = _parse_colors(source, ncolors, cpp)
    pixels: list[int] = []
    for _ in range(height):
        row = next(source, None)
        if row is None:
            raise XpmError("missing XPM pixel row")
        for x in range(width):
            color = table.get(row[x * cpp:(x + 1) * cpp], 0)
            if color == NONE_COLOR:
                color = TRANSPARENT
            pixels.append(color & 0xFFFFFFFF)
    return XpmImage(width, height, tuple(pixels))


def parse_xpm_text(text: str) -> XpmImage:
    """Parse the text of an XPM file."""
    return parse_xpm(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | PathLike[str]) -> XpmImage:
    """Read and parse an XPM file."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(data.decode("latin-1"))