"""Reading XPM images into :class:`~berquest.image.Image` objects."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from berquest.colors import TRANSPARENT, lookup_color
from berquest.image import Image

TRANSPARENT_PIXEL = 0xFF000000
_MAX_NAME = 63
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_HEX_PREFIX = re.compile(r"[0-9A-Fa-f]+")
_QUOTED = re.compile(r'"([^"]*)"')


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed."""


def split_words(text: str) -> list[str]:
    """Split *text* on spaces and tabs, dropping empty words."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _find_unquoted(text: str, token: str) -> int:
    quoted = False
    for pos, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, pos):
            return pos
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C comments outside quoted strings with spaces.

    Block comments go first, then line comments together with their
    newline. The length of the text is kept.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 2)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 1)
    return text


def parse_color(name: str, suffix: Optional[str] = None) -> int:
    """Return the colour a specification word (and the word after it) names.

    ``#RRGGBB`` is read as hexadecimal. Otherwise the two words joined by a
    space are looked up by name; -1 means transparent and an unknown name
    gives 0.
    """
    if name.startswith("#"):
        digits = _HEX_PREFIX.match(name, 1)
        return int(digits.group(), 16) if digits else 0
    if suffix is not None:
        name = f"{name} {suffix}"[:_MAX_NAME]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _atoi(word: str) -> int:
    match = _INT_PREFIX.match(word)
    return int(match.group()) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before {what}") from None


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from XPM strings: header, colour table, pixel rows."""
    it = iter(lines)
    header = split_words(_next_line(it, "the header"))
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(header[:4])!r}")

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(it, "the colour table ends")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"no colour ('c') key in {line!r}") from None
        if index >= len(words):
            raise XpmError(f"missing colour after 'c' in {line!r}")
        suffix = words[index + 1] if index + 1 < len(words) else None
        palette[line[:cpp]] = parse_color(words[index], suffix)

    image = Image(width, height)
    for y in range(height):
        line = _next_line(it, "all pixel rows are read")
        for x in range(width):
            key = line[x * cpp:(x + 1) * cpp]
            if len(key) < cpp:
                raise XpmError(f"pixel row {y} is shorter than {width} pixels")
            color = palette.get(key, 0)
            image.set_pixel(x, y, TRANSPARENT_PIXEL if color == TRANSPARENT else color)
    return image


def parse_xpm_text(text: str) -> Image:
    """Parse the text of an XPM file."""
    cleaned = strip_comments(text)
    return parse_xpm(match.group(1) for match in _QUOTED.finditer(cleaned))


def load_xpm(path: Union[str, Path]) -> Image:
    """Read and parse an XPM file."""
    with open(path, encoding="latin-1") as handle:
        return parse_xpm_text(handle.read())