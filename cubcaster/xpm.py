"""Reader for XPM images: colour table, comments and pixel rows."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from cubcaster.colors import lookup_color

TRANSPARENT = 0xFF000000
"""Pixel value stored for the colour ``None``."""

_NAME_BUFFER = 63
_WORD_SPLIT = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_HEX = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image; each pixel is a 0xRRGGBB value or TRANSPARENT."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y][x]


def _words(text: str) -> list[str]:
    return [word for word in _WORD_SPLIT.split(text) if word]


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _parse_hex(text: str) -> int:
    match = _HEX.match(text)
    if not match:
        return 0
    value = int(match.group(2), 16)
    return -value if match.group(1) == "-" else value


def text_to_rgb(name: str, extra: str | None = None) -> int:
    """Resolve a colour specification to an integer.

    ``#RRGGBB`` is read as hexadecimal. Otherwise ``name`` (joined with
    ``extra`` by a space when given) is looked up in the colour table;
    unknown names give 0 and ``none`` gives -1.
    """
    if name.startswith("#"):
        return _parse_hex(name[1:])
    if extra:
        name = f"{name} {extra}"[:_NAME_BUFFER]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _find_outside_quotes(text: str, token: str) -> int:
    inside = False
    for index, char in enumerate(text):
        if char == '"':
            inside = not inside
        if not inside and text.startswith(token, index):
            return index
    return -1


def strip_comments(text: str) -> str:
    """Blank out C-style comments that lie outside quoted strings.

    Comments are replaced by spaces so that the text keeps its length.
    """
    for opening, closing in (("/*", "*/"), ("//", "\n")):
        while (start := _find_outside_quotes(text, opening)) != -1:
            end = text.find(closing, start + len(opening))
            stop = len(text) if end == -1 else end + len(closing)
            text = text[:start] + " " * (stop - start) + text[stop:]
    return text


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"missing {what}") from None


def _read_header(line: str) -> tuple[int, int, int, int]:
    words = _words(line)
    if len(words) < 4:
        raise XpmError(f"incomplete header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if any(value == 0 for value in values):
        raise XpmError(f"invalid header: {line!r}")
    width, height, ncolors, cpp = values
    if width < 0 or height < 0 or ncolors < 0 or cpp < 0:
        raise XpmError(f"invalid header: {line!r}")
    return width, height, ncolors, cpp


def _read_color(line: str, cpp: int) -> tuple[str, int]:
    words = _words(line[cpp:])
    try:
        position = words.index("c") + 1
    except ValueError:
        raise XpmError(f"colour line without 'c' key: {line!r}") from None
    if position >= len(words):
        raise XpmError(f"colour line without value: {line!r}")
    extra = words[position + 1] if position + 1 < len(words) else None
    return line[:cpp], text_to_rgb(words[position], extra)


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode an XPM image from its strings: header, colours, then rows."""
    source = iter(lines)
    width, height, ncolors, cpp = _read_header(_next_line(source, "header"))

    # Short keys overwrite earlier definitions; longer keys keep the first one.
    direct = cpp <= 2
    table: dict[str, int] = {}
    for _ in range(ncolors):
        key, value = _read_color(_next_line(source, "colour line"), cpp)
        if direct:
            table[key] = value
        else:
            table.setdefault(key, value)

    rows = []
    for _ in range(height):
        line = _next_line(source, "pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        row = []
        for start in range(0, width * cpp, cpp):
            colour = table.get(line[start:start + cpp], 0)
            row.append(TRANSPARENT if colour == -1 else colour)
        rows.append(tuple(row))
    return XpmImage(width, height, tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    return parse_xpm_lines(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)