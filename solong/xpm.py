"""Reader for XPM images as used by the game's sprites."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from solong.colors import text_to_rgb

TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_LEADING_INT = re.compile(r"[ \t\n\r\v\f]*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image: rows of 0xRRGGBB values, transparency as 0xFF000000."""

    width: int
    height: int
    rows: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column x of row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.rows[y][x]

    def to_bytes(self, bytes_per_pixel: int, big_endian: bool) -> bytes:
        """Pack the pixels row by row, each in bytes_per_pixel bytes."""
        if bytes_per_pixel < 1:
            raise ValueError("bytes_per_pixel must be at least 1")
        mask = (1 << (8 * bytes_per_pixel)) - 1
        order = "big" if big_endian else "little"
        return b"".join(
            (value & mask).to_bytes(bytes_per_pixel, order)
            for row in self.rows
            for value in row
        )


def split_words(text: str) -> list[str]:
    """Split text into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _find_outside_quotes(text: str, token: str) -> int:
    in_quote = False
    for index, char in enumerate(text):
        if char == '"':
            in_quote = not in_quote
        if not in_quote and text.startswith(token, index):
            return index
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C comments outside quoted strings with spaces.

    Block comments are removed first, then line comments together with the
    newline that ends them.
    """
    while (begin := _find_outside_quotes(text, "/*")) != -1:
        close = text.find("*/", begin + 2)
        text = _blank(text, begin, len(text) if close == -1 else close + 2)
    while (begin := _find_outside_quotes(text, "//")) != -1:
        newline = text.find("\n", begin + 2)
        text = _blank(text, begin, len(text) if newline == -1 else newline + 1)
    return text


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in text."""
    for match in _QUOTED.finditer(text):
        yield match.group(1)


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"missing {what}") from None


def _color_value(words: list[str]) -> int:
    try:
        key_index = words.index("c")
    except ValueError:
        raise XpmError("colour definition has no 'c' key") from None
    if key_index + 1 >= len(words):
        raise XpmError("colour definition has no value after 'c'")
    value = words[key_index + 1]
    end = words[key_index + 2] if key_index + 2 < len(words) else None
    return text_to_rgb(value, end)


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode an XPM image from its strings: header, colours, then pixel rows."""
    remaining = iter(lines)
    words = split_words(_next_line(remaining, "header"))
    if len(words) < 4:
        raise XpmError("header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("header values must be positive")

    # Short keys go in a direct table where later definitions win;
    # longer keys are searched in definition order.
    later_wins = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(remaining, "colour definition")
        if len(line) < cpp:
            raise XpmError("colour definition shorter than its key")
        key = line[:cpp]
        value = _color_value(split_words(line[cpp:]))
        if later_wins or key not in palette:
            palette[key] = value

    rows = []
    for _ in range(height):
        line = _next_line(remaining, "pixel row")
        if len(line) < width * cpp:
            raise XpmError("pixel row shorter than the image width")
        row = []
        for start in range(0, width * cpp, cpp):
            value = palette.get(line[start:start + cpp], 0)
            row.append(TRANSPARENT if value == -1 else value)
        rows.append(tuple(row))
    return XpmImage(width=width, height=height, rows=tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    return parse_xpm(quoted_lines(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode an XPM file."""
    return parse_xpm_text(Path(path).read_bytes().decode("latin-1"))