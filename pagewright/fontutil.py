"""Helpers for measuring text and building embedded font subsets."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence, Union

ENTRY_SELECTORS = (
    0, 0, 1, 1, 2, 2,
    2, 2, 3, 3, 3, 3,
    3, 3, 3, 3, 4, 4,
    4, 4, 4, 4, 4, 4,
    4, 4, 4, 4, 4, 4, 4,
)

_SUBSTITUTE_CHAR = "\u0020"


def default_glyph_not_found_substitute(char: str) -> str:
    """Replace a single character missing from the font with a space."""
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    return _SUBSTITUTE_CHAR


@dataclass
class TtfOption:
    """Options used when loading a TrueType font."""

    use_kerning: bool = False
    style: int = 0
    on_glyph_not_found: Optional[Callable[[str], None]] = None
    on_glyph_not_found_substitute: Optional[Callable[[str], str]] = None

    def __post_init__(self) -> None:
        if self.on_glyph_not_found_substitute is None:
            self.on_glyph_not_found_substitute = default_glyph_not_found_substitute


def string_width(
    text: str,
    font_size: float,
    widths: Union[Mapping[int, int], Sequence[int]],
) -> float:
    """Width of ``text`` from per-byte character widths in 1/1000 em."""
    total = sum(widths[byte] for byte in text.encode("utf-8"))
    return float(total) * (float(font_size) / 1000.0)


def create_embedded_font_subset_name(name: str) -> str:
    """Make a font name usable as a PDF subset font name."""
    return name.replace(" ", "+").replace("/", "+")


def _check_range(data: bytes, offset: int) -> None:
    if offset < 0 or offset + 2 > len(data):
        raise ValueError(f"offset {offset} out of range for {len(data)} bytes")


def read_short(data: bytes, offset: int) -> int:
    """Read a big-endian signed 16-bit integer."""
    _check_range(data, offset)
    return struct.unpack_from(">h", data, offset)[0]


def read_ushort(data: bytes, offset: int) -> int:
    """Read a big-endian unsigned 16-bit integer."""
    _check_range(data, offset)
    return struct.unpack_from(">H", data, offset)[0]


def checksum(data: bytes) -> int:
    """TrueType table checksum of data whose length is a multiple of four."""
    if len(data) % 4:
        raise ValueError("checksum data length must be a multiple of 4")
    lanes = [sum(data[lane::4]) for lane in range(4)]
    value = (lanes[0] << 24) + (lanes[1] << 16) + (lanes[2] << 8) + lanes[3]
    return value & 0xFFFFFFFF


def distinct_sorted(values: Iterable[int]) -> list[int]:
    """Drop repeated values from an already sorted sequence."""
    result = []
    previous = -1
    for value in values:
        if value == previous:
            continue
        result.append(value)
        previous = value
    return result