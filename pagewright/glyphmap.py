"""Character to glyph mapping and the ToUnicode CMap built from it."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, Optional

from pagewright.protection import PdfProtection

_CMAP_PREFIX = (
    "/CIDInit /ProcSet findresource begin\n"
    "12 dict begin\n"
    "begincmap\n"
    "/CIDSystemInfo << /Registry (Adobe)/Ordering (UCS)/Supplement 0>> def\n"
    "/CMapName /Adobe-Identity-UCS def /CMapType 2 def\n"
)
_CMAP_SUFFIX = "endcmap CMapName currentdict /CMap defineresource pop end end"


class CharacterToGlyphMap:
    """Insertion-ordered map from characters to glyph indices."""

    def __init__(self) -> None:
        self._positions: dict[str, int] = {}
        self._keys: list[str] = []
        self._values: list[int] = []

    def set(self, char: str, glyph: int) -> None:
        """Record the glyph for a character, appending to the order."""
        self._positions[char] = len(self._keys)
        self._keys.append(char)
        self._values.append(glyph)

    def index(self, char: str) -> int:
        """Position of a character in insertion order; KeyError if absent."""
        return self._positions[char]

    def get(self, char: str) -> Optional[int]:
        """Glyph index for a character, or None if it was never set."""
        position = self._positions.get(char)
        return None if position is None else self._values[position]

    def keys(self) -> list[str]:
        return list(self._keys)

    def values(self) -> list[int]:
        return list(self._values)

    def __contains__(self, char: object) -> bool:
        return char in self._positions

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)


@dataclass
class UnicodeMap:
    """ToUnicode CMap stream object for a subset font."""

    glyphs: CharacterToGlyphMap = field(default_factory=CharacterToGlyphMap)
    protection: Optional[PdfProtection] = None

    def build_cmap(self) -> bytes:
        """Return the CMap program mapping glyph indices to characters."""
        pairs = [(self.glyphs.get(char), char) for char in self.glyphs.keys()]
        first_char: dict[int, str] = {}
        for glyph, char in pairs:
            first_char.setdefault(glyph, char)
        indices = [glyph for glyph, _ in pairs]
        low = min([65536, *indices])
        high = max([-1, *indices])

        buf = io.StringIO()
        buf.write(_CMAP_PREFIX)
        buf.write("1 begincodespacerange\n")
        buf.write(f"<{low:04X}><{high:04X}>\n")
        buf.write("endcodespacerange\n")
        buf.write(f"{len(pairs)} beginbfrange\n")
        for glyph in indices:
            code = ord(first_char[glyph])
            buf.write(f"<{glyph:04X}><{glyph:04X}><{code:04X}>\n")
        buf.write("endbfrange\n")
        buf.write(_CMAP_SUFFIX)
        buf.write("\n")
        return buf.getvalue().encode("utf-8")

    def write(self, out: BinaryIO, obj_id: int) -> None:
        """Write the object, encrypting the stream when protected."""
        stream = self.build_cmap()
        out.write(b"<<\n")
        out.write(f"/Length {len(stream)}\n".encode("ascii"))
        out.write(b">>\n")
        out.write(b"stream\n")
        if self.protection is not None:
            stream = self.protection.encrypt(obj_id, stream)
        out.write(stream)
        out.write(b"endstream\n")