"""Paint styles for path drawing operators."""

from __future__ import annotations

import enum


class PaintStyle(str, enum.Enum):
    """Painting operator that ends a path."""

    DRAW = "S"
    FILL = "f"
    DRAW_FILL = "B"


def parse_style(style: str) -> PaintStyle:
    """Map "F", "FD"/"DF" or anything else to fill, fill-and-stroke or stroke."""
    if style == "F":
        return PaintStyle.FILL
    if style in ("FD", "DF"):
        return PaintStyle.DRAW_FILL
    return PaintStyle.DRAW