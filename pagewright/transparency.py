"""Transparency (alpha and blend mode) settings and their cache."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass
from typing import Optional

DEFAULT_ALPHA = 1


class BlendMode(str, enum.Enum):
    """PDF blend modes."""

    HUE = "/Hue"
    COLOR = "/Color"
    NORMAL = "/Normal"
    DARKEN = "/Darken"
    SCREEN = "/Screen"
    OVERLAY = "/Overlay"
    LIGHTEN = "/Lighten"
    MULTIPLY = "/Multiply"
    EXCLUSION = "/Exclusion"
    COLOR_BURN = "/ColorBurn"
    HARD_LIGHT = "/HardLight"
    SOFT_LIGHT = "/SoftLight"
    DIFFERENCE = "/Difference"
    SATURATION = "/Saturation"
    LUMINOSITY = "/Luminosity"
    COLOR_DODGE = "/ColorDodge"


def parse_blend_mode(name: str) -> BlendMode:
    """Return the blend mode for a name; an empty name means normal."""
    if name == "":
        return BlendMode.NORMAL
    try:
        return BlendMode(name)
    except ValueError:
        raise ValueError("blend mode is unknown") from None


@dataclass(frozen=True)
class Transparency:
    """An alpha value with a blend mode."""

    alpha: float
    blend_mode: BlendMode = BlendMode.NORMAL
    ext_gstate_index: int = 0

    @property
    def key(self) -> str:
        """Cache key identifying this alpha and blend mode."""
        return f"{self.alpha:.3f}_{self.blend_mode.value}"


def new_transparency(alpha: float, blend_mode: str) -> Transparency:
    """Validate the inputs and build a Transparency."""
    if alpha < 0.0 or alpha > 1.0:
        raise ValueError(f"alpha value is out of range (0.0 - 1.0): {alpha:.3f}")
    return Transparency(alpha=alpha, blend_mode=parse_blend_mode(blend_mode))


class TransparencyMap:
    """Thread-safe cache of transparencies keyed by alpha and blend mode."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._table: dict[str, Transparency] = {}

    def find(self, transparency: Transparency) -> Optional[Transparency]:
        """Return the stored transparency with the same key, if any."""
        with self._lock:
            return self._table.get(transparency.key)

    def save(self, transparency: Transparency) -> Transparency:
        """Store a transparency under its key and return it."""
        with self._lock:
            self._table[transparency.key] = transparency
        return transparency