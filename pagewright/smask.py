"""Soft mask objects and their cache."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field
from typing import BinaryIO, Optional

from pagewright.image import ImageInfo, write_image_props
from pagewright.protection import PdfProtection


class SMaskSubtype(str, enum.Enum):
    """Subtype of a soft mask."""

    ALPHA = "/Alpha"
    LUMINOSITY = "/Luminosity"


@dataclass(frozen=True)
class SMaskOptions:
    """Identifies a soft mask built from a transparency group."""

    transparency_xobject_group_index: int
    subtype: SMaskSubtype = SMaskSubtype.ALPHA

    @property
    def key(self) -> str:
        """Cache key for this mask."""
        subtype = self.subtype.value if isinstance(self.subtype, SMaskSubtype) else self.subtype
        return f"S_{subtype};G_{self.transparency_xobject_group_index}_0_R"


@dataclass
class SMask:
    """A soft mask, either a group reference or an image stream."""

    info: ImageInfo = field(default_factory=ImageInfo)
    data: bytes = b""
    protection: Optional[PdfProtection] = None
    index: int = 0
    transparency_xobject_group_index: int = 0
    s: str = ""

    def write(self, out: BinaryIO, obj_id: int) -> None:
        """Write the mask object."""
        if self.transparency_xobject_group_index != 0:
            content = (
                "<<\n"
                "\t/Type /Mask\n"
                f"\t/S {self.s}\n"
                f"\t/G {self.transparency_xobject_group_index + 1} 0 R\n"
                ">>\n"
            )
            out.write(content.encode("latin-1"))
            return

        write_image_props(out, self.info, False)
        out.write(f"/Length {len(self.data)}\n>>\n".encode("ascii"))
        out.write(b"stream\n")
        if self.protection is not None:
            out.write(self.protection.encrypt(obj_id, self.data))
            out.write(b"\n")
        else:
            out.write(self.data)
        out.write(b"\nendstream\n")


class SMaskMap:
    """Thread-safe cache of soft masks keyed by their options."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._table: dict[str, SMask] = {}

    def find(self, options: SMaskOptions) -> Optional[SMask]:
        """Return the mask stored for these options, if any."""
        with self._lock:
            return self._table.get(options.key)

    def save(self, key: str, smask: SMask) -> SMask:
        """Store a mask under a key and return it."""
        with self._lock:
            self._table[key] = smask
        return smask