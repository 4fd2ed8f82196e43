"""Page, page tree, resource and imported objects, with link annotations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO, Mapping, Optional, Union

from pagewright.geometry import PageOption, Rect
from pagewright.protection import PdfProtection


@dataclass
class LinkOption:
    """A link area on a page, either to a URL or to a named anchor."""

    x: float
    y: float
    w: float
    h: float
    url: str = ""
    anchor: str = ""


@dataclass
class AnchorOption:
    """A named position: a zero-based page and a vertical coordinate."""

    page: int
    y: float


@dataclass
class PdfInfo:
    """Document information dictionary."""

    title: str = ""
    author: str = ""
    subject: str = ""
    creator: str = ""
    producer: str = ""
    creation_date: Optional[datetime] = None


def _escape_literal(data: bytes) -> bytes:
    return (
        data.replace(b"\\", b"\\\\")
        .replace(b"(", b"\\(")
        .replace(b")", b"\\)")
        .replace(b"\r", b"\\r")
    )


@dataclass
class Page:
    """A page object."""

    contents: str = ""
    resources_relate: str = ""
    page_option: PageOption = field(default_factory=PageOption)
    link_obj_ids: list[int] = field(default_factory=list)
    protection: Optional[PdfProtection] = None

    def write(self, out: BinaryIO, obj_id: int) -> None:
        """Write the page dictionary."""
        parts = [
            "<<\n",
            "  /Type /Page\n",
            "  /Parent 2 0 R\n",
            f"  /Resources {self.resources_relate}\n",
        ]
        if self.link_obj_ids:
            refs = "".join(f"{link_id} 0 R " for link_id in self.link_obj_ids)
            parts.append(f"  /Annots [{refs}]\n")
        parts.append(f"  /Contents {self.contents}\n")
        option = self.page_option
        if not option.is_empty():
            size = option.page_size
            parts.append(f" /MediaBox [ 0 0 {size.w:.2f} {size.h:.2f} ]\n")
        if option.is_trim_box_set():
            box = option.trim_box
            parts.append(
                f" /TrimBox [ {box.left:.2f} {box.top:.2f} {box.right:.2f} {box.bottom:.2f} ]\n"
            )
        parts.append(">>\n")
        out.write("".join(parts).encode("utf-8"))

    def write_external_link(self, out: BinaryIO, link: LinkOption, obj_id: int) -> None:
        """Write a URI link annotation, encrypting the URL when protected."""
        url = link.url.encode("utf-8")
        if self.protection is not None:
            url = self.protection.encrypt(obj_id, url)
        rect = f"{link.x:.2f} {link.y:.2f} {link.x + link.w:.2f} {link.y - link.h:.2f}"
        out.write(
            f"<</Type /Annot /Subtype /Link /Rect [{rect}] /Border [0 0 0] /A <</S /URI /URI (".encode(
                "ascii"
            )
        )
        out.write(_escape_literal(url))
        out.write(b")>>>>")

    def write_internal_link(
        self, out: BinaryIO, link: LinkOption, anchors: Mapping[str, AnchorOption]
    ) -> None:
        """Write a link annotation to a named anchor; unknown anchors write nothing."""
        anchor = anchors.get(link.anchor)
        if anchor is None:
            return
        rect = f"{link.x:.2f} {link.y:.2f} {link.x + link.w:.2f} {link.y - link.h:.2f}"
        out.write(
            (
                f"<</Type /Annot /Subtype /Link /Rect [{rect}] /Border [0 0 0] "
                f"/Dest [{anchor.page + 1} 0 R /XYZ 0 {anchor.y:.2f} null]>>"
            ).encode("ascii")
        )


@dataclass
class Pages:
    """The page tree root."""

    page_size: Rect
    page_count: int = 0
    kids: str = ""

    def write(self, out: BinaryIO, obj_id: int) -> None:
        """Write the page tree dictionary."""
        text = (
            "<<\n"
            "  /Type /Pages\n"
            f"  /MediaBox [ 0 0 {self.page_size.w:.2f} {self.page_size.h:.2f} ]\n"
            f"  /Count {self.page_count}\n"
            f"  /Kids [ {self.kids} ]\n"
            ">>\n"
        )
        out.write(text.encode("ascii"))


@dataclass
class RelateFont:
    """A font used by the document: its resource number and object index."""

    family: str
    count_of_font: int
    index_of_obj: int
    style: int = 0


@dataclass
class ProcSet:
    """The shared resource dictionary: fonts, images, templates and graphics states."""

    relates: list[RelateFont] = field(default_factory=list)
    relate_xobjs: list[int] = field(default_factory=list)
    ext_gstates: list[int] = field(default_factory=list)
    imported_template_ids: dict[str, int] = field(default_factory=dict)

    def contains_family(self, family: str) -> bool:
        """True if a font of this family is registered."""
        return any(font.family == family for font in self.relates)

    def contains_family_and_style(self, family: str, style: int) -> bool:
        """True if a font of this family and style is registered."""
        return any(font.family == family and font.style == style for font in self.relates)

    def write(self, out: BinaryIO, obj_id: int) -> None:
        """Write the resource dictionary."""
        parts = ["<<\n", "\t/ProcSet [/PDF /Text /ImageB /ImageC /ImageI]\n", "\t/Font <<\n"]
        parts.extend(
            f"\t\t/F{font.count_of_font + 1} {font.index_of_obj + 1} 0 R\n"
            for font in self.relates
        )
        parts.append("\t>>\n")
        parts.append("\t/XObject <<\n")
        parts.extend(f"\t\t/I{index + 1} {index + 1} 0 R\n" for index in self.relate_xobjs)
        parts.extend(
            f"\t\t{name} {ref} 0 R\n" for name, ref in self.imported_template_ids.items()
        )
        parts.append("\t>>\n")
        parts.append("\t/ExtGState <<\n")
        parts.extend(f"\t\t/GS{index + 1} {index + 1} 0 R\n" for index in self.ext_gstates)
        parts.append("\t>>\n")
        parts.append(">>\n")
        out.write("".join(parts).encode("utf-8"))


@dataclass
class ImportedObject:
    """An object copied verbatim from another document."""

    data: Union[bytes, str] = b""

    def write(self, out: BinaryIO, obj_id: int) -> None:
        """Write the stored data unchanged."""
        data = self.data.encode("utf-8") if isinstance(self.data, str) else self.data
        out.write(data)