"""Parsing of JPEG, PNG and GIF images into image XObject data."""

from __future__ import annotations

import io
import struct
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

from PIL import Image

DEVICE_GRAY = "DeviceGray"

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_JPEG_COLOR_SPACES = {
    "RGB": "DeviceRGB",
    "YCbCr": "DeviceRGB",
    "L": "DeviceGray",
    "CMYK": "DeviceCMYK",
}


@dataclass
class ImageInfo:
    """Everything needed to write an image XObject."""

    width: int = 0
    height: int = 0
    format_name: str = ""
    colspace: str = ""
    bits_per_component: str = ""
    filter: str = ""
    decode_parms: str = ""
    trns: bytes = b""
    smask: bytes = b""
    smask_obj_id: int = 0
    pal: bytes = b""
    device_rgb_obj_id: int = 0
    data: bytes = b""

    @property
    def is_indexed(self) -> bool:
        return self.colspace == "Indexed"

    @property
    def has_smask(self) -> bool:
        return bool(self.smask)


def _write(out: BinaryIO, text: str) -> None:
    out.write(text.encode("latin-1"))


def _write_base_props(out: BinaryIO, info: ImageInfo, color_space: str) -> None:
    parts = [
        "<<\n",
        "\t/Type /XObject\n",
        "\t/Subtype /Image\n",
        f"\t/Width {info.width}\n",
        f"\t/Height {info.height}\n",
    ]
    if info.is_indexed:
        size = len(info.pal) // 3 - 1
        parts.append(
            f"\t/ColorSpace [/Indexed /DeviceRGB {size} {info.device_rgb_obj_id + 1} 0 R]\n"
        )
    else:
        parts.append(f"\t/ColorSpace /{color_space}\n")
        if info.colspace == "DeviceCMYK":
            parts.append("\t/Decode [1 0 1 0 1 0 1 0]\n")
    parts.append(f"\t/BitsPerComponent {info.bits_per_component}\n")
    if info.filter.strip():
        parts.append(f"\t/Filter /{info.filter}\n")
    _write(out, "".join(parts))


def write_mask_image_props(out: BinaryIO, info: ImageInfo) -> None:
    """Write the dictionary entries of the soft mask image of ``info``."""
    _write_base_props(out, info, DEVICE_GRAY)
    _write(
        out,
        "\t/DecodeParms <<\n"
        "\t\t/Predictor 15\n"
        "\t\t/Colors 1\n"
        "\t\t/BitsPerComponent 8\n"
        f"\t\t/Columns {info.width}\n"
        "\t>>\n",
    )


def write_image_props(out: BinaryIO, info: ImageInfo, split_mask: bool) -> None:
    """Write the dictionary entries of an image; the dictionary is left open."""
    _write_base_props(out, info, info.colspace)
    if info.decode_parms.strip():
        _write(out, f"\t/DecodeParms <<{info.decode_parms}>>\n")
    if split_mask:
        return
    if info.trns:
        entries = "".join(f"\t\t{value} \t\t{value} " for value in info.trns)
        _write(out, f"\t/Mask [{entries}\t]\n")
    if info.has_smask:
        _write(out, f"\t/SMask {info.smask_obj_id + 1} 0 R\n")


def compress(data: bytes) -> bytes:
    """Deflate ``data`` with zlib framing at the fastest level."""
    return zlib.compress(bytes(data), 1)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def read(self, size: int) -> bytes:
        if size <= 0:
            return b""
        chunk = self._data[self._pos : self._pos + size]
        if len(chunk) < size:
            raise ValueError("unexpected end of PNG data")
        self._pos += size
        return chunk

    def read_uint(self) -> int:
        return struct.unpack(">I", self.read(4))[0]

    def read_byte(self) -> int:
        return self.read(1)[0]

    def skip(self, size: int) -> None:
        self._pos += size


def _png_colspace(color_type: int) -> str:
    if color_type in (0, 4):
        return "DeviceGray"
    if color_type in (2, 6):
        return "DeviceRGB"
    if color_type == 3:
        return "Indexed"
    raise ValueError("Unknown color type")


def _transparency(color_type: int, chunk: bytes, current: bytes) -> bytes:
    if color_type == 0:
        return bytes([chunk[1]])
    if color_type == 2:
        return bytes([chunk[1], chunk[3], chunk[5]])
    position = chunk.find(b"\x00")
    if position >= 0:
        return bytes([position & 0xFF])
    return current


def _split_alpha(raw: bytes, width: int, height: int, color_type: int) -> tuple[bytes, bytes]:
    channels = 2 if color_type == 4 else 4
    stride = channels * width
    color = bytearray()
    alpha = bytearray()
    for row in range(height):
        start = (1 + stride) * row
        line = raw[start + 1 : start + 1 + stride]
        if start >= len(raw) or len(line) < stride:
            raise ValueError("PNG image data is truncated")
        color.append(raw[start])
        alpha.append(raw[start])
        if color_type == 4:
            color += line[0::2]
            alpha += line[1::2]
        else:
            rgb = bytearray(line)
            del rgb[3::4]
            color += rgb
            alpha += line[3::4]
    return bytes(color), bytes(alpha)


def _parse_png(data: bytes) -> ImageInfo:
    reader = _Reader(data)
    if reader.read(8) != _PNG_SIGNATURE:
        raise ValueError("Not a PNG file")
    reader.skip(4)
    if reader.read(4) != b"IHDR":
        raise ValueError("Incorrect PNG file")
    width = reader.read_uint()
    height = reader.read_uint()
    bpc = reader.read_byte()
    if bpc > 8:
        raise ValueError("16-bit depth not supported")
    color_type = reader.read_byte()
    colspace = _png_colspace(color_type)
    if reader.read_byte() != 0:
        raise ValueError("Unknown compression method")
    if reader.read_byte() != 0:
        raise ValueError("Unknown filter method")
    if reader.read_byte() != 0:
        raise ValueError("Interlacing not supported")
    reader.skip(4)

    pal = b""
    trns = b""
    idat = bytearray()
    while True:
        length = reader.read_uint()
        kind = reader.read(4)
        if kind == b"PLTE":
            pal = reader.read(length)
            reader.skip(4)
        elif kind == b"tRNS":
            trns = _transparency(color_type, reader.read(length), trns)
            reader.skip(4)
        elif kind == b"IDAT":
            idat += reader.read(length)
            reader.skip(4)
        elif kind == b"IEND":
            break
        else:
            reader.skip(length + 4)
        if length <= 0:
            break

    if colspace == "Indexed" and not pal.strip():
        raise ValueError("Missing palette")

    colors = 3 if colspace == "DeviceRGB" else 1
    info = ImageInfo(
        width=width,
        height=height,
        format_name="png",
        colspace=colspace,
        bits_per_component=str(bpc),
        filter="FlateDecode",
        decode_parms=(
            f"/Predictor 15 /Colors  {colors} /BitsPerComponent {bpc} /Columns {width}"
        ),
        trns=trns,
        pal=pal,
    )
    if color_type >= 4:
        try:
            raw = zlib.decompress(bytes(idat))
        except zlib.error as exc:
            raise ValueError(f"invalid PNG image data: {exc}") from exc
        color, alpha = _split_alpha(raw, width, height, color_type)
        info.smask = compress(alpha)
        info.data = compress(color)
    else:
        info.data = bytes(idat)
    return info


def _parse_jpeg(data: bytes, mode: str, size: tuple[int, int]) -> ImageInfo:
    colspace = _JPEG_COLOR_SPACES.get(mode)
    if colspace is None:
        raise ValueError("color model not support")
    width, height = size
    return ImageInfo(
        width=width,
        height=height,
        format_name="jpeg",
        colspace=colspace,
        bits_per_component="8",
        filter="DCTDecode",
        data=bytes(data),
    )


def _gif_to_png(data: bytes) -> bytes:
    buffer = io.BytesIO()
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        img.save(buffer, format="PNG")
    return buffer.getvalue()


def parse_image(data: bytes) -> ImageInfo:
    """Parse JPEG, PNG or GIF bytes; GIF images are converted to PNG first."""
    data = bytes(data)
    try:
        with Image.open(io.BytesIO(data)) as img:
            format_name = (img.format or "").lower()
            mode = img.mode
            size = img.size
    except OSError as exc:
        raise ValueError(f"cannot decode image: {exc}") from exc

    if format_name == "jpeg":
        return _parse_jpeg(data, mode, size)
    if format_name == "png":
        return _parse_png(data)
    if format_name == "gif":
        try:
            png = _gif_to_png(data)
        except OSError as exc:
            raise ValueError(f"cannot decode image: {exc}") from exc
        return parse_image(png)
    raise ValueError(f"Image format {format_name} is not supported")


def parse_image_file(path: Union[str, Path]) -> ImageInfo:
    """Read and parse an image file."""
    return parse_image(Path(path).read_bytes())


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def image_rect_to_wh(width: int, height: int) -> tuple[float, float]:
    """Convert a pixel size to a size in points at 128 pixels per 72 points."""
    k = 1
    w = -128
    h = -128
    if w < 0:
        w = _trunc_div(_trunc_div(-width * 72, w), k)
    if h < 0:
        h = _trunc_div(_trunc_div(-height * 72, h), k)
    if w == 0:
        w = _trunc_div(h * width, height)
    if h == 0:
        h = _trunc_div(w * height, width)
    return float(w), float(h)