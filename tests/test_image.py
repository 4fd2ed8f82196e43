import io
import struct
import zlib

import pytest
from PIL import Image

from pagewright.image import (
    ImageInfo,
    compress,
    image_rect_to_wh,
    parse_image,
    parse_image_file,
    write_image_props,
    write_mask_image_props,
)

SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _chunk(kind, payload):
    crc = zlib.crc32(kind + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", crc)


def _png(width, height, color_type, rows, bit_depth=8, interlace=0, extra=(), idat_parts=1):
    ihdr = struct.pack(">IIBBBBB", width, height, bit_depth, color_type, 0, 0, interlace)
    raw = b"".join(b"\x00" + row for row in rows)
    packed = zlib.compress(raw)
    cut = len(packed) // idat_parts
    pieces = [packed[i * cut : (i + 1) * cut] for i in range(idat_parts - 1)]
    pieces.append(packed[(idat_parts - 1) * cut :])
    body = b"".join(_chunk(kind, payload) for kind, payload in extra)
    idats = b"".join(_chunk(b"IDAT", piece) for piece in pieces)
    return SIGNATURE + _chunk(b"IHDR", ihdr) + body + idats + _chunk(b"IEND", b""), raw


def _pillow_bytes(mode, fmt, size=(4, 3)):
    buffer = io.BytesIO()
    Image.new(mode, size).save(buffer, format=fmt)
    return buffer.getvalue()


def test_rgb_png():
    data, raw = _png(2, 2, 2, [b"\x01\x02\x03\x04\x05\x06"] * 2)
    info = parse_image(data)
    assert info.format_name == "png"
    assert info.colspace == "DeviceRGB"
    assert info.bits_per_component == "8"
    assert info.filter == "FlateDecode"
    assert (info.width, info.height) == (2, 2)
    assert info.decode_parms == "/Predictor 15 /Colors  3 /BitsPerComponent 8 /Columns 2"
    assert zlib.decompress(info.data) == raw
    assert info.smask == b""


def test_split_idat_chunks_are_joined():
    data, raw = _png(3, 2, 0, [b"\x01\x02\x03", b"\x04\x05\x06"], idat_parts=3)
    info = parse_image(data)
    assert zlib.decompress(info.data) == raw
    assert info.colspace == "DeviceGray"


def test_gray_alpha_is_split():
    data, _ = _png(2, 1, 4, [b"\x10\x80\x20\x90"])
    info = parse_image(data)
    assert info.colspace == "DeviceGray"
    assert "/Colors  1" in info.decode_parms
    assert zlib.decompress(info.data) == b"\x00\x10\x20"
    assert zlib.decompress(info.smask) == b"\x00\x80\x90"


def test_rgba_alpha_is_split():
    data, _ = _png(2, 1, 6, [b"\x01\x02\x03\x04\x05\x06\x07\x08"])
    info = parse_image(data)
    assert info.colspace == "DeviceRGB"
    assert zlib.decompress(info.data) == b"\x00\x01\x02\x03\x05\x06\x07"
    assert zlib.decompress(info.smask) == b"\x00\x04\x08"


def test_gray_transparency():
    data, _ = _png(1, 1, 0, [b"\x07"], extra=[(b"tRNS", b"\x00\x07")])
    assert parse_image(data).trns == b"\x07"


def test_rgb_transparency():
    data, _ = _png(1, 1, 2, [b"\x01\x02\x03"], extra=[(b"tRNS", b"\x00\x01\x00\x02\x00\x03")])
    assert parse_image(data).trns == b"\x01\x02\x03"


def test_indexed_palette_and_transparency():
    palette = b"\xff\x00\x00\x00\xff\x00"
    data, raw = _png(
        2, 1, 3, [b"\x00\x01"], extra=[(b"PLTE", palette), (b"tRNS", b"\xff\x00")]
    )
    info = parse_image(data)
    assert info.colspace == "Indexed"
    assert info.pal == palette
    assert info.trns == b"\x01"
    assert zlib.decompress(info.data) == raw


def test_sixteen_bit_png_rejected():
    data, _ = _png(1, 1, 0, [b"\x00\x01"], bit_depth=16)
    with pytest.raises(ValueError, match="16-bit depth not supported"):
        parse_image(data)


def test_interlaced_png_rejected():
    data, _ = _png(1, 1, 0, [b"\x01"], interlace=1)
    with pytest.raises(ValueError, match="Interlacing not supported"):
        parse_image(data)


def test_unsupported_format():
    with pytest.raises(ValueError, match="Image format bmp is not supported"):
        parse_image(_pillow_bytes("RGB", "BMP"))


def test_garbage_is_rejected():
    with pytest.raises(ValueError):
        parse_image(b"definitely not an image")


@pytest.mark.parametrize(
    "mode, colspace",
    [("RGB", "DeviceRGB"), ("L", "DeviceGray"), ("CMYK", "DeviceCMYK")],
)
def test_jpeg(mode, colspace):
    data = _pillow_bytes(mode, "JPEG", size=(5, 7))
    info = parse_image(data)
    assert info.format_name == "jpeg"
    assert info.colspace == colspace
    assert info.filter == "DCTDecode"
    assert info.bits_per_component == "8"
    assert (info.width, info.height) == (5, 7)
    assert info.data == data


def test_gif_is_converted_to_png():
    img = Image.new("P", (6, 4))
    img.putpalette([255, 0, 0, 0, 0, 255] + [0] * 762)
    buffer = io.BytesIO()
    img.save(buffer, format="GIF")
    info = parse_image(buffer.getvalue())
    assert info.format_name == "png"
    assert info.colspace == "Indexed"
    assert (info.width, info.height) == (6, 4)
    assert info.pal


def test_parse_image_file(tmp_path):
    data, raw = _png(2, 1, 0, [b"\x05\x06"])
    path = tmp_path / "pic.png"
    path.write_bytes(data)
    info = parse_image_file(path)
    assert zlib.decompress(info.data) == raw
    assert (info.width, info.height) == (2, 1)


def _props(info, split_mask=False):
    out = io.BytesIO()
    write_image_props(out, info, split_mask)
    return out.getvalue()


def test_image_props_basic():
    info = ImageInfo(width=3, height=4, colspace="DeviceRGB", bits_per_component="8",
                     filter="FlateDecode", decode_parms="/Predictor 15")
    text = _props(info)
    assert text.startswith(b"<<\n\t/Type /XObject\n\t/Subtype /Image\n")
    assert b"\t/Width 3\n\t/Height 4\n" in text
    assert b"\t/ColorSpace /DeviceRGB\n" in text
    assert b"\t/Filter /FlateDecode\n" in text
    assert b"\t/DecodeParms <</Predictor 15>>\n" in text
    assert b"/SMask" not in text


def test_image_props_cmyk_decode():
    info = ImageInfo(width=1, height=1, colspace="DeviceCMYK", bits_per_component="8")
    text = _props(info)
    assert b"\t/Decode [1 0 1 0 1 0 1 0]\n" in text
    assert b"/Filter" not in text


def test_image_props_indexed():
    info = ImageInfo(width=1, height=1, colspace="Indexed", bits_per_component="8",
                     pal=b"\x00" * 6, device_rgb_obj_id=4)
    assert b"\t/ColorSpace [/Indexed /DeviceRGB 1 5 0 R]\n" in _props(info)


def test_image_props_mask_and_smask():
    info = ImageInfo(width=1, height=1, colspace="DeviceGray", bits_per_component="8",
                     trns=b"\x07", smask=b"x", smask_obj_id=9)
    text = _props(info)
    assert b"\t/Mask [\t\t7 \t\t7 \t]\n" in text
    assert b"\t/SMask 10 0 R\n" in text
    split = _props(info, split_mask=True)
    assert b"/Mask" not in split
    assert b"/SMask" not in split


def test_mask_image_props():
    info = ImageInfo(width=9, height=2, colspace="DeviceRGB", bits_per_component="8")
    out = io.BytesIO()
    write_mask_image_props(out, info)
    text = out.getvalue()
    assert b"\t/ColorSpace /DeviceGray\n" in text
    assert b"\t\t/Predictor 15\n\t\t/Colors 1\n" in text
    assert b"\t\t/Columns 9\n" in text


def test_compress_round_trip():
    payload = bytes(range(256)) * 3
    assert zlib.decompress(compress(payload)) == payload


def test_image_rect_to_wh():
    assert image_rect_to_wh(128, 128) == (72.0, 72.0)
    w, h = image_rect_to_wh(256, 128)
    assert w == 2 * h
    assert image_rect_to_wh(512, 512) == tuple(4 * v for v in image_rect_to_wh(128, 128))