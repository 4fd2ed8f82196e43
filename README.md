# pagewright

pagewright is a set of parts for a program that writes PDF files. Each part
either computes a value that goes into a PDF file or writes one PDF object to
a binary stream.

## Modules

- `pagewright.protection`: the standard security handler with 40-bit RC4.
  - `PdfProtection.set_protection(permissions, user_pass, owner_pass)`
    derives the O, U and P values and the document key. If `owner_pass` is
    empty, it uses a random owner password.
  - `object_key(obj_id)` returns the key for one object.
  - `encrypt(obj_id, data)` encrypts an object's data.
  - `encryption_values()` returns them as an `EncryptionValues`.
  - `Permission` is an `IntFlag` with `PRINT`, `MODIFY`, `COPY` and
    `ANNOT_FORMS`.
  - `rc4(key, data)` is the bare cipher.
- `pagewright.fontutil`: helpers for TrueType subsets.
  - `string_width(text, font_size, widths)` adds up per-byte widths of the
    UTF-8 text, given in 1/1000 em.
  - `checksum(data)` is the table checksum. The data length must be a
    multiple of 4.
  - `read_short` and `read_ushort` read big-endian 16-bit values.
  - `create_embedded_font_subset_name` replaces spaces and slashes with `+`.
  - `distinct_sorted` removes repeats from a sorted sequence.
  - `TtfOption` holds the font options. By default a missing glyph is
    replaced with a space (`default_glyph_not_found_substitute`).
- `pagewright.glyphmap`:
  - `CharacterToGlyphMap` is an insertion-ordered map from characters to
    glyph indices, with `set`, `get`, `index`, `keys` and `values`.
  - `UnicodeMap` builds the ToUnicode CMap (`build_cmap`) and writes it as a
    stream object. The stream is encrypted when a `PdfProtection` is set.
- `pagewright.transparency`:
  - `BlendMode` lists the PDF blend modes.
  - `parse_blend_mode(name)` turns a name into a `BlendMode`. An empty name
    gives `/Normal`.
  - `new_transparency(alpha, blend_mode)` checks that alpha is in 0..1.
  - `TransparencyMap` is a thread-safe cache keyed on alpha and blend mode.
- `pagewright.styles`: `parse_style` maps `"F"` to fill (`f`), `"FD"` and
  `"DF"` to fill and stroke (`B`), and anything else to stroke (`S`).
- `pagewright.image`:
  - `parse_image(data)` and `parse_image_file(path)` read JPEG, PNG and GIF
    and return an `ImageInfo`.
    - JPEG data is kept as is (DCTDecode).
    - PNG image data is kept as is (FlateDecode). For PNGs with an alpha
      channel, the colour and alpha are split into the image data and a soft
      mask.
    - GIF is converted to PNG first.
    - PNGs with 16-bit depth or interlacing raise `ValueError`.
  - `write_image_props` and `write_mask_image_props` write the XObject
    dictionary entries.
  - `compress` deflates data at the fastest level.
  - `image_rect_to_wh` converts a pixel size to points.
- `pagewright.smask`:
  - `SMask` writes a soft mask, which is either a reference to a
    transparency group or an image stream.
  - `SMaskOptions` identifies a mask built from a group.
  - `SMaskMap` is a thread-safe cache of masks.
- `pagewright.geometry`:
  - `Rect`, `Point` and `Margins`.
  - `PageOption`, which holds a per-page media size and trim box.
  - The standard page sizes in points, for example `PAGE_SIZE_A4` and
    `PAGE_SIZE_LETTER`.
- `pagewright.outlines`:
  - `Outlines` is the outline dictionary. It is given an `add_obj` callable
    that stores each new `Outline` item.
  - `OutlineNode` and `parse_outline_nodes` link a nested outline tree.
- `pagewright.pageobjs`:
  - `Page` writes the page dictionary and its link annotations
    (`write_external_link`, `write_internal_link`).
  - `Pages` writes the page tree root.
  - `ProcSet` writes the shared resource dictionary of fonts, images,
    templates and graphics states.
  - `ImportedObject` writes stored bytes unchanged.
  - `LinkOption`, `AnchorOption`, `PdfInfo` and `RelateFont` hold data.

## What it does not do

- It has no document builder. Nothing here numbers objects, writes the
  cross-reference table or trailer, or puts a complete file together.
- It has no content-stream drawing, no text layout and no tables.
- It does not parse TrueType files. The font helpers work on data that the
  caller has already read.
- It has no command-line program.

## Installing

```
pip install .
```

To install the test dependencies as well and run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from pagewright.protection import Permission, PdfProtection

protection = PdfProtection()
protection.set_protection(Permission.PRINT | Permission.COPY, "password", "secret")
values = protection.encryption_values()
cipher = protection.encrypt(4, b"stream data")
```

```python
import io

from pagewright.image import parse_image_file, write_image_props

info = parse_image_file("picture.png")
print(info.width, info.height, info.colspace)

out = io.BytesIO()
write_image_props(out, info, False)
```