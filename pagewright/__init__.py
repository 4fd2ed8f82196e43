"""Parts for writing PDF files: page objects, images, soft masks, font helpers, outlines and RC4 protection."""

__version__ = "0.1.0"