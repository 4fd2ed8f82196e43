"""Standard security handler (RC4, 40-bit) for protected documents."""

from __future__ import annotations

import enum
import hashlib
import secrets
import struct
from dataclasses import dataclass

_PADDING = bytes(
    [
        0x28, 0xBF, 0x4E, 0x5E, 0x4E, 0x75, 0x8A, 0x41,
        0x64, 0x00, 0x4E, 0x56, 0xFF, 0xFA, 0x01, 0x08,
        0x2E, 0x2E, 0x00, 0xB6, 0xD0, 0x68, 0x3E, 0x80,
        0x2F, 0x0C, 0xA9, 0xFE, 0x64, 0x53, 0x69, 0x7A,
    ]
)

_RANDOM_CHARS = "abcdef0123456789"


class Permission(enum.IntFlag):
    """Permissions granted to a user of a protected document."""

    PRINT = 4
    MODIFY = 8
    COPY = 16
    ANNOT_FORMS = 32


def rc4(key: bytes, data: bytes) -> bytes:
    """Encrypt or decrypt ``data`` with the RC4 stream cipher."""
    if not 1 <= len(key) <= 256:
        raise ValueError(f"invalid RC4 key size {len(key)}")
    state = list(range(256))
    j = 0
    for i in range(256):
        j = (j + state[i] + key[i % len(key)]) & 0xFF
        state[i], state[j] = state[j], state[i]
    out = bytearray()
    i = j = 0
    for byte in data:
        i = (i + 1) & 0xFF
        j = (j + state[i]) & 0xFF
        state[i], state[j] = state[j], state[i]
        out.append(byte ^ state[(state[i] + state[j]) & 0xFF])
    return bytes(out)


@dataclass(frozen=True)
class EncryptionValues:
    """The O, U and P entries of the encryption dictionary."""

    o_value: bytes
    u_value: bytes
    p_value: int


def _pad(password: bytes) -> bytes:
    return (password + _PADDING)[:32]


def _as_bytes(value: bytes | str | None) -> bytes:
    if value is None:
        return b""
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


class PdfProtection:
    """Holds the keys that protect a document and encrypts object data."""

    def __init__(self) -> None:
        self.o_value = b""
        self.u_value = b""
        self.p_value = 0
        self.encryption_key = b""

    def set_protection(self, permissions: int, user_pass, owner_pass) -> None:
        """Derive the O, U and P values and the document encryption key."""
        protection = 192 | int(permissions)
        user = _as_bytes(user_pass)
        owner = _as_bytes(owner_pass)
        if not owner:
            owner = "".join(secrets.choice(_RANDOM_CHARS) for _ in range(24)).encode("ascii")
        user_padded = _pad(user)
        owner_padded = _pad(owner)

        owner_key = hashlib.md5(owner_padded).digest()[:5]
        self.o_value = rc4(owner_key, user_padded)

        digest = hashlib.md5()
        digest.update(user_padded)
        digest.update(self.o_value)
        digest.update(bytes([protection & 0xFF, 0xFF, 0xFF, 0xFF]))
        self.encryption_key = digest.digest()[:5]
        self.u_value = rc4(self.encryption_key, _PADDING)
        self.p_value = -((protection ^ 255) + 1)

    def object_key(self, obj_id: int) -> bytes:
        """Return the 10-byte RC4 key for the object with the given id."""
        low = struct.pack("<I", obj_id & 0xFFFFFFFF)[:3]
        return hashlib.md5(self.encryption_key + low + b"\x00\x00").digest()[:10]

    def encryption_values(self) -> EncryptionValues:
        """Return the values written into the encryption dictionary."""
        return EncryptionValues(self.o_value, self.u_value, self.p_value)

    def encrypt(self, obj_id: int, data: bytes) -> bytes:
        """Encrypt ``data`` belonging to the object with the given id."""
        return rc4(self.object_key(obj_id), data)