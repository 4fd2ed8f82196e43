import pytest

from pagewright.protection import EncryptionValues, PdfProtection, Permission, rc4

REAL_O_VALUE = bytes(
    [
        0xBB, 0xB8, 0x04, 0x6D, 0x96, 0xA9, 0x9A, 0x23, 0x46, 0xA9, 0x41, 0x21, 0x06, 0x8C, 0xAD, 0x4F,
        0x83, 0x5E, 0x5D, 0x0E, 0xCB, 0xB6, 0x20, 0xA8, 0xB7, 0xA3, 0x16, 0x13, 0x3C, 0x8F, 0x02, 0x91,
    ]
)
REAL_U_VALUE = bytes(
    [
        0x19, 0x27, 0x67, 0x2A, 0x4F, 0x28, 0x64, 0xB3, 0x8B, 0x8B, 0x40, 0x44, 0x02, 0xA2, 0x68, 0x72,
        0x2F, 0xE1, 0xB9, 0xF8, 0x04, 0x24, 0x81, 0x0E, 0xE8, 0x84, 0xD8, 0x30, 0xD5, 0xE9, 0x8F, 0x24,
    ]
)
REAL_OBJ_KEY_4 = bytes([0xB3, 0x09, 0xE6, 0x55, 0xD8, 0x23, 0xBF, 0xBB, 0xC5, 0xDF])
REAL_OBJ_KEY_5 = bytes([0xC4, 0x2C, 0x3E, 0x35, 0x92, 0xBE, 0x5E, 0x25, 0xDD, 0x1B])

PERMS = Permission.PRINT | Permission.COPY | Permission.MODIFY


@pytest.fixture
def protection():
    pp = PdfProtection()
    pp.set_protection(PERMS, b"5555", b"1234")
    return pp


def test_o_value(protection):
    assert protection.o_value == REAL_O_VALUE


def test_u_value(protection):
    assert protection.u_value == REAL_U_VALUE


def test_p_value(protection):
    assert protection.p_value == -36


def test_object_keys(protection):
    assert protection.object_key(4) == REAL_OBJ_KEY_4
    assert protection.object_key(5) == REAL_OBJ_KEY_5


def test_encryption_values(protection):
    assert protection.encryption_values() == EncryptionValues(REAL_O_VALUE, REAL_U_VALUE, -36)


def test_encrypt_round_trip(protection):
    data = b"stream content"
    encrypted = protection.encrypt(4, data)
    assert encrypted != data
    assert len(encrypted) == len(data)
    assert protection.encrypt(4, encrypted) == data


def test_random_owner_when_empty():
    pp = PdfProtection()
    pp.set_protection(PERMS, b"5555", b"")
    assert pp.p_value == -36
    assert len(pp.o_value) == 32
    assert len(pp.u_value) == 32


@pytest.mark.parametrize(
    "permissions, expected",
    [
        (Permission.PRINT | Permission.MODIFY | Permission.COPY | Permission.ANNOT_FORMS, -4),
        (Permission.PRINT, -60),
    ],
)
def test_permissions_give_p_value(permissions, expected):
    pp = PdfProtection()
    pp.set_protection(permissions, b"user", b"owner")
    assert pp.p_value == expected


def test_rc4_known_vector():
    assert rc4(b"Key", b"Plaintext") == bytes.fromhex("BBF316E8D940AF0AD3")


def test_rc4_round_trip():
    key = b"some key"
    assert rc4(key, rc4(key, b"hello world")) == b"hello world"


def test_rc4_rejects_empty_key():
    with pytest.raises(ValueError):
        rc4(b"", b"data")