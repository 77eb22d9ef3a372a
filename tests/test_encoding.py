import hashlib

from Tree_Digest.core.encoding import is_hex_digest, to_hex_string


def test_hex_is_lowercase_high_nibble_first():
    assert to_hex_string(b"\x00\x0f\xf0\xff\xab") == "000ff0ffab"


def test_hex_empty_input():
    assert to_hex_string(b"") == ""
    assert to_hex_string(None) == ""


def test_hex_matches_every_byte_value():
    data = bytes(range(256))
    assert to_hex_string(data) == data.hex()


def test_hex_accepts_buffer_types():
    digest = hashlib.sha256(b"abc").digest()

    assert to_hex_string(bytearray(digest)) == hashlib.sha256(b"abc").hexdigest()
    assert to_hex_string(memoryview(digest)) == hashlib.sha256(b"abc").hexdigest()


def test_is_hex_digest():
    assert is_hex_digest("00ff")
    assert is_hex_digest("ab" * 64, digest_size=64)

    assert not is_hex_digest("")
    assert not is_hex_digest("00FF")
    assert not is_hex_digest("abc")
    assert not is_hex_digest("zz")
    assert not is_hex_digest("ab" * 32, digest_size=64)
