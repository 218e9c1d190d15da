import pytest

from hdsigner.exceptions import ValidationError
from hdsigner.utils.encoding import (
    to_hex, from_hex, to_base64, from_base64, sha256, ripemd160, hash160,
    hmac_sha512, hmac_sha256, pbkdf2, convert_bits, to_bech32, from_bech32,
    raw_secp256k1_pubkey_to_raw_address, encode_varint, decode_varint,
    encode_protobuf_field,
)


def test_hex():
    assert to_hex(b"\x00\x01\xff") == "0001ff"
    assert from_hex("0001FF") == b"\x00\x01\xff"
    assert from_hex("") == b""
    with pytest.raises(ValidationError):
        from_hex("abc")
    with pytest.raises(ValidationError):
        from_hex("abcdefgh")
    with pytest.raises(ValidationError):
        from_hex("0x00")
    with pytest.raises(ValidationError):
        from_hex("abc\n")
    with pytest.raises(ValidationError):
        from_hex("ab\n")
    with pytest.raises(ValidationError):
        from_hex(b"abcd")


def test_base64():
    assert to_base64(b"hello") == "aGVsbG8="
    assert from_base64("aGVsbG8=") == b"hello"
    with pytest.raises(ValidationError):
        from_base64("aGVsbG8")
    with pytest.raises(ValidationError):
        from_base64("a$b=")


def test_hashes():
    assert sha256(b"").hex() == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    assert ripemd160(b"").hex() == "9c1185a5c5e9fc54612808977ee8f548b2258d31"
    assert hash160(b"").hex() == "b472a266d0bd89c13706a4132ccfb16f7c3b9fcb"


def test_hmac():
    # RFC 4231 test case 2
    key = "Jefe"
    data = b"what do ya want for nothing?"
    assert hmac_sha256(key, data).hex() == (
        "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    )
    assert hmac_sha512(key, data).hex() == (
        "164b7a7bfcf819e2e395fbe73b56e0a387bd64222e831fd610270cd7ea250554"
        "9758bf75c05a994a6d034f65f8f0e6fdcaeab1a34d4a6b4b636e070a38bce737"
    )
    assert hmac_sha512(b"Jefe", data) == hmac_sha512(key, data)


def test_pbkdf2():
    # RFC 7914 section 11
    assert pbkdf2("passwd", b"salt", 1, 64, "sha256").hex() == (
        "55ac046e56e3089fec1691c22544b605f94185216dde0465e68b9d57c20dacbc"
        "49ca9cccf179b645991664b39d77ef317c71b845b1e30bd509112041d3a19783"
    )
    assert pbkdf2("passwd", b"salt", 1, 64, "SHA-256") == pbkdf2("passwd", b"salt", 1, 64)
    assert len(pbkdf2("password", b"0" * 16)) == 32
    with pytest.raises(ValidationError):
        pbkdf2("password", b"salt", 0)


def test_convert_bits():
    assert convert_bits(b"\xff", 8, 5) == [31, 28]
    assert convert_bits([31, 28], 5, 8, pad=False) == [255]
    with pytest.raises(ValidationError):
        convert_bits([31, 31], 5, 8, pad=False)
    with pytest.raises(ValidationError):
        convert_bits([32], 5, 8)


def test_bech32_known_value():
    assert to_bech32("cosmos", bytes([0, 1, 2, 3, 4])) == "cosmos1qqqsyqcy3yh3ts"
    assert from_bech32("cosmos1qqqsyqcy3yh3ts") == ("cosmos", bytes([0, 1, 2, 3, 4]))
    assert from_bech32("COSMOS1QQQSYQCY3YH3TS") == ("cosmos", bytes([0, 1, 2, 3, 4]))


def test_bech32_invalid():
    with pytest.raises(ValidationError):
        from_bech32("cosmos1qqqsyqcy3yh3tt")
    with pytest.raises(ValidationError):
        from_bech32("Cosmos1qqqsyqcy3yh3ts")
    with pytest.raises(ValidationError):
        from_bech32("cosmosqqqsyqcy3yh3ts")
    with pytest.raises(ValidationError):
        from_bech32("cosmos1qqqsyqcy3yh3tb")
    with pytest.raises(ValidationError):
        from_bech32("x1abc")
    with pytest.raises(ValidationError):
        to_bech32("cosmos", b"\x00" * 60)
    with pytest.raises(ValidationError):
        to_bech32("", b"\x00")


def test_raw_address():
    pubkey = from_hex("0223aa679d6d5344e201e0df9f02ab15a84726eee0dfb4e953c46a9e2cb52349dc")
    raw = raw_secp256k1_pubkey_to_raw_address(pubkey)
    assert raw == hash160(pubkey)
    assert to_bech32("noble", raw) == "noble15yk64u7zc9g9k2yr2wmzeva5qgwxps6yw368ps"
    with pytest.raises(ValidationError):
        raw_secp256k1_pubkey_to_raw_address(b"\x04" + b"\x00" * 64)


def test_varint():
    assert encode_varint(0) == b"\x00"
    assert encode_varint(1) == b"\x01"
    assert encode_varint(300) == b"\xac\x02"
    assert decode_varint(b"\xac\x02") == (300, 2)
    assert decode_varint(b"\x00\xac\x02", 1) == (300, 3)
    assert decode_varint(encode_varint(2**64 - 1)) == (2**64 - 1, 10)
    with pytest.raises(ValidationError):
        encode_varint(-1)
    with pytest.raises(ValidationError):
        encode_varint(2**64)
    with pytest.raises(ValidationError):
        decode_varint(b"\x80")


def test_protobuf_field():
    assert encode_protobuf_field(1, b"\x00") == b"\x0a\x01\x00"
    assert encode_protobuf_field(3, "noble") == b"\x1a\x05noble"
    assert encode_protobuf_field(4, 1) == b"\x20\x01"
    assert encode_protobuf_field(1, b"") == b""
    assert encode_protobuf_field(3, "") == b""
    assert encode_protobuf_field(4, 0) == b""


def test_protobuf_field_rejects_unsupported_types():
    with pytest.raises(ValidationError):
        encode_protobuf_field(4, True)
    with pytest.raises(ValidationError):
        encode_protobuf_field(3, 1.5)
    with pytest.raises(ValidationError):
        encode_protobuf_field(3, None)
