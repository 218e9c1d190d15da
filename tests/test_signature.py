import pytest

from hdsigner.crypto.signature import (
    Secp256k1Signature, ExtendedSecp256k1Signature,
    parse_der_signature, encode_der_signature,
)
from hdsigner.exceptions import SignatureError


def test_der_signature_roundtrip():
    sig = encode_der_signature(b"\x01", b"\x02")
    assert sig == bytes.fromhex("3006020101020102")
    assert parse_der_signature(sig) == (b"\x01", b"\x02")


def test_der_high_bit_gets_zero_prefix():
    r = b"\x80" + b"\x11" * 31
    s = b"\x7f" + b"\x22" * 31
    der = encode_der_signature(r, s)
    assert der[:4] == bytes([0x30, 0x45, 0x02, 0x21])
    assert der[4] == 0x00
    assert Secp256k1Signature.from_der(der) == Secp256k1Signature(r, s)


def test_der_invalid():
    valid = encode_der_signature(b"\x01", b"\x02")
    with pytest.raises(SignatureError):
        parse_der_signature(b"\x31" + valid[1:])
    with pytest.raises(SignatureError):
        parse_der_signature(valid + b"\x00")
    with pytest.raises(SignatureError):
        parse_der_signature(valid[:-1])
    with pytest.raises(SignatureError):
        parse_der_signature(bytes.fromhex("3006030101020102"))
    with pytest.raises(SignatureError):
        parse_der_signature(b"")


def test_components_must_be_unpadded():
    with pytest.raises(SignatureError):
        Secp256k1Signature(b"\x00\x01", b"\x01")
    with pytest.raises(SignatureError):
        Secp256k1Signature(b"", b"\x01")
    with pytest.raises(SignatureError):
        Secp256k1Signature(b"\x01" * 33, b"\x01")


def test_fixed_length():
    data = b"\x00" * 31 + b"\x05" + b"\x00" * 30 + b"\x01\x02"
    sig = Secp256k1Signature.from_fixed_length(data)
    assert sig.r() == b"\x05"
    assert sig.s() == b"\x01\x02"
    assert sig.r_int == 5
    assert sig.s_int == 258
    assert sig.to_fixed_length() == data
    with pytest.raises(SignatureError):
        Secp256k1Signature.from_fixed_length(data[:63])


def test_padding_length_too_small():
    sig = Secp256k1Signature(b"\x01\x02", b"\x03")
    assert sig.r(4) == b"\x00\x00\x01\x02"
    with pytest.raises(SignatureError):
        sig.r(1)


def test_extended_signature():
    data = b"\x11" * 32 + b"\x22" * 32 + b"\x01"
    sig = ExtendedSecp256k1Signature.from_fixed_length(data)
    assert sig.recovery == 1
    assert sig.to_fixed_length() == data
    with pytest.raises(SignatureError):
        ExtendedSecp256k1Signature.from_fixed_length(data[:64])
    with pytest.raises(SignatureError):
        ExtendedSecp256k1Signature(b"\x11", b"\x22", 4)
    with pytest.raises(SignatureError):
        ExtendedSecp256k1Signature(b"\x11", b"\x22", -1)
